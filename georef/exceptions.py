# -*- coding: utf-8 -*-
"""
GeoRef Exception Hierarchy - Domain-specific exceptions for georeferencing.

Lets callers (typically a TIFF decoder resolving georeferencing for one
image) catch GeoRef errors distinctly from Python built-in exceptions. All
GeoRef exceptions subclass both ``GeorefError`` and the appropriate built-in
exception, so existing ``except ValueError`` handlers keep working.

Two families matter in practice:

- ``MalformedTagError`` is raised while validating the raw GeoTIFF tag
  arrays. It should abort georeferencing for that image only.
- ``GeolocationError`` is raised while mapping coordinates with a
  shape-valid but numerically degenerate transform (zero pixel scale,
  singular matrix).

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""


class GeorefError(Exception):
    """Base exception for all GeoRef errors."""


class ValidationError(GeorefError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for out-of-range tunable parameters, negative pixel indices,
    non-finite model coordinates and other input validation failures.
    """


class MalformedTagError(ValidationError):
    """Malformed georeferencing metadata.

    Raised when the ModelPixelScaleTag, ModelTiePointTag and
    ModelTransformationTag values have the wrong number of elements, are
    present in a conflicting combination, or a required tag is missing.
    The message names the tag and the violated constraint.
    """


class GeolocationError(GeorefError, RuntimeError):
    """Coordinate transformation failure.

    Raised for zero pixel scales, non-finite results and unsupported
    conversions of a valid transform.
    """


class SingularTransformError(GeolocationError):
    """Affine transformation matrix cannot be inverted."""


class DependencyError(GeorefError, ImportError):
    """Missing optional dependency required for a specific module.

    Raised when a module requires an optional package (rasterio) that is
    not installed.
    """
