# -*- coding: utf-8 -*-
"""
GeoRef - Raster/model coordinate resolution for georeferenced rasters.

Resolves the GeoTIFF georeferencing tags (ModelPixelScaleTag,
ModelTiePointTag, ModelTransformationTag) of a raster into a single
validated transform, and maps pixel coordinates to model coordinates and
back. Coordinate reference system handling is left to other libraries.

Dependencies
------------
numpy
scipy

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

__version__ = "0.1.0"

from georef.exceptions import (
    GeorefError,
    ValidationError,
    MalformedTagError,
    GeolocationError,
    SingularTransformError,
    DependencyError,
)
from georef.vocabulary import (
    GeoTiffTag,
    TransformKind,
    TiePointInterpolation,
)
from georef.transform import (
    AffineTransform,
    CoordinateTransform,
    RasterTransformer,
    TiePoint,
    TiePointAndPixelScale,
    TiePoints,
    from_tag_data,
    from_tags,
)

__all__ = [
    'GeorefError',
    'ValidationError',
    'MalformedTagError',
    'GeolocationError',
    'SingularTransformError',
    'DependencyError',
    'GeoTiffTag',
    'TransformKind',
    'TiePointInterpolation',
    'AffineTransform',
    'CoordinateTransform',
    'RasterTransformer',
    'TiePoint',
    'TiePointAndPixelScale',
    'TiePoints',
    'from_tag_data',
    'from_tags',
]
