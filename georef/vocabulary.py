# -*- coding: utf-8 -*-
"""
GeoRef Vocabulary - Enumerations shared across the package.

Names the GeoTIFF tags that carry georeferencing, the three shapes of
georeferencing a raster can declare, and the interpolation methods
available for sparse tie-point sets.

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

from enum import Enum, IntEnum


class GeoTiffTag(IntEnum):
    """TIFF tag codes holding raster-to-model georeferencing.

    The enum member name is the tag name used in error messages.
    """

    ModelPixelScaleTag = 33550
    ModelTiePointTag = 33922
    ModelTransformationTag = 34264


class TransformKind(Enum):
    """Active representation of a raster's coordinate transform."""

    TIE_POINT_AND_PIXEL_SCALE = "tie_point_and_pixel_scale"
    TIE_POINTS = "tie_points"
    AFFINE_TRANSFORM = "affine_transform"


class TiePointInterpolation(Enum):
    """How a sparse tie-point set maps coordinates between tie points.

    ``NEAREST`` returns the counterpart of the closest tie point.
    ``LINEAR`` interpolates on a Delaunay triangulation of the tie points.
    """

    NEAREST = "nearest"
    LINEAR = "linear"
