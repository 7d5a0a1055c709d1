# -*- coding: utf-8 -*-
"""
Transform Module - Raster/model coordinate transforms from GeoTIFF tags.

Validates the GeoTIFF georeferencing tags into one of three transform
shapes and maps coordinates between raster pixels and model space.

Key Classes
-----------
- TiePointAndPixelScale, TiePoints, AffineTransform: the transform shapes
- RasterTransformer: pixel <-> model mapping for one raster
- TiePointMapping: sparse tie-point mapping (nearest / linear)

Usage
-----
    >>> from georef.transform import RasterTransformer
    >>>
    >>> geo = RasterTransformer.from_tag_data(
    ...     pixel_scale=[2.0, 2.0, 0.0],
    ...     tie_points=[0, 0, 0, 100.0, 200.0, 0.0],
    ...     transformation=None,
    ... )
    >>> geo.to_model((10, 10))
    (120.0, 180.0)
    >>> geo.to_raster((120.0, 180.0))
    (10, 10)

Modules
-------
- models: transform shapes
- builder: tag validation
- matrix: 4x4 affine helpers
- tie_points: sparse tie-point mapping
- transformer: RasterTransformer
- interop: rasterio Affine conversion (optional rasterio)

Dependencies
------------
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

from georef.transform.models import (
    AffineTransform,
    CoordinateTransform,
    TiePoint,
    TiePointAndPixelScale,
    TiePoints,
)
from georef.transform.builder import from_tag_data, from_tags
from georef.transform.tie_points import TiePointMapping
from georef.transform.transformer import RasterTransformer

__all__ = [
    'AffineTransform',
    'CoordinateTransform',
    'TiePoint',
    'TiePointAndPixelScale',
    'TiePoints',
    'from_tag_data',
    'from_tags',
    'TiePointMapping',
    'RasterTransformer',
]
