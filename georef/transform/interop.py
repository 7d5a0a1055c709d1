# -*- coding: utf-8 -*-
"""
Rasterio Interop - Convert between CoordinateTransform and rasterio Affine.

rasterio (and GDAL) describe north-up and rotated grids with a
six-parameter affine::

    x = c + col * a + row * b
    y = f + col * d + row * e

Tie-point-and-scale and planar 4x4 transforms convert to that form
exactly. Sparse tie-point sets have no affine equivalent.

Dependencies
------------
rasterio

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

# Standard library
from typing import TYPE_CHECKING

# Third-party
import numpy as np

# GeoRef internal
from georef.exceptions import GeolocationError
from georef.transform._backend import require_rasterio
from georef.transform.matrix import planar_affine
from georef.transform.models import (
    AffineTransform,
    CoordinateTransform,
    TiePointAndPixelScale,
    TiePoints,
)

if TYPE_CHECKING:
    from rasterio.transform import Affine


def to_affine(transform: CoordinateTransform) -> 'Affine':
    """Express a coordinate transform as a rasterio ``Affine``.

    Parameters
    ----------
    transform : CoordinateTransform
        Validated transform.

    Returns
    -------
    rasterio.transform.Affine

    Raises
    ------
    DependencyError
        If rasterio is not installed.
    GeolocationError
        For ``TiePoints``, or a 4x4 matrix with projective terms.

    Examples
    --------
    >>> from georef.transform.builder import from_tag_data
    >>> tps = from_tag_data([2.0, 2.0, 0.0], [0, 0, 0, 100.0, 200.0, 0.0], None)
    >>> to_affine(tps)
    Affine(2.0, 0.0, 100.0,
           0.0, -2.0, 200.0)
    """
    require_rasterio()
    from rasterio.transform import Affine

    if isinstance(transform, TiePointAndPixelScale):
        tie = transform.tie_point
        sx, sy, _ = transform.pixel_scale
        return Affine(sx, 0.0, tie.x - tie.i * sx,
                      0.0, -sy, tie.y + tie.j * sy)
    if isinstance(transform, AffineTransform):
        planar = planar_affine(transform.as_array())
        if not np.array_equal(planar[2], [0.0, 0.0, 1.0]):
            raise GeolocationError(
                "Transformation matrix has projective terms and cannot be "
                "expressed as a six-parameter affine"
            )
        return Affine(planar[0, 0], planar[0, 1], planar[0, 2],
                      planar[1, 0], planar[1, 1], planar[1, 2])
    if isinstance(transform, TiePoints):
        raise GeolocationError(
            f"{transform.count} sparse tie points have no affine equivalent"
        )
    raise TypeError(
        f"Unsupported coordinate transform {type(transform).__name__}"
    )


def from_affine(affine: 'Affine') -> AffineTransform:
    """Build a 4x4 ``AffineTransform`` from a rasterio ``Affine``.

    The elevation row and column are left zero, matching the layout GeoTIFF
    writers use for 2D rasters.

    Raises
    ------
    DependencyError
        If rasterio is not installed.
    TypeError
        If *affine* is not a ``rasterio.transform.Affine``.
    """
    require_rasterio()
    from rasterio.transform import Affine

    if not isinstance(affine, Affine):
        raise TypeError(
            f"affine must be a rasterio.transform.Affine instance, "
            f"got {type(affine).__name__}"
        )

    a, b, c = float(affine.a), float(affine.b), float(affine.c)
    d, e, f = float(affine.d), float(affine.e), float(affine.f)
    return AffineTransform((
        a, b, 0.0, c,
        d, e, 0.0, f,
        0.0, 0.0, 0.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ))
