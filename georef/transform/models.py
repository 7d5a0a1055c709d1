# -*- coding: utf-8 -*-
"""
Coordinate Transform Models - The three shapes of GeoTIFF georeferencing.

A raster declares its raster-to-model mapping in exactly one of three ways:

- ``TiePointAndPixelScale``: one tie point anchoring the grid plus a
  per-axis pixel scale.
- ``TiePoints``: a sparse set of raster/model correspondences.
- ``AffineTransform``: a row-major 4x4 homogeneous matrix.

``CoordinateTransform`` is the closed union of these. All three are frozen
dataclasses holding tuples so a validated transform can be shared between
threads without copying.

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
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple, Union

# Third-party
import numpy as np

# GeoRef internal
from georef.vocabulary import TransformKind


@dataclass(frozen=True)
class TiePoint:
    """One raster/model correspondence ``[I, J, K, X, Y, Z]``.

    Attributes
    ----------
    i, j, k : float
        Raster column, row and elevation index.
    x, y, z : float
        Corresponding model coordinates.
    """

    i: float
    j: float
    k: float
    x: float
    y: float
    z: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> 'TiePoint':
        """Build a tie point from one 6-value ModelTiePointTag group."""
        i, j, k, x, y, z = (float(v) for v in values)
        return cls(i, j, k, x, y, z)

    @property
    def raster(self) -> Tuple[float, float]:
        """Raster ``(column, row)``."""
        return (self.i, self.j)

    @property
    def model(self) -> Tuple[float, float]:
        """Model ``(x, y)``."""
        return (self.x, self.y)


@dataclass(frozen=True)
class TiePointAndPixelScale:
    """Single tie point anchoring a uniform grid of ``pixel_scale`` spacing.

    Attributes
    ----------
    tie_point : TiePoint
        Grid anchor.
    pixel_scale : Tuple[float, float, float]
        ``(ScaleX, ScaleY, ScaleZ)`` model units per pixel.
    """

    tie_point: TiePoint
    pixel_scale: Tuple[float, float, float]

    @property
    def kind(self) -> TransformKind:
        return TransformKind.TIE_POINT_AND_PIXEL_SCALE


@dataclass(frozen=True)
class TiePoints:
    """Sparse set of tie points, flattened as repeating 6-value groups.

    Attributes
    ----------
    values : Tuple[float, ...]
        ModelTiePointTag values; the length is a positive multiple of 6.
    """

    values: Tuple[float, ...]

    @property
    def kind(self) -> TransformKind:
        return TransformKind.TIE_POINTS

    @property
    def count(self) -> int:
        """Number of tie points."""
        return len(self.values) // 6

    def groups(self) -> Iterator[TiePoint]:
        """Iterate over the tie points in tag order."""
        for start in range(0, len(self.values), 6):
            yield TiePoint.from_sequence(self.values[start:start + 6])

    def as_array(self) -> np.ndarray:
        """Return tie points as an ``(N, 6)`` float64 array."""
        return np.asarray(self.values, dtype=np.float64).reshape(-1, 6)


@dataclass(frozen=True)
class AffineTransform:
    """Row-major 4x4 matrix mapping ``[I, J, K, 1]`` to ``[X, Y, Z, 1]``.

    Attributes
    ----------
    matrix : Tuple[float, ...]
        The 16 ModelTransformationTag values.
    """

    matrix: Tuple[float, ...]

    @property
    def kind(self) -> TransformKind:
        return TransformKind.AFFINE_TRANSFORM

    def as_array(self) -> np.ndarray:
        """Return the matrix as a ``(4, 4)`` float64 array."""
        return np.asarray(self.matrix, dtype=np.float64).reshape(4, 4)


CoordinateTransform = Union[TiePointAndPixelScale, TiePoints, AffineTransform]
