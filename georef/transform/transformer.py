# -*- coding: utf-8 -*-
"""
Raster Transformer - Map pixels to model coordinates and back.

``RasterTransformer`` wraps a validated ``CoordinateTransform`` and maps
raster ``(column, row)`` pixels to model ``(X, Y)`` coordinates and model
coordinates back to pixels, dispatching on the active variant.

Coordinate Conventions
----------------------
- **Raster space:** ``(column, row)`` with ``(0, 0)`` at the top-left pixel;
  rows increase downward.
- **Model space:** ``(X, Y[, Z])``; for tie-point-and-scale rasters X grows
  with the column and Y *decreases* as the row grows
  (``Y = tieY - (row - tieJ) * ScaleY``).
- **Model to raster rounding:** continuous raster positions are rounded
  half away from zero, then negative results are clamped to 0.

Per-variant mapping
-------------------
- ``TiePointAndPixelScale``: linear in each axis; the inverse fails with
  ``GeolocationError`` when ScaleX or ScaleY is zero.
- ``TiePoints``: nearest or linear mapping through ``TiePointMapping``.
- ``AffineTransform``: ``M @ [col, row, 0, 1]``; the inverse inverts the
  planar part of ``M`` (rows/columns 0, 1, 3), the exact inverse of the
  elevation-zero forward mapping. Singular matrices raise
  ``SingularTransformError``.

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
import logging
from typing import Annotated, Any, Dict, Mapping, Optional, Sequence, Tuple

# Third-party
import numpy as np

# GeoRef internal
from georef.exceptions import GeolocationError, ValidationError
from georef.params import Desc, Range, Tunable
from georef.transform import builder
from georef.transform.matrix import (
    apply_homogeneous,
    invert_matrix,
    planar_affine,
)
from georef.transform.models import (
    AffineTransform,
    CoordinateTransform,
    TiePointAndPixelScale,
    TiePoints,
)
from georef.transform.tie_points import TiePointMapping
from georef.utils import (
    as_model_array,
    as_pixel_array,
    bounds_from_points,
    sample_raster_perimeter,
    to_pixel_indices,
)
from georef.vocabulary import TiePointInterpolation, TransformKind

logger = logging.getLogger(__name__)

Array3 = Tuple[np.ndarray, np.ndarray, np.ndarray]


# ---------------------------------------------------------------------------
# TiePointAndPixelScale
# ---------------------------------------------------------------------------

def _tie_point_scale_to_model(
    transform: TiePointAndPixelScale,
    cols: np.ndarray,
    rows: np.ndarray,
    ks: np.ndarray,
) -> Array3:
    tie = transform.tie_point
    sx, sy, sz = transform.pixel_scale
    xs = tie.x + (cols - tie.i) * sx
    ys = tie.y - (rows - tie.j) * sy
    zs = tie.z + (ks - tie.k) * sz
    return xs, ys, zs


def _tie_point_scale_to_raster(
    transform: TiePointAndPixelScale,
    xs: np.ndarray,
    ys: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    tie = transform.tie_point
    sx, sy, _ = transform.pixel_scale
    if sx == 0.0 or sy == 0.0:
        raise GeolocationError(
            f"Cannot map to raster with zero pixel scale "
            f"(ScaleX={sx}, ScaleY={sy})"
        )
    cols = tie.i + (xs - tie.x) / sx
    rows = tie.j - (ys - tie.y) / sy
    return cols, rows


# ---------------------------------------------------------------------------
# AffineTransform
# ---------------------------------------------------------------------------

def _affine_to_model(
    transform: AffineTransform,
    cols: np.ndarray,
    rows: np.ndarray,
    ks: np.ndarray,
) -> Array3:
    homogeneous = np.vstack([cols, rows, ks, np.ones_like(cols)])
    xs, ys, zs = apply_homogeneous(transform.as_array(), homogeneous)
    return xs, ys, zs


def _affine_to_raster(
    transform: AffineTransform,
    xs: np.ndarray,
    ys: np.ndarray,
    tolerance: float,
) -> Tuple[np.ndarray, np.ndarray]:
    inverse = invert_matrix(planar_affine(transform.as_array()), tolerance)
    cols, rows = apply_homogeneous(
        inverse, np.vstack([xs, ys, np.ones_like(xs)])
    )
    return cols, rows


# ---------------------------------------------------------------------------
# Transformer
# ---------------------------------------------------------------------------

class RasterTransformer(Tunable):
    """
    Raster/model coordinate mapping for one georeferenced raster.

    Parameters
    ----------
    transform : CoordinateTransform
        Validated transform, usually from ``from_tag_data``.
    interpolation : TiePointInterpolation or str, default=NEAREST
        Mapping policy for sparse tie points, given as a member or its
        value (``'nearest'`` or ``'linear'``). Ignored by the other
        variants.
    singular_tolerance : float, default=1e-12
        Relative singular-value threshold below which an affine matrix is
        treated as non-invertible.

    Raises
    ------
    TypeError
        If *transform* is not a ``CoordinateTransform`` variant.
    ValidationError
        If a tunable parameter is out of range.

    Examples
    --------
    >>> geo = RasterTransformer.from_tag_data(
    ...     [2.0, 2.0, 0.0], [0, 0, 0, 100.0, 200.0, 0.0], None
    ... )
    >>> geo.to_model((10, 10))
    (120.0, 180.0)
    >>> geo.to_raster((120.0, 180.0))
    (10, 10)
    """

    interpolation: Annotated[
        TiePointInterpolation,
        Desc('Mapping between sparse tie points'),
    ] = TiePointInterpolation.NEAREST

    singular_tolerance: Annotated[
        float,
        Range(min=0.0, max=1.0),
        Desc('Relative singular-value threshold for affine inversion'),
    ] = 1e-12

    def __init__(self, transform: CoordinateTransform, **kwargs: Any) -> None:
        if not isinstance(
            transform, (TiePointAndPixelScale, TiePoints, AffineTransform)
        ):
            raise TypeError(
                f"transform must be a CoordinateTransform variant, "
                f"got {type(transform).__name__}"
            )
        self._init_params(kwargs)
        self.transform = transform

        self._tie_mapping: Optional[TiePointMapping] = None
        if isinstance(transform, TiePoints):
            self._tie_mapping = TiePointMapping(transform, self.interpolation)
        logger.debug(
            "Built %s transformer with %s", transform.kind.value,
            self.get_params(),
        )

    @classmethod
    def from_tag_data(
        cls,
        pixel_scale: Optional[Sequence[float]],
        tie_points: Optional[Sequence[float]],
        transformation: Optional[Sequence[float]],
        **kwargs: Any,
    ) -> 'RasterTransformer':
        """Validate raw tag values and build a transformer.

        Raises
        ------
        MalformedTagError
            If the tag values do not form a valid georeferencing.
        """
        return cls(
            builder.from_tag_data(pixel_scale, tie_points, transformation),
            **kwargs,
        )

    @classmethod
    def from_tags(
        cls,
        tags: Mapping[Any, Any],
        **kwargs: Any,
    ) -> 'RasterTransformer':
        """Build a transformer from a mapping of decoded TIFF tags.

        Keys may be tag names, numeric codes or ``GeoTiffTag`` members.
        """
        return cls(builder.from_tags(tags), **kwargs)

    @property
    def kind(self) -> TransformKind:
        """Active transform variant."""
        return self.transform.kind

    # -----------------------------------------------------------------
    # Variant dispatch (arrays in, arrays out)
    # -----------------------------------------------------------------

    def _model_arrays(
        self,
        cols: np.ndarray,
        rows: np.ndarray,
        ks: np.ndarray,
    ) -> Array3:
        transform = self.transform
        if isinstance(transform, TiePointAndPixelScale):
            return _tie_point_scale_to_model(transform, cols, rows, ks)
        if isinstance(transform, TiePoints):
            return self._tie_mapping.to_model(cols, rows)
        if isinstance(transform, AffineTransform):
            return _affine_to_model(transform, cols, rows, ks)
        raise TypeError(f"Unhandled transform {type(transform).__name__}")

    def _raster_positions(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        transform = self.transform
        if isinstance(transform, TiePointAndPixelScale):
            return _tie_point_scale_to_raster(transform, xs, ys)
        if isinstance(transform, TiePoints):
            return self._tie_mapping.to_raster(xs, ys)
        if isinstance(transform, AffineTransform):
            return _affine_to_raster(
                transform, xs, ys, self.singular_tolerance
            )
        raise TypeError(f"Unhandled transform {type(transform).__name__}")

    # -----------------------------------------------------------------
    # Public mapping
    # -----------------------------------------------------------------

    def to_model(self, coordinate: Sequence[int]) -> Tuple[float, float]:
        """
        Map a raster pixel to model coordinates.

        Parameters
        ----------
        coordinate : Sequence[int]
            Pixel ``(column, row)``; non-negative integers.

        Returns
        -------
        Tuple[float, float]
            Model ``(X, Y)``.

        Raises
        ------
        ValidationError
            If the pixel is negative or not integral.
        GeolocationError
            If an affine matrix maps the pixel to infinity.
        """
        x, y, _ = self.to_model_3d((coordinate[0], coordinate[1]))
        return (x, y)

    def to_model_3d(
        self,
        coordinate: Sequence[int],
    ) -> Tuple[float, float, float]:
        """
        Map a raster pixel, optionally with elevation index, to ``(X, Y, Z)``.

        Parameters
        ----------
        coordinate : Sequence[int]
            ``(column, row)`` or ``(column, row, k)``; ``k`` defaults to 0.

        Returns
        -------
        Tuple[float, float, float]
            Model ``(X, Y, Z)``.
        """
        if len(coordinate) not in (2, 3):
            raise ValidationError(
                f"Raster coordinate must have 2 or 3 values, "
                f"got {len(coordinate)}"
            )
        cols = as_pixel_array(coordinate[0], 'column')
        rows = as_pixel_array(coordinate[1], 'row')
        k = coordinate[2] if len(coordinate) == 3 else 0
        ks = as_pixel_array(k, 'elevation index')

        xs, ys, zs = self._model_arrays(cols, rows, ks)
        return (float(xs[0]), float(ys[0]), float(zs[0]))

    def to_raster(self, coordinate: Sequence[float]) -> Tuple[int, int]:
        """
        Map model coordinates to the nearest raster pixel.

        Parameters
        ----------
        coordinate : Sequence[float]
            Model ``(X, Y)``.

        Returns
        -------
        Tuple[int, int]
            Pixel ``(column, row)``, rounded half away from zero and
            clamped at 0.

        Raises
        ------
        ValidationError
            If the model coordinate is not finite.
        GeolocationError
            If the pixel scale is zero, or the mapped position is not
            finite.
        SingularTransformError
            If the affine matrix cannot be inverted.
        """
        cols, rows = self.to_raster_array(coordinate[0], coordinate[1])
        return (int(cols[0]), int(rows[0]))

    def to_model_array(
        self,
        cols: Any,
        rows: Any,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Vectorized ``to_model``.

        Parameters
        ----------
        cols, rows : array-like
            Pixel columns and rows of equal length.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(xs, ys)`` float64 arrays.
        """
        cols_arr = as_pixel_array(cols, 'cols')
        rows_arr = as_pixel_array(rows, 'rows')
        if cols_arr.shape != rows_arr.shape:
            raise ValidationError(
                f"cols and rows must have the same shape, got "
                f"{cols_arr.shape} and {rows_arr.shape}"
            )
        xs, ys, _ = self._model_arrays(
            cols_arr, rows_arr, np.zeros_like(cols_arr)
        )
        return xs, ys

    def to_raster_array(
        self,
        xs: Any,
        ys: Any,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Vectorized ``to_raster``.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(cols, rows)`` int64 arrays.
        """
        xs_arr = as_model_array(xs, 'xs')
        ys_arr = as_model_array(ys, 'ys')
        if xs_arr.shape != ys_arr.shape:
            raise ValidationError(
                f"xs and ys must have the same shape, got "
                f"{xs_arr.shape} and {ys_arr.shape}"
            )
        cols, rows = self._raster_positions(xs_arr, ys_arr)
        return to_pixel_indices(cols), to_pixel_indices(rows)

    # -----------------------------------------------------------------
    # Footprint
    # -----------------------------------------------------------------

    def footprint(
        self,
        shape: Tuple[int, int],
        samples_per_edge: int = 10,
    ) -> Dict[str, Any]:
        """
        Model-space footprint of a raster of the given shape.

        Parameters
        ----------
        shape : Tuple[int, int]
            Raster shape ``(rows, cols)``.
        samples_per_edge : int, default=10
            Perimeter samples per edge.

        Returns
        -------
        Dict[str, Any]
            - 'type': 'Polygon'
            - 'coordinates': list of ``(x, y)`` tuples along the perimeter
            - 'bounds': ``(min_x, min_y, max_x, max_y)``
        """
        cols, rows = sample_raster_perimeter(shape, samples_per_edge)
        xs, ys = self.to_model_array(cols, rows)
        coords = list(zip(xs.tolist(), ys.tolist()))
        return {
            'type': 'Polygon',
            'coordinates': coords,
            'bounds': bounds_from_points(coords),
        }

    def model_bounds(
        self,
        shape: Tuple[int, int],
    ) -> Tuple[float, float, float, float]:
        """Return ``(min_x, min_y, max_x, max_y)`` of the raster footprint."""
        return self.footprint(shape)['bounds']

    def interpolation_error(self) -> Dict[str, float]:
        """
        Leave-one-out error of the sparse tie-point mapping.

        Raises
        ------
        GeolocationError
            If the transform is not a ``TiePoints`` set.
        """
        if self._tie_mapping is None:
            raise GeolocationError(
                f"Interpolation error is only defined for tie-point sets, "
                f"not {self.kind.value}"
            )
        return self._tie_mapping.interpolation_error()

    def __repr__(self) -> str:
        return (
            f"RasterTransformer(kind={self.kind.value!r}, "
            f"interpolation={self.interpolation.value!r}, "
            f"singular_tolerance={self.singular_tolerance!r})"
        )
