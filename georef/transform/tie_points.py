# -*- coding: utf-8 -*-
"""
Tie-Point Mapping - Raster/model mapping from a sparse set of tie points.

GeoTIFF allows any number of ModelTiePointTag correspondences without
saying how to map coordinates that fall between them. ``TiePointMapping``
offers two policies:

- ``nearest`` (default): the counterpart of the closest tie point,
  found with a KD-tree in the source space.
- ``linear``: piecewise-linear interpolation on a Delaunay triangulation,
  as used for GCP geolocation of SAR imagery. Coordinates outside the
  convex hull of the tie points fall back to ``nearest``.

With either policy a coordinate that exactly hits a tie point returns that
tie point's counterpart unchanged.

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

# Standard library
import logging
from typing import Dict, Optional, Tuple

# Third-party
import numpy as np
from scipy.interpolate import LinearNDInterpolator
from scipy.spatial import QhullError, cKDTree

# GeoRef internal
from georef.exceptions import GeolocationError
from georef.transform.models import TiePoints
from georef.utils import interpolation_error_metrics
from georef.vocabulary import TiePointInterpolation

logger = logging.getLogger(__name__)


def _build_linear(
    points: np.ndarray,
    values: np.ndarray,
    label: str,
) -> Optional[LinearNDInterpolator]:
    """Triangulate *points*, or return None when they span no area."""
    try:
        return LinearNDInterpolator(points, values, fill_value=np.nan)
    except (QhullError, ValueError) as exc:
        logger.warning(
            "Cannot triangulate %d tie points in %s space, using nearest: %s",
            len(points), label, exc,
        )
        return None


class TiePointMapping:
    """
    Map coordinates through a sparse set of tie points.

    Parameters
    ----------
    tie_points : TiePoints
        Validated tie-point set.
    interpolation : TiePointInterpolation, default=NEAREST
        Mapping policy between tie points.

    Attributes
    ----------
    n_tie_points : int
        Number of tie points.
    interpolation : TiePointInterpolation
        Active policy.
    """

    def __init__(
        self,
        tie_points: TiePoints,
        interpolation: TiePointInterpolation = TiePointInterpolation.NEAREST,
    ) -> None:
        table = tie_points.as_array()
        self.tie_points = tie_points
        self.n_tie_points = len(table)
        self.interpolation = interpolation

        self._raster = table[:, 0:2]
        self._model = table[:, 3:5]
        self._model_z = table[:, 5]

        self._raster_tree = cKDTree(self._raster)
        self._model_tree = cKDTree(self._model)

        self._forward = None
        self._inverse = None
        if interpolation is TiePointInterpolation.LINEAR:
            self._forward = _build_linear(
                self._raster, table[:, 3:6], 'raster'
            )
            self._inverse = _build_linear(
                self._model, self._raster, 'model'
            )

    def _map(
        self,
        points: np.ndarray,
        tree: cKDTree,
        targets: np.ndarray,
        interpolator: Optional[LinearNDInterpolator],
    ) -> np.ndarray:
        """Map ``(N, 2)`` *points* to rows of *targets* under the policy."""
        _, nearest = tree.query(points)
        result = targets[nearest].copy()
        if interpolator is None:
            return result

        exact = np.all(points == tree.data[nearest], axis=1)
        interpolated = interpolator(points)
        inside = np.all(np.isfinite(interpolated), axis=1) & ~exact
        result[inside] = interpolated[inside]

        outside = int(np.count_nonzero(~inside & ~exact))
        if outside:
            logger.warning(
                "%d point(s) outside the tie-point hull, using nearest",
                outside,
            )
        return result

    def to_model(
        self,
        cols: np.ndarray,
        rows: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Map raster positions to model coordinates.

        Parameters
        ----------
        cols, rows : np.ndarray
            Raster columns and rows (1D float64).

        Returns
        -------
        Tuple[np.ndarray, np.ndarray, np.ndarray]
            ``(xs, ys, zs)`` model coordinates.
        """
        targets = np.column_stack([self._model, self._model_z])
        mapped = self._map(
            np.column_stack([cols, rows]),
            self._raster_tree, targets, self._forward,
        )
        return mapped[:, 0], mapped[:, 1], mapped[:, 2]

    def to_raster(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Map model coordinates to continuous raster positions.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(cols, rows)``, not yet rounded to pixel indices.
        """
        mapped = self._map(
            np.column_stack([xs, ys]),
            self._model_tree, self._raster, self._inverse,
        )
        return mapped[:, 0], mapped[:, 1]

    def interpolation_error(self) -> Dict[str, float]:
        """
        Estimate mapping error by leave-one-out cross-validation.

        Each tie point is predicted from all the others with the same
        policy and compared with its stored model coordinate.

        Returns
        -------
        Dict[str, float]
            'mean_error', 'rms_error', 'max_error' and 'std_error' in model
            units.

        Raises
        ------
        GeolocationError
            If fewer than 2 tie points are available.
        """
        if self.n_tie_points < 2:
            raise GeolocationError(
                "At least 2 tie points required for cross-validation, "
                f"got {self.n_tie_points}"
            )

        table = self.tie_points.as_array()
        predicted = np.empty((self.n_tie_points, 2))
        for i in range(self.n_tie_points):
            subset = np.delete(table, i, axis=0)
            held_out = TiePointMapping(
                TiePoints(tuple(subset.ravel().tolist())), self.interpolation
            )
            xs, ys, _ = held_out.to_model(
                table[i:i + 1, 0], table[i:i + 1, 1]
            )
            predicted[i] = (xs[0], ys[0])

        return interpolation_error_metrics(self._model, predicted)
