# -*- coding: utf-8 -*-
"""
GeoRef Utilities - Helper functions for raster/model coordinate mapping.

Rounding of continuous raster positions to pixel indices, input coercion,
perimeter sampling for footprints, bounding boxes, and interpolation error
metrics.

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

from typing import Any, Dict, List, Tuple

import numpy as np

from georef.exceptions import GeolocationError, ValidationError

# 2**63: the first float64 value that no longer fits in int64.
_INDEX_LIMIT = float(np.iinfo(np.int64).max) + 1.0


def round_half_away_from_zero(values: np.ndarray) -> np.ndarray:
    """
    Round to the nearest integer, moving exact halves away from zero.

    ``numpy.round`` rounds halves to even; raster indices use the
    conventional 2.5 -> 3, -2.5 -> -3 rule instead.

    Parameters
    ----------
    values : np.ndarray
        Float values.

    Returns
    -------
    np.ndarray
        Rounded float64 values.
    """
    values = np.asarray(values, dtype=np.float64)
    # Adding 0.5 before flooring rounds 0.49999999999999994 up; compare the
    # fractional part instead.
    whole = np.trunc(values)
    fraction = np.abs(values - whole)
    return whole + np.sign(values) * (fraction >= 0.5)


def to_pixel_indices(values: np.ndarray) -> np.ndarray:
    """
    Convert continuous raster positions to unsigned pixel indices.

    Rounds half away from zero, then clamps negative results to 0.

    Parameters
    ----------
    values : np.ndarray
        Continuous raster positions.

    Returns
    -------
    np.ndarray
        int64 pixel indices, all >= 0.

    Raises
    ------
    GeolocationError
        If any position is NaN, infinite, or too large for an int64 index.
    """
    values = np.asarray(values, dtype=np.float64)
    if not np.all(np.isfinite(values)):
        raise GeolocationError(
            "Raster position is not finite; the transform cannot map "
            "this model coordinate"
        )
    rounded = np.maximum(round_half_away_from_zero(values), 0.0)
    if np.any(rounded >= _INDEX_LIMIT):
        raise GeolocationError(
            f"Raster position {float(rounded.max())!r} exceeds the largest "
            f"representable pixel index"
        )
    return rounded.astype(np.int64)


def as_pixel_array(values: Any, name: str) -> np.ndarray:
    """
    Coerce raster indices to a 1D float64 array, rejecting invalid values.

    Raises
    ------
    ValidationError
        If any value is negative, non-integral, or not finite.
    """
    arr = np.atleast_1d(np.asarray(values, dtype=np.float64))
    if arr.ndim != 1:
        raise ValidationError(f"{name} must be 1D, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValidationError(f"{name} must be finite")
    if np.any(arr < 0):
        raise ValidationError(f"{name} must be non-negative pixel indices")
    if np.any(arr != np.floor(arr)):
        raise ValidationError(f"{name} must be integer pixel indices")
    return arr


def as_model_array(values: Any, name: str) -> np.ndarray:
    """
    Coerce model coordinates to a 1D float64 array of finite values.

    Raises
    ------
    ValidationError
        If any value is NaN or infinite.
    """
    arr = np.atleast_1d(np.asarray(values, dtype=np.float64))
    if arr.ndim != 1:
        raise ValidationError(f"{name} must be 1D, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValidationError(f"{name} must be finite")
    return arr


def sample_raster_perimeter(
    shape: Tuple[int, int],
    samples_per_edge: int = 10
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate integer pixel samples along the raster perimeter.

    Parameters
    ----------
    shape : Tuple[int, int]
        Raster shape (rows, cols).
    samples_per_edge : int, default=10
        Number of sample points per edge.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        (cols, rows) arrays walking clockwise from the top-left corner.
    """
    rows, cols = shape
    if rows < 1 or cols < 1:
        raise ValidationError(f"Raster shape must be positive, got {shape}")

    last_row = rows - 1
    last_col = cols - 1

    edge_cols = np.round(np.linspace(0, last_col, samples_per_edge))
    edge_rows = np.round(np.linspace(0, last_row, samples_per_edge))

    all_cols = np.concatenate([
        edge_cols,                                   # top
        np.full(samples_per_edge, last_col),         # right
        edge_cols[::-1],                             # bottom
        np.zeros(samples_per_edge),                  # left
    ])
    all_rows = np.concatenate([
        np.zeros(samples_per_edge),
        edge_rows,
        np.full(samples_per_edge, last_row),
        edge_rows[::-1],
    ])

    return all_cols, all_rows


def bounds_from_points(
    points: List[Tuple[float, float]]
) -> Tuple[float, float, float, float]:
    """
    Calculate bounding box from model coordinates.

    Parameters
    ----------
    points : List[Tuple[float, float]]
        List of (x, y) tuples.

    Returns
    -------
    Tuple[float, float, float, float]
        (min_x, min_y, max_x, max_y) bounding box.
    """
    if not points:
        raise ValidationError("No points provided")

    points_array = np.array(points, dtype=np.float64)
    xs = points_array[:, 0]
    ys = points_array[:, 1]

    return (float(np.min(xs)), float(np.min(ys)),
            float(np.max(xs)), float(np.max(ys)))


def interpolation_error_metrics(
    true_values: np.ndarray,
    interpolated_values: np.ndarray
) -> Dict[str, float]:
    """
    Calculate error metrics for interpolation accuracy.

    Errors are Euclidean distances between matching rows of the two
    ``(N, 2)`` arrays.

    Returns
    -------
    Dict[str, float]
        'mean_error', 'rms_error', 'max_error' and 'std_error'.
    """
    diffs = np.asarray(true_values, dtype=np.float64) - np.asarray(
        interpolated_values, dtype=np.float64
    )
    errors = np.hypot(diffs[:, 0], diffs[:, 1])

    return {
        'mean_error': float(np.mean(errors)),
        'rms_error': float(np.sqrt(np.mean(errors**2))),
        'max_error': float(np.max(errors)),
        'std_error': float(np.std(errors))
    }
