# -*- coding: utf-8 -*-
"""
Affine Matrix Helpers - Homogeneous 4x4 products and checked inversion.

GeoTIFF stores ModelTransformationTag as a row-major 4x4 matrix. For 2D
rasters the third row and column are usually zero, which makes the full
matrix singular even though the planar mapping is perfectly invertible.
``planar_affine`` extracts the 3x3 planar part (rows and columns 0, 1 and
3) so the 2D inverse can be computed regardless.

Singularity is judged from the singular values: a matrix is singular when
its smallest singular value is at or below ``tolerance`` times its largest.

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

# Third-party
import numpy as np

# GeoRef internal
from georef.exceptions import SingularTransformError

_PLANAR_INDEX = [0, 1, 3]


def is_singular(matrix: np.ndarray, tolerance: float = 1e-12) -> bool:
    """
    Check whether a square matrix is numerically non-invertible.

    Parameters
    ----------
    matrix : np.ndarray
        Square float matrix.
    tolerance : float, default=1e-12
        Relative threshold on the smallest singular value.

    Returns
    -------
    bool
    """
    if not np.all(np.isfinite(matrix)):
        return True
    singular_values = np.linalg.svd(matrix, compute_uv=False)
    largest = singular_values[0]
    if largest == 0.0:
        return True
    return bool(singular_values[-1] <= tolerance * largest)


def invert_matrix(matrix: np.ndarray, tolerance: float = 1e-12) -> np.ndarray:
    """
    Invert a square matrix, refusing singular input.

    Parameters
    ----------
    matrix : np.ndarray
        Square float matrix.
    tolerance : float, default=1e-12
        Relative singular-value threshold (see ``is_singular``).

    Returns
    -------
    np.ndarray
        The inverse.

    Raises
    ------
    SingularTransformError
        If the matrix is singular within *tolerance*.
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    if is_singular(matrix, tolerance):
        raise SingularTransformError(
            f"Singular transform: {matrix.shape[0]}x{matrix.shape[1]} "
            f"matrix is not invertible"
        )
    return np.linalg.inv(matrix)


def planar_affine(matrix: np.ndarray) -> np.ndarray:
    """
    Reduce a 4x4 raster-to-model matrix to its 3x3 planar affine.

    The result maps ``[I, J, 1]`` to ``[X, Y, w]`` with the elevation index
    fixed at 0.
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    return matrix[np.ix_(_PLANAR_INDEX, _PLANAR_INDEX)]


def apply_homogeneous(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    """
    Multiply homogeneous column vectors and normalize by ``w``.

    Parameters
    ----------
    matrix : np.ndarray
        ``(n, n)`` matrix.
    points : np.ndarray
        ``(n, N)`` homogeneous points, last row ``w``.

    Returns
    -------
    np.ndarray
        ``(n - 1, N)`` Cartesian points.

    Raises
    ------
    SingularTransformError
        If any result lies at infinity (``w == 0``).
    """
    result = matrix @ points
    w = result[-1]
    if np.any(w == 0.0):
        raise SingularTransformError(
            "Singular transform: homogeneous coordinate w is zero"
        )
    return result[:-1] / w
