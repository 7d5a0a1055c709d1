# -*- coding: utf-8 -*-
"""
Affine Matrix Tests - Singularity checks, inversion and planar reduction.

Dependencies
------------
pytest

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

import pytest
import numpy as np

from georef.exceptions import SingularTransformError
from georef.transform.matrix import (
    apply_homogeneous,
    invert_matrix,
    is_singular,
    planar_affine,
)


GEOTIFF_2D = np.array([
    [2.0, 0.5, 0.0, 100.0],
    [0.0, -2.0, 0.0, 200.0],
    [0.0, 0.0, 0.0, 0.0],
    [0.0, 0.0, 0.0, 1.0],
])


class TestSingularity:

    def test_identity(self):
        assert not is_singular(np.eye(4))

    def test_zeros(self):
        assert is_singular(np.zeros((4, 4)))

    def test_geotiff_2d_full_matrix(self):
        """The zero elevation row makes the full 4x4 singular."""
        assert is_singular(GEOTIFF_2D)

    def test_non_finite(self):
        m = np.eye(3)
        m[0, 0] = np.inf
        assert is_singular(m)

    def test_tolerance(self):
        m = np.diag([1.0, 1e-8, 1.0])
        assert not is_singular(m, tolerance=1e-12)
        assert is_singular(m, tolerance=1e-6)


class TestInversion:

    def test_invert(self):
        m = np.array([[2.0, 1.0], [1.0, 3.0]])
        np.testing.assert_allclose(invert_matrix(m) @ m, np.eye(2), atol=1e-12)

    def test_singular_raises(self):
        with pytest.raises(SingularTransformError, match="4x4"):
            invert_matrix(GEOTIFF_2D)

    def test_planar_of_geotiff_2d_is_invertible(self):
        planar = planar_affine(GEOTIFF_2D)
        np.testing.assert_array_equal(planar, [
            [2.0, 0.5, 100.0],
            [0.0, -2.0, 200.0],
            [0.0, 0.0, 1.0],
        ])
        inverse = invert_matrix(planar)
        np.testing.assert_allclose(inverse @ planar, np.eye(3), atol=1e-12)


class TestApplyHomogeneous:

    def test_normalizes_by_w(self):
        m = np.diag([1.0, 1.0, 4.0])
        result = apply_homogeneous(m, np.array([[8.0], [4.0], [1.0]]))
        np.testing.assert_allclose(result, [[2.0], [1.0]])

    def test_w_zero_raises(self):
        with pytest.raises(SingularTransformError, match="w is zero"):
            apply_homogeneous(np.zeros((3, 3)), np.array([[1.0], [1.0], [1.0]]))
