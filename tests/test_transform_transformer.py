# -*- coding: utf-8 -*-
"""
Raster Transformer Tests - Pixel/model mapping for each transform variant.

Tests the tie-point-and-scale sign convention, affine forward and inverse
mapping, rounding and clamping at the raster boundary, degenerate
transforms, vectorized forms, footprints and tunable parameters.

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

from georef.exceptions import (
    GeolocationError,
    MalformedTagError,
    SingularTransformError,
    ValidationError,
)
from georef.transform.models import AffineTransform
from georef.transform.transformer import RasterTransformer
from georef.vocabulary import TiePointInterpolation, TransformKind


IDENTITY = [1.0, 0.0, 0.0, 0.0,
            0.0, 1.0, 0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            0.0, 0.0, 0.0, 1.0]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def geo_scale():
    """Tie point (0, 0) -> (100, 200) with 2 model units per pixel."""
    return RasterTransformer.from_tag_data(
        [2.0, 2.0, 0.0], [0, 0, 0, 100.0, 200.0, 0.0], None
    )


@pytest.fixture
def geo_utm_scale():
    """10 m pixels anchored at pixel (5, 3), elevation scale 0.5."""
    return RasterTransformer.from_tag_data(
        [10.0, 10.0, 0.5],
        [5, 3, 0, 500000.0, 6000000.0, 100.0],
        None,
    )


@pytest.fixture
def geo_identity():
    return RasterTransformer.from_tag_data(None, None, IDENTITY)


@pytest.fixture
def geo_rotated():
    """Affine with rotation and shear, GeoTIFF 2D layout (zero Z row)."""
    matrix = [0.8, 0.3, 0.0, 1000.0,
              0.2, -0.9, 0.0, 5000.0,
              0.0, 0.0, 0.0, 0.0,
              0.0, 0.0, 0.0, 1.0]
    return RasterTransformer.from_tag_data(None, None, matrix)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    """Test RasterTransformer construction and parameters."""

    def test_kind(self, geo_scale, geo_identity):
        assert geo_scale.kind is TransformKind.TIE_POINT_AND_PIXEL_SCALE
        assert geo_identity.kind is TransformKind.AFFINE_TRANSFORM

    def test_defaults(self, geo_scale):
        assert geo_scale.get_params() == {
            'interpolation': TiePointInterpolation.NEAREST,
            'singular_tolerance': 1e-12,
        }

    def test_bad_transform_type(self):
        with pytest.raises(TypeError, match="CoordinateTransform"):
            RasterTransformer(IDENTITY)

    def test_bad_interpolation(self):
        with pytest.raises(ValidationError,
                           match="must be one of 'nearest', 'linear'"):
            RasterTransformer(AffineTransform(tuple(IDENTITY)),
                              interpolation='cubic')

    def test_interpolation_from_value(self):
        geo = RasterTransformer(AffineTransform(tuple(IDENTITY)),
                                interpolation='linear')
        assert geo.interpolation is TiePointInterpolation.LINEAR
        assert "interpolation='linear'" in repr(geo)

    def test_interpolation_from_member(self):
        geo = RasterTransformer(AffineTransform(tuple(IDENTITY)),
                                interpolation=TiePointInterpolation.LINEAR)
        assert geo.interpolation is TiePointInterpolation.LINEAR

    def test_negative_tolerance(self):
        with pytest.raises(ValidationError, match="outside"):
            RasterTransformer(AffineTransform(tuple(IDENTITY)),
                              singular_tolerance=-1.0)

    def test_unknown_keyword(self):
        with pytest.raises(TypeError, match="unexpected"):
            RasterTransformer(AffineTransform(tuple(IDENTITY)), order=3)

    def test_from_tags(self):
        geo = RasterTransformer.from_tags(
            {'ModelTransformationTag': IDENTITY}, singular_tolerance=1e-9
        )
        assert geo.kind is TransformKind.AFFINE_TRANSFORM
        assert geo.singular_tolerance == 1e-9

    def test_repr(self, geo_scale):
        assert 'tie_point_and_pixel_scale' in repr(geo_scale)


# ---------------------------------------------------------------------------
# TiePointAndPixelScale
# ---------------------------------------------------------------------------

class TestTiePointAndPixelScale:
    """Test the single tie point plus pixel scale mapping."""

    def test_to_model(self, geo_scale):
        """X grows with column, Y decreases as row grows."""
        assert geo_scale.to_model((10, 10)) == (120.0, 180.0)

    def test_to_model_origin(self, geo_scale):
        assert geo_scale.to_model((0, 0)) == (100.0, 200.0)

    def test_to_model_offset_anchor(self, geo_utm_scale):
        x, y = geo_utm_scale.to_model((5, 3))
        assert (x, y) == (500000.0, 6000000.0)
        x, y = geo_utm_scale.to_model((15, 13))
        assert x == pytest.approx(500100.0)
        assert y == pytest.approx(5999900.0)

    def test_to_raster(self, geo_scale):
        assert geo_scale.to_raster((120.0, 180.0)) == (10, 10)

    def test_to_raster_returns_ints(self, geo_scale):
        col, row = geo_scale.to_raster((120.0, 180.0))
        assert type(col) is int
        assert type(row) is int

    def test_to_raster_rounds_half_away_from_zero(self, geo_scale):
        # col = 0 + (105 - 100) / 2 = 2.5 -> 3
        # row = 0 - (195 - 200) / 2 = 2.5 -> 3
        assert geo_scale.to_raster((105.0, 195.0)) == (3, 3)

    def test_to_raster_rounds_down_below_half(self, geo_scale):
        assert geo_scale.to_raster((104.9, 195.1)) == (2, 2)

    def test_to_raster_clamps_negative(self, geo_scale):
        # col = (90 - 100) / 2 = -5, row = -(210 - 200) / 2 = -5
        assert geo_scale.to_raster((90.0, 210.0)) == (0, 0)

    def test_to_model_3d(self, geo_utm_scale):
        x, y, z = geo_utm_scale.to_model_3d((5, 3, 4))
        assert (x, y) == (500000.0, 6000000.0)
        assert z == pytest.approx(102.0)

    def test_to_model_3d_default_k(self, geo_utm_scale):
        _, _, z = geo_utm_scale.to_model_3d((5, 3))
        assert z == pytest.approx(100.0)

    def test_zero_scale_to_raster(self):
        geo = RasterTransformer.from_tag_data(
            [0.0, 2.0, 0.0], [0, 0, 0, 100.0, 200.0, 0.0], None
        )
        with pytest.raises(GeolocationError, match="zero pixel scale"):
            geo.to_raster((100.0, 200.0))

    def test_zero_scale_to_model_still_works(self):
        geo = RasterTransformer.from_tag_data(
            [2.0, 0.0, 0.0], [0, 0, 0, 100.0, 200.0, 0.0], None
        )
        assert geo.to_model((3, 7)) == (106.0, 200.0)

    def test_roundtrip(self, geo_utm_scale):
        for pixel in [(0, 0), (5, 3), (17, 250), (2047, 1023)]:
            assert geo_utm_scale.to_raster(geo_utm_scale.to_model(pixel)) == pixel


# ---------------------------------------------------------------------------
# AffineTransform
# ---------------------------------------------------------------------------

class TestAffineTransform:
    """Test 4x4 matrix mapping and inversion."""

    def test_identity_to_model(self, geo_identity):
        assert geo_identity.to_model((5, 7)) == (5.0, 7.0)

    def test_identity_to_raster(self, geo_identity):
        assert geo_identity.to_raster((5.0, 7.0)) == (5, 7)

    def test_north_up_matrix(self):
        matrix = [2.0, 0.0, 0.0, 100.0,
                  0.0, -2.0, 0.0, 200.0,
                  0.0, 0.0, 0.0, 0.0,
                  0.0, 0.0, 0.0, 1.0]
        geo = RasterTransformer.from_tag_data(None, None, matrix)
        assert geo.to_model((10, 10)) == (120.0, 180.0)
        assert geo.to_raster((120.0, 180.0)) == (10, 10)

    def test_rotated_roundtrip(self, geo_rotated):
        for pixel in [(0, 0), (1, 0), (0, 1), (123, 456), (1000, 3)]:
            assert geo_rotated.to_raster(geo_rotated.to_model(pixel)) == pixel

    def test_to_model_3d_uses_full_matrix(self):
        matrix = [1.0, 0.0, 0.0, 0.0,
                  0.0, 1.0, 0.0, 0.0,
                  0.0, 0.0, 3.0, 10.0,
                  0.0, 0.0, 0.0, 1.0]
        geo = RasterTransformer.from_tag_data(None, None, matrix)
        assert geo.to_model_3d((1, 2, 4)) == (1.0, 2.0, 22.0)

    def test_elevation_coupled_matrix_uses_planar_inverse(self):
        """to_raster inverts the k = 0 plane, matching to_model."""
        matrix = [1.0, 0.0, 5.0, 0.0,
                  0.0, 1.0, 7.0, 0.0,
                  1.0, 1.0, 1.0, 0.0,
                  0.0, 0.0, 0.0, 1.0]
        geo = RasterTransformer.from_tag_data(None, None, matrix)
        assert geo.to_model((2, 3)) == (2.0, 3.0)
        assert geo.to_raster((2.0, 3.0)) == (2, 3)
        assert geo.to_model_3d((2, 3, 1)) == (7.0, 10.0, 6.0)

    def test_just_below_half_rounds_down(self, geo_identity):
        assert geo_identity.to_raster((0.49999999999999994, 0.0)) == (0, 0)
        assert geo_identity.to_raster((2.5, 0.5)) == (3, 1)

    def test_homogeneous_scale(self):
        """A bottom row other than [0, 0, 0, 1] is normalized by w."""
        matrix = [2.0, 0.0, 0.0, 0.0,
                  0.0, 2.0, 0.0, 0.0,
                  0.0, 0.0, 2.0, 0.0,
                  0.0, 0.0, 0.0, 2.0]
        geo = RasterTransformer.from_tag_data(None, None, matrix)
        assert geo.to_model((3, 4)) == (3.0, 4.0)
        assert geo.to_raster((3.0, 4.0)) == (3, 4)

    def test_all_zero_matrix_to_raster(self):
        geo = RasterTransformer.from_tag_data(None, None, [0.0] * 16)
        with pytest.raises(SingularTransformError, match="Singular transform"):
            geo.to_raster((1.0, 1.0))

    def test_all_zero_matrix_to_model(self):
        geo = RasterTransformer.from_tag_data(None, None, [0.0] * 16)
        with pytest.raises(GeolocationError):
            geo.to_model((1, 1))

    def test_collinear_matrix_to_raster(self):
        """Columns 0 and 1 parallel: planar part is singular."""
        matrix = [1.0, 2.0, 0.0, 0.0,
                  2.0, 4.0, 0.0, 0.0,
                  0.0, 0.0, 0.0, 0.0,
                  0.0, 0.0, 0.0, 1.0]
        geo = RasterTransformer.from_tag_data(None, None, matrix)
        with pytest.raises(SingularTransformError):
            geo.to_raster((3.0, 6.0))

    def test_singular_error_is_geolocation_error(self):
        geo = RasterTransformer.from_tag_data(None, None, [0.0] * 16)
        with pytest.raises(GeolocationError):
            geo.to_raster((0.0, 0.0))


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

class TestInputValidation:
    """Test rejection of invalid coordinates."""

    def test_negative_pixel(self, geo_scale):
        with pytest.raises(ValidationError, match="non-negative"):
            geo_scale.to_model((-1, 0))

    def test_fractional_pixel(self, geo_scale):
        with pytest.raises(ValidationError, match="integer"):
            geo_scale.to_model((1.5, 0))

    def test_numpy_integer_pixel(self, geo_scale):
        assert geo_scale.to_model((np.int64(10), np.uint16(10))) == (120.0, 180.0)

    def test_nan_model(self, geo_scale):
        with pytest.raises(ValidationError, match="finite"):
            geo_scale.to_raster((float('nan'), 0.0))

    def test_wrong_length(self, geo_scale):
        with pytest.raises(ValidationError, match="2 or 3"):
            geo_scale.to_model_3d((1, 2, 3, 4))

    def test_overflowing_raster_position(self):
        geo = RasterTransformer.from_tag_data(
            [1e-300, 1e-300, 0.0], [0, 0, 0, 0.0, 0.0, 0.0], None
        )
        with pytest.raises(GeolocationError, match="not finite"):
            geo.to_raster((1e300, -1e300))

    def test_raster_position_beyond_int64(self):
        geo = RasterTransformer.from_tag_data(
            [1e-10, 1e-10, 0.0], [0, 0, 0, 0.0, 0.0, 0.0], None
        )
        with pytest.raises(GeolocationError, match="largest representable"):
            geo.to_raster((1e10, 0.0))

    def test_nan_tie_point_rejected(self):
        values = [0.0, 0.0, 0.0, 1.0, 2.0, 0.0,
                  5.0, 5.0, 0.0, np.nan, 3.0, 0.0]
        with pytest.raises(MalformedTagError, match="must be finite"):
            RasterTransformer.from_tag_data(None, values, None)


# ---------------------------------------------------------------------------
# Vectorized forms
# ---------------------------------------------------------------------------

class TestArrays:
    """Test array inputs and consistency with the scalar path."""

    def test_to_model_array(self, geo_scale):
        xs, ys = geo_scale.to_model_array([0, 10, 20], [0, 10, 5])
        np.testing.assert_allclose(xs, [100.0, 120.0, 140.0])
        np.testing.assert_allclose(ys, [200.0, 180.0, 190.0])

    def test_to_raster_array(self, geo_rotated):
        cols = np.array([0, 10, 200, 999])
        rows = np.array([0, 20, 100, 5])
        xs, ys = geo_rotated.to_model_array(cols, rows)
        cols_back, rows_back = geo_rotated.to_raster_array(xs, ys)
        assert cols_back.dtype == np.int64
        np.testing.assert_array_equal(cols_back, cols)
        np.testing.assert_array_equal(rows_back, rows)

    def test_scalar_array_consistency(self, geo_utm_scale):
        cols = [0, 7, 99]
        rows = [3, 42, 11]
        xs, ys = geo_utm_scale.to_model_array(cols, rows)
        for col, row, x, y in zip(cols, rows, xs, ys):
            assert geo_utm_scale.to_model((col, row)) == (x, y)

    def test_shape_mismatch(self, geo_scale):
        with pytest.raises(ValidationError, match="same shape"):
            geo_scale.to_model_array([0, 1], [0])


# ---------------------------------------------------------------------------
# Footprint and bounds
# ---------------------------------------------------------------------------

class TestFootprint:
    """Test model-space footprint of a raster."""

    def test_bounds(self, geo_scale):
        # 100 rows x 50 cols: X from 100 to 198, Y from 200 down to 2
        assert geo_scale.model_bounds((100, 50)) == (100.0, 2.0, 198.0, 200.0)

    def test_footprint(self, geo_identity):
        footprint = geo_identity.footprint((10, 20), samples_per_edge=5)
        assert footprint['type'] == 'Polygon'
        assert len(footprint['coordinates']) == 20
        assert footprint['bounds'] == (0.0, 0.0, 19.0, 9.0)

    def test_interpolation_error_requires_tie_points(self, geo_scale):
        with pytest.raises(GeolocationError, match="tie-point sets"):
            geo_scale.interpolation_error()
