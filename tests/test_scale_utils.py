# Standard library imports
import math

# Third-party imports
import numpy as np
import pytest

# Layoutscale imports
from layoutscale import config
from layoutscale.layout_types import Point
from layoutscale.scale_utils import (
    calculate_center_offset,
    calculate_fit_scale,
    canvas_to_real,
    canvas_to_real_array,
    clamp_zoom,
    get_next_larger_scale,
    get_next_smaller_scale,
    meters_to_pixels,
    pixels_to_meters,
    point_to_meters,
    point_to_pixels,
    real_to_canvas,
    real_to_canvas_array,
    round_to_precision,
    snap_to_clean_scale,
    snap_to_grid,
    snap_value_to_grid,
)


class TestDistanceConversion:
    """Tests for meters_to_pixels / pixels_to_meters"""

    def test_meters_to_pixels(self):
        """Test plain multiplication"""
        assert meters_to_pixels(1.8, 100) == pytest.approx(180.0)

    def test_pixels_to_meters(self):
        """Test plain division"""
        assert pixels_to_meters(180, 100) == pytest.approx(1.8)

    def test_non_finite_inputs_degrade_to_zero(self):
        """Test that NaN and infinity never leak out"""
        assert meters_to_pixels(math.nan, 100) == 0.0
        assert meters_to_pixels(1.0, math.inf) == 0.0
        assert pixels_to_meters(math.inf, 100) == 0.0
        assert pixels_to_meters(10, math.nan) == 0.0

    def test_zero_scale_pixels_to_meters(self):
        """Test that a zero divisor gives zero"""
        assert pixels_to_meters(50, 0) == 0.0

    def test_point_helpers(self):
        """Test offset-free point scaling"""
        assert point_to_pixels(Point(1.5, 2), 100) == Point(150, 200)
        assert point_to_meters(Point(150, 200), 100) == Point(1.5, 2)


class TestPointConversion:
    """Tests for real_to_canvas / canvas_to_real"""

    def test_real_to_canvas_applies_offset(self):
        """Test point * ppm + offset"""
        assert real_to_canvas(Point(5, 5), 100, Point(10, 20)) == Point(510, 520)

    def test_canvas_to_real_removes_offset(self):
        """Test (point - offset) / ppm"""
        assert canvas_to_real(Point(510, 520), 100, Point(10, 20)) == Point(5, 5)

    def test_round_trip(self):
        """Test canvas_to_real inverts real_to_canvas"""
        offset = Point(37.25, -12.5)
        for ppm in (0.5, 45.0, 87.5, 1000.0):
            for p in (Point(0, 0), Point(3.3, 7.7), Point(-2.1, 19.99)):
                back = canvas_to_real(real_to_canvas(p, ppm, offset), ppm, offset)
                assert back.x == pytest.approx(p.x, abs=1e-9)
                assert back.y == pytest.approx(p.y, abs=1e-9)

    def test_non_finite_scale_maps_to_offset(self):
        """Test that a non-finite ppm returns the offset"""
        assert real_to_canvas(Point(5, 5), math.inf, Point(3, 4)) == Point(3, 4)

    def test_zero_scale_maps_to_origin(self):
        """Test that canvas_to_real with ppm 0 gives the origin"""
        assert canvas_to_real(Point(100, 100), 0, Point(0, 0)) == Point(0, 0)
        assert canvas_to_real(Point(100, 100), math.nan, Point(0, 0)) == Point(0, 0)

    def test_array_variants_match_scalar(self):
        """Test vectorized conversions agree with the scalar ones"""
        pts = np.array([[0.0, 0.0], [1.5, 2.5], [20.0, 15.0]])
        offset = Point(50, 62.5)
        canvas = real_to_canvas_array(pts, 45.0, offset)
        for row, p in zip(canvas, pts):
            expected = real_to_canvas(Point(*p), 45.0, offset)
            assert row[0] == pytest.approx(expected.x)
            assert row[1] == pytest.approx(expected.y)
        np.testing.assert_allclose(canvas_to_real_array(canvas, 45.0, offset), pts)

    def test_array_variants_degenerate_scale(self):
        """Test vectorized guards for bad scales"""
        pts = np.array([[1.0, 1.0], [2.0, 2.0]])
        np.testing.assert_array_equal(real_to_canvas_array(pts, math.nan, Point(3, 4)), [[3, 4], [3, 4]])
        np.testing.assert_array_equal(canvas_to_real_array(pts, 0, Point(3, 4)), [[0, 0], [0, 0]])


class TestGridSnap:
    """Tests for grid snapping helpers"""

    def test_snap_to_grid(self):
        """Test componentwise rounding to the nearest multiple"""
        snapped = snap_to_grid(Point(1.23, 4.56), 0.1)
        assert snapped.x == pytest.approx(1.2)
        assert snapped.y == pytest.approx(4.6)

    def test_halves_round_up(self):
        """Test that exact halves round towards positive infinity"""
        assert snap_value_to_grid(0.5, 1.0) == 1.0
        assert snap_value_to_grid(-0.5, 1.0) == 0.0
        assert snap_value_to_grid(2.5, 1.0) == 3.0

    def test_snap_is_idempotent(self):
        """Test snapping a snapped point changes nothing"""
        for p in (Point(1.23, 4.56), Point(-3.05, 0.449), Point(7.777, 2.0)):
            once = snap_to_grid(p, 0.1)
            assert snap_to_grid(once, 0.1) == once

    def test_invalid_grid_size_leaves_point(self):
        """Test that non-positive and non-finite sizes are no-ops"""
        p = Point(1.23, 4.56)
        assert snap_to_grid(p, 0) == p
        assert snap_to_grid(p, -0.1) == p
        assert snap_to_grid(p, math.nan) == p

    def test_round_to_precision(self):
        """Test centimeter rounding"""
        assert round_to_precision(6.1349, 0.01) == pytest.approx(6.13)
        assert round_to_precision(6.1351, 0.01) == pytest.approx(6.14)
        assert round_to_precision(6.1351, 0) == 6.1351


class TestCleanScale:
    """Tests for clean scale snapping"""

    @pytest.mark.parametrize("raw, expected", [
        (87.5, 50),
        (100, 100),
        (249.9, 200),
        (5, 10),
        (2000, 1000),
    ])
    def test_largest_clean_scale_not_above_raw(self, raw, expected):
        """Test the largest member not exceeding the raw scale is chosen"""
        assert snap_to_clean_scale(raw) == expected

    def test_invalid_input_returns_smallest(self):
        """Test non-finite and non-positive scales fall back to 10"""
        assert snap_to_clean_scale(math.nan) == 10
        assert snap_to_clean_scale(0) == 10
        assert snap_to_clean_scale(-50) == 10

    def test_result_is_always_clean(self):
        """Test that every output is a member of CLEAN_SCALES"""
        for raw in np.linspace(1, 1500, 97):
            assert snap_to_clean_scale(float(raw)) in config.CLEAN_SCALES

    def test_next_scales(self):
        """Test stepping through the clean scales"""
        assert get_next_larger_scale(50) == 100
        assert get_next_larger_scale(1000) == 1000
        assert get_next_smaller_scale(50) == 40
        assert get_next_smaller_scale(10) == 10


class TestFitHelpers:
    """Tests for fit scale, centering and zoom clamping"""

    def test_fit_scale_uses_binding_axis(self):
        """Test 20x15m in 1000x800px with 90% padding gives 45 px/m"""
        assert calculate_fit_scale(20, 15, 1000, 800, 0.9) == pytest.approx(45.0)

    def test_fit_scale_fallback(self):
        """Test invalid sizes fall back to 100 px/m"""
        assert calculate_fit_scale(0, 15, 1000, 800) == 100.0

    def test_center_offset(self):
        """Test the rendered space is centred"""
        offset = calculate_center_offset(20, 15, 1000, 800, 45)
        assert offset == Point(50, 62.5)

    def test_clamp_zoom(self):
        """Test zoom clamping to configured limits"""
        assert clamp_zoom(10) == config.MAX_ZOOM
        assert clamp_zoom(0.1) == config.MIN_ZOOM
        assert clamp_zoom(2.0) == 2.0
        assert clamp_zoom(math.nan) == 1.0
