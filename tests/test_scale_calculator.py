# Standard library imports
import math

# Third-party imports
import pytest

# Layoutscale imports
from layoutscale import config
from layoutscale.layout_types import CanvasSize, InvalidGeometryError, Point, SpaceBounds
from layoutscale.scale_calculator import (
    ScaleInputs,
    calculate_scale,
    calculate_scale_for_ratio,
    calculate_zoom_at_point,
    recompute_scale,
    try_calculate_scale,
)


@pytest.fixture
def venue():
    """20m x 15m venue"""
    return SpaceBounds.from_size(20, 15)


@pytest.fixture
def canvas():
    """1000 x 800 px canvas"""
    return CanvasSize(1000, 800)


class TestCalculateScale:
    """Tests for calculate_scale"""

    def test_fit_and_centre(self, venue, canvas):
        """Test 90% padding, binding axis and centering"""
        scale = calculate_scale(venue, canvas)

        assert scale.pixels_per_meter == pytest.approx(45.0)
        assert scale.meters_per_pixel == pytest.approx(1 / 45.0)
        assert scale.offset.x == pytest.approx(50.0)
        assert scale.offset.y == pytest.approx(62.5)
        assert scale.zoom == 1.0
        assert scale.base_pixels_per_meter == pytest.approx(45.0)

    def test_room_fits_inside_padded_canvas(self, venue, canvas):
        """Test the room never exceeds the padded canvas at zoom 1"""
        for c in (canvas, CanvasSize(300, 1200), CanvasSize(1920, 300)):
            scale = calculate_scale(venue, c)
            assert venue.width * scale.pixels_per_meter <= c.width * 0.9 + 1e-9
            assert venue.height * scale.pixels_per_meter <= c.height * 0.9 + 1e-9

    def test_clean_scale_snap(self, venue, canvas):
        """Test snapping 45 px/m down to 40 px/m"""
        scale = calculate_scale(venue, canvas, snap_to_clean_scale=True)
        assert scale.pixels_per_meter == 40
        assert scale.offset == Point(100, 100)
        assert scale.snap_to_clean_scale is True

    def test_zoom_is_clamped(self, venue, canvas):
        """Test zoom outside the limits is clamped silently"""
        assert calculate_scale(venue, canvas, zoom=10).zoom == config.MAX_ZOOM
        assert calculate_scale(venue, canvas, zoom=10).pixels_per_meter == pytest.approx(225.0)
        assert calculate_scale(venue, canvas, zoom=0.01).zoom == config.MIN_ZOOM

    def test_zoom_keeps_room_centred(self, venue, canvas):
        """Test the centre of the room stays at the canvas centre"""
        scale = calculate_scale(venue, canvas, zoom=2.5)
        centre = scale.real_to_canvas(Point(10, 7.5))
        assert centre.x == pytest.approx(500)
        assert centre.y == pytest.approx(400)

    def test_bound_conversions(self, venue, canvas):
        """Test the state's conversions close over its ppm and offset"""
        scale = calculate_scale(venue, canvas)
        assert scale.meters_to_pixels(2) == pytest.approx(90)
        assert scale.pixels_to_meters(90) == pytest.approx(2)
        assert scale.real_to_canvas(Point(0, 0)) == scale.offset
        back = scale.canvas_to_real(scale.real_to_canvas(Point(3.3, 4.4)))
        assert back.x == pytest.approx(3.3)
        assert back.y == pytest.approx(4.4)

    def test_unmeasured_canvas_raises(self, venue):
        """Test a zero-sized canvas is rejected"""
        with pytest.raises(InvalidGeometryError):
            calculate_scale(venue, CanvasSize(0, 0))
        with pytest.raises(InvalidGeometryError):
            calculate_scale(venue, CanvasSize(800, -5))

    def test_missing_bounds_raises(self, canvas):
        """Test None bounds are rejected"""
        with pytest.raises(InvalidGeometryError):
            calculate_scale(None, canvas)

    @pytest.mark.parametrize("padding", [0.0, -0.5, math.nan, math.inf])
    def test_invalid_padding_raises(self, padding):
        """Test zero, negative or non-finite padding never yields a state"""
        with pytest.raises(InvalidGeometryError):
            calculate_scale(SpaceBounds.from_size(10, 10), CanvasSize(1000, 1000), padding=padding)

    def test_fit_law(self):
        """Test a 10m square in a 1000px square at full and 90% padding"""
        bounds, canvas = SpaceBounds.from_size(10, 10), CanvasSize(1000, 1000)
        assert calculate_scale(bounds, canvas, padding=1.0).pixels_per_meter == pytest.approx(100)
        assert calculate_scale(bounds, canvas, padding=0.9).pixels_per_meter == pytest.approx(90)

    def test_aspect_preserved(self):
        """Test the binding axis sets the scale and the other axis is centred"""
        scale = calculate_scale(SpaceBounds.from_size(20, 10), CanvasSize(1000, 1000), padding=1.0)
        assert scale.pixels_per_meter == pytest.approx(50)
        assert scale.offset.x == pytest.approx(0)
        assert scale.offset.y == pytest.approx(250)

    def test_same_inputs_equal_states(self, venue, canvas):
        """Test recomputing from identical inputs gives an equal state"""
        assert calculate_scale(venue, canvas, 1.3) == calculate_scale(venue, canvas, 1.3)

    def test_ratio_label(self, venue, canvas):
        """Test the human-readable ratio"""
        assert calculate_scale(venue, canvas).scale_ratio_label == "1:45"


class TestZoomAtPoint:
    """Tests for calculate_zoom_at_point"""

    @pytest.mark.parametrize("cursor", [Point(200, 200), Point(500, 400), Point(930, 75)])
    def test_point_under_cursor_is_stationary(self, venue, canvas, cursor):
        """Test the real point under the cursor keeps its canvas position"""
        current = calculate_scale(venue, canvas)
        real_before = current.canvas_to_real(cursor)

        zoomed = calculate_zoom_at_point(current, 2.0, cursor)
        after = zoomed.real_to_canvas(real_before)

        assert zoomed.zoom == 2.0
        assert zoomed.pixels_per_meter == pytest.approx(90)
        assert after.x == pytest.approx(cursor.x)
        assert after.y == pytest.approx(cursor.y)

    def test_composes_with_clean_scale(self, venue, canvas):
        """Test the snapped base scale is kept when zooming at a point"""
        current = calculate_scale(venue, canvas, snap_to_clean_scale=True)
        zoomed = calculate_zoom_at_point(current, 1.5, Point(300, 300))
        assert zoomed.base_pixels_per_meter == 40
        assert zoomed.pixels_per_meter == pytest.approx(60)
        assert zoomed.snap_to_clean_scale is True

    def test_zoom_clamped(self, venue, canvas):
        """Test out-of-range zoom is clamped here too"""
        current = calculate_scale(venue, canvas)
        assert calculate_zoom_at_point(current, 50, Point(0, 0)).zoom == config.MAX_ZOOM

    def test_pinned_ratio_survives_zoom(self):
        """Test a ratio-pinned state zooms from its ratio, not a refit"""
        pinned = calculate_scale_for_ratio(SpaceBounds.from_size(20, 15), CanvasSize(2000, 1500), 100)
        cursor = Point(400, 300)
        real_before = pinned.canvas_to_real(cursor)

        zoomed = calculate_zoom_at_point(pinned, 2.0, cursor)
        after = zoomed.real_to_canvas(real_before)

        assert zoomed.base_pixels_per_meter == 100
        assert zoomed.pixels_per_meter == pytest.approx(200)
        assert zoomed.fixed_scale is True
        assert after.x == pytest.approx(cursor.x)
        assert after.y == pytest.approx(cursor.y)


class TestScaleForRatio:
    """Tests for calculate_scale_for_ratio"""

    def test_exact_ratio(self, venue, canvas):
        """Test ppm is pinned and the room centred"""
        scale = calculate_scale_for_ratio(venue, canvas, 40)
        assert scale.pixels_per_meter == 40
        assert scale.offset == Point(100, 100)
        assert scale.zoom == 1.0

    def test_exact_fit_allowed(self, venue, canvas):
        """Test a room that exactly fills the canvas width still fits"""
        assert calculate_scale_for_ratio(venue, canvas, 50) is not None

    def test_overflow_returns_none(self, venue, canvas):
        """Test an unreachable scale gives None"""
        assert calculate_scale_for_ratio(venue, canvas, 60) is None

    def test_invalid_ratio_returns_none(self, venue, canvas):
        """Test non-positive ratios give None"""
        assert calculate_scale_for_ratio(venue, canvas, 0) is None
        assert calculate_scale_for_ratio(venue, canvas, math.nan) is None


class TestRecompute:
    """Tests for try_calculate_scale / recompute_scale"""

    def test_try_without_bounds(self, canvas):
        """Test no bounds means no scale"""
        assert try_calculate_scale(None, canvas) is None

    def test_try_with_unmeasured_canvas(self, venue):
        """Test an unmeasured canvas means no scale"""
        assert try_calculate_scale(venue, CanvasSize(0, 0)) is None

    def test_identical_inputs_return_previous(self, venue, canvas):
        """Test no recompute happens for identical inputs"""
        inputs = ScaleInputs(venue, canvas, 1.0)
        first = recompute_scale(None, None, inputs)
        second = recompute_scale(inputs, first, ScaleInputs(venue, canvas, 1.0))
        assert second is first

    def test_changed_inputs_give_fresh_state(self, venue, canvas):
        """Test any change produces a new state"""
        inputs = ScaleInputs(venue, canvas, 1.0)
        first = recompute_scale(None, None, inputs)
        resized = recompute_scale(inputs, first, ScaleInputs(venue, CanvasSize(1200, 800), 1.0))
        assert resized is not first
        assert resized.canvas_size == CanvasSize(1200, 800)

    def test_recompute_to_none(self, venue, canvas):
        """Test losing the bounds clears the scale"""
        inputs = ScaleInputs(venue, canvas)
        first = recompute_scale(None, None, inputs)
        assert recompute_scale(inputs, first, ScaleInputs(None, canvas)) is None
