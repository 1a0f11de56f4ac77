# Standard library imports
import math

# Third-party imports
import pytest

# Layoutscale imports
from layoutscale.layout_types import InvalidGeometryError, Point, SpaceBounds, Wall
from layoutscale.sample_layouts import create_venue_walls
from layoutscale.space_bounds import (
    add_padding_to_bounds,
    bounds_from_walls,
    calculate_space_bounds,
    calculate_space_bounds_from_pixel_walls,
    clamp_point_to_bounds,
    create_default_space_bounds,
    get_wall_normalization_offset,
    get_wall_normalization_offset_meters,
    is_point_in_bounds,
    normalize_point,
)


@pytest.fixture
def offset_pixel_walls():
    """12m x 8m room drawn at 100 px/m starting at pixel (300, 150)"""
    return create_venue_walls(12.0, 8.0, pixels_per_meter=100.0, origin_px=Point(300, 150))


class TestSpaceBoundsFromPixelWalls:
    """Tests for calculate_space_bounds_from_pixel_walls"""

    def test_bounds_in_meters_normalized(self, offset_pixel_walls):
        """Test size is converted to meters and the origin moved to zero"""
        bounds = calculate_space_bounds_from_pixel_walls(offset_pixel_walls, 100)

        assert bounds.min_x == 0 and bounds.min_y == 0
        assert bounds.width == pytest.approx(12.0)
        assert bounds.height == pytest.approx(8.0)
        assert bounds.max_x == bounds.width
        assert bounds.max_y == bounds.height

    def test_other_resolution(self, offset_pixel_walls):
        """Test the ppm divisor is honoured"""
        bounds = calculate_space_bounds_from_pixel_walls(offset_pixel_walls, 50)
        assert bounds.width == pytest.approx(24.0)

    def test_empty_walls_returns_none(self):
        """Test that no walls means no bounds"""
        assert calculate_space_bounds_from_pixel_walls([], 100) is None

    def test_non_positive_scale_returns_none(self, offset_pixel_walls):
        """Test ppm <= 0 is rejected"""
        assert calculate_space_bounds_from_pixel_walls(offset_pixel_walls, 0) is None
        assert calculate_space_bounds_from_pixel_walls(offset_pixel_walls, -1) is None

    def test_collinear_walls_return_none(self):
        """Test a wall set with zero height is degenerate"""
        walls = [Wall(Point(0, 100), Point(500, 100)), Wall(Point(500, 100), Point(900, 100))]
        assert calculate_space_bounds_from_pixel_walls(walls, 100) is None

    def test_non_finite_scale_returns_none(self, offset_pixel_walls):
        """Test NaN and infinite ppm give no bounds"""
        assert calculate_space_bounds_from_pixel_walls(offset_pixel_walls, math.nan) is None
        assert calculate_space_bounds_from_pixel_walls(offset_pixel_walls, math.inf) is None

    def test_offset_loop_matches_origin_loop(self):
        """Test a loop drawn away from the origin normalizes to the same bounds"""
        shifted = create_venue_walls(10, 8, pixels_per_meter=100, origin_px=Point(500, 300))
        at_origin = create_venue_walls(10, 8, pixels_per_meter=100)

        expected = SpaceBounds(0, 0, 10, 8, 10, 8)
        assert calculate_space_bounds_from_pixel_walls(shifted, 100) == expected
        assert calculate_space_bounds_from_pixel_walls(at_origin, 100) == expected


class TestSpaceBoundsFromMeterWalls:
    """Tests for calculate_space_bounds"""

    def test_meter_walls(self):
        """Test bounds from walls already in meters"""
        walls = [Wall(Point(-2, 1), Point(8, 1)), Wall(Point(8, 1), Point(8, 7.5))]
        bounds = calculate_space_bounds(walls)
        assert (bounds.width, bounds.height) == (10, 6.5)
        assert (bounds.min_x, bounds.min_y) == (0, 0)

    def test_single_point_walls_return_none(self):
        """Test zero-length walls give no bounds"""
        assert calculate_space_bounds([Wall(Point(1, 1), Point(1, 1))]) is None

    def test_empty_returns_none(self):
        """Test empty wall list"""
        assert calculate_space_bounds([]) is None

    def test_infinite_endpoint_returns_none(self):
        """Test walls reaching infinity give no bounds"""
        walls = [Wall(Point(0, 0), Point(math.inf, 0)), Wall(Point(0, 0), Point(0, 5))]
        assert calculate_space_bounds(walls) is None


class TestNormalizationOffset:
    """Tests for wall normalization offsets"""

    def test_offset_is_raw_minimum(self, offset_pixel_walls):
        """Test the raw min corner is returned"""
        assert get_wall_normalization_offset(offset_pixel_walls) == Point(300, 150)

    def test_offset_in_meters(self, offset_pixel_walls):
        """Test the offset converted to meters"""
        assert get_wall_normalization_offset_meters(offset_pixel_walls, 100) == Point(3, 1.5)

    def test_empty_returns_none(self):
        """Test no walls means no offset"""
        assert get_wall_normalization_offset([]) is None
        assert get_wall_normalization_offset_meters([]) is None

    def test_invalid_scale_returns_none(self, offset_pixel_walls):
        """Test zero or NaN ppm gives no metric offset"""
        assert get_wall_normalization_offset_meters(offset_pixel_walls, 0) is None
        assert get_wall_normalization_offset_meters(offset_pixel_walls, math.nan) is None


class TestBoundsFromWalls:
    """Tests for the wall-change recompute entry point"""

    def test_minimum_size_applied(self):
        """Test a tiny room is grown to the minimum size"""
        walls = create_venue_walls(0.5, 3.0)
        bounds = bounds_from_walls(walls, 100, min_space_size=1.0)
        assert bounds.width == pytest.approx(1.0)
        assert bounds.height == pytest.approx(3.0)

    def test_padding_added_on_all_sides(self):
        """Test padding grows each dimension by twice the margin"""
        bounds = bounds_from_walls(create_venue_walls(20, 15), 100, padding_meters=0.5)
        assert bounds.width == pytest.approx(21.0)
        assert bounds.height == pytest.approx(16.0)

    def test_degenerate_walls_stay_none(self):
        """Test the minimum size does not rescue walls without an area"""
        walls = [Wall(Point(0, 0), Point(100, 0))]
        assert bounds_from_walls(walls) is None

    def test_negative_padding_consuming_room_returns_none(self):
        """Test padding that removes the whole area gives no bounds"""
        assert bounds_from_walls(create_venue_walls(2, 2), 100, padding_meters=-1.5) is None


class TestPointHelpers:
    """Tests for bounds point helpers"""

    @pytest.fixture
    def bounds(self):
        """10m x 5m room"""
        return SpaceBounds.from_size(10, 5)

    def test_default_bounds(self):
        """Test the empty-layout default"""
        bounds = create_default_space_bounds()
        assert (bounds.width, bounds.height) == (10, 10)

    def test_normalize_point(self):
        """Test offset subtraction"""
        assert normalize_point(Point(310, 160), Point(300, 150)) == Point(10, 10)

    def test_add_padding(self, bounds):
        """Test padding keeps the origin at zero"""
        padded = add_padding_to_bounds(bounds, 1)
        assert (padded.min_x, padded.width, padded.height) == (0, 12, 7)

    def test_point_in_bounds_is_inclusive(self, bounds):
        """Test edges count as inside"""
        assert is_point_in_bounds(Point(0, 0), bounds)
        assert is_point_in_bounds(Point(10, 5), bounds)
        assert not is_point_in_bounds(Point(10.01, 5), bounds)

    def test_clamp_point(self, bounds):
        """Test clamping into the room"""
        assert clamp_point_to_bounds(Point(-3, 7), bounds) == Point(0, 5)
        assert clamp_point_to_bounds(Point(4, 2), bounds) == Point(4, 2)

    def test_zero_sized_bounds_rejected(self):
        """Test SpaceBounds refuses non-positive sizes"""
        with pytest.raises(InvalidGeometryError):
            SpaceBounds.from_size(0, 5)
        with pytest.raises(InvalidGeometryError):
            SpaceBounds.from_size(5, -1)
