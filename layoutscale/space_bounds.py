"""
Space Bounds Extraction
=======================

Derives the real-world extent of a room from its wall geometry. All results
are normalized so the room's top-left corner sits at the origin; callers
that need the original placement use get_wall_normalization_offset().

Degenerate inputs (no walls, a wall set with zero width or height, a
non-positive or non-finite scale) yield None rather than raising.
"""

# Layoutscale imports
from layoutscale import config
from layoutscale.geometry_utils import get_extent_from_point_coordinates, walls_to_vertex_frame
from layoutscale.layout_types import Point, SpaceBounds, Wall

# Standard library imports
import logging
import math
from typing import Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


def _raw_extent(walls: Sequence[Wall]) -> Optional[Tuple[float, float, float, float]]:
    if not walls:
        return None
    return get_extent_from_point_coordinates(walls_to_vertex_frame(walls))


def _valid_scale(pixels_per_meter: float) -> bool:
    return math.isfinite(pixels_per_meter) and pixels_per_meter > 0


def _positive_size(width: float, height: float) -> bool:
    return math.isfinite(width) and math.isfinite(height) and width > 0 and height > 0


def calculate_space_bounds_from_pixel_walls(
    walls: Sequence[Wall],
    pixels_per_meter: float = config.WALLMAKER_PIXELS_PER_METER,
) -> Optional[SpaceBounds]:
    """
    Calculate space bounds from walls stored in pixel coordinates.

    Args:
        walls (Sequence[Wall]): Walls whose endpoints are in pixels.
        pixels_per_meter (float): Resolution the walls were drawn at.

    Returns:
        Optional[SpaceBounds]: Normalized bounds in meters, or None when the
            list is empty, the scale is not positive, or the walls do not
            span both axes.
    """
    if not walls or not _valid_scale(pixels_per_meter):
        return None

    extent = _raw_extent(walls)
    if extent is None:
        return None
    min_x, min_y, max_x, max_y = extent

    width = (max_x - min_x) / pixels_per_meter
    height = (max_y - min_y) / pixels_per_meter
    if not _positive_size(width, height):
        logger.debug(f"Degenerate wall set: {width}m x {height}m")
        return None

    return SpaceBounds.from_size(width, height)


def calculate_space_bounds(walls: Sequence[Wall]) -> Optional[SpaceBounds]:
    """Same as calculate_space_bounds_from_pixel_walls for walls already in meters."""
    extent = _raw_extent(walls)
    if extent is None:
        return None
    min_x, min_y, max_x, max_y = extent

    width = max_x - min_x
    height = max_y - min_y
    if not _positive_size(width, height):
        logger.debug(f"Degenerate wall set: {width}m x {height}m")
        return None

    return SpaceBounds.from_size(width, height)


def get_wall_normalization_offset(walls: Sequence[Wall]) -> Optional[Point]:
    """
    Raw (min_x, min_y) of the wall set, i.e. the vector to subtract from
    every wall coordinate to move the room onto the origin. None when empty.
    """
    extent = _raw_extent(walls)
    if extent is None:
        return None
    return Point(extent[0], extent[1])


def get_wall_normalization_offset_meters(
    walls: Sequence[Wall],
    pixels_per_meter: float = config.WALLMAKER_PIXELS_PER_METER,
) -> Optional[Point]:
    offset_px = get_wall_normalization_offset(walls)
    if offset_px is None or not _valid_scale(pixels_per_meter):
        return None
    return Point(offset_px.x / pixels_per_meter, offset_px.y / pixels_per_meter)


def bounds_from_walls(
    walls: Sequence[Wall],
    pixels_per_meter: float = config.WALLMAKER_PIXELS_PER_METER,
    padding_meters: float = 0.0,
    min_space_size: float = config.MIN_SPACE_SIZE,
) -> Optional[SpaceBounds]:
    """
    Recompute space bounds after a wall list change.

    The room is grown to at least min_space_size on each axis, then
    padding_meters is added on every side.

    Args:
        walls (Sequence[Wall]): Walls in pixel coordinates.
        pixels_per_meter (float): Resolution the walls were drawn at.
        padding_meters (float): Margin added on all four sides.
        min_space_size (float): Lower bound for width and height in meters.

    Returns:
        Optional[SpaceBounds]: Padded bounds, or None when the walls do not
            enclose an area.
    """
    bounds = calculate_space_bounds_from_pixel_walls(walls, pixels_per_meter)
    if bounds is None:
        return None

    width = max(bounds.width, min_space_size) + padding_meters * 2
    height = max(bounds.height, min_space_size) + padding_meters * 2
    if not _positive_size(width, height):
        logger.debug(f"Padding {padding_meters}m leaves no area: {width}m x {height}m")
        return None
    return SpaceBounds.from_size(width, height)


def create_default_space_bounds(width_meters: float = 10.0, height_meters: float = 10.0) -> SpaceBounds:
    """Bounds used before any wall has been drawn."""
    return SpaceBounds.from_size(width_meters, height_meters)


# -------------------------------------------------------------------------
# Point helpers
# -------------------------------------------------------------------------

def normalize_point(point: Point, offset: Point) -> Point:
    return Point(point.x - offset.x, point.y - offset.y)


def add_padding_to_bounds(bounds: SpaceBounds, padding_meters: float) -> SpaceBounds:
    return SpaceBounds.from_size(
        bounds.width + padding_meters * 2,
        bounds.height + padding_meters * 2,
    )


def is_point_in_bounds(point: Point, bounds: SpaceBounds) -> bool:
    """Inclusive containment test in meters."""
    return (
        bounds.min_x <= point.x <= bounds.max_x
        and bounds.min_y <= point.y <= bounds.max_y
    )


def clamp_point_to_bounds(point: Point, bounds: SpaceBounds) -> Point:
    return Point(
        max(bounds.min_x, min(bounds.max_x, point.x)),
        max(bounds.min_y, min(bounds.max_y, point.y)),
    )
