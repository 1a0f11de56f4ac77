"""
Wall Adapter
============

Moves wall geometry between the pixel coordinates the wall drawing tool
stores and the meter coordinates the layout scale works in. Thickness is
a length, so it is scaled along with the endpoints.
"""

# Layoutscale imports
from layoutscale.config import WALLMAKER_PIXELS_PER_METER
from layoutscale.layout_types import ORIGIN, Point, Wall

# Standard library imports
from dataclasses import replace
from typing import List, Sequence, Tuple


def convert_wall_to_meters(wall: Wall, pixels_per_meter: float = WALLMAKER_PIXELS_PER_METER) -> Wall:
    return Wall(
        start=Point(wall.start.x / pixels_per_meter, wall.start.y / pixels_per_meter),
        end=Point(wall.end.x / pixels_per_meter, wall.end.y / pixels_per_meter),
        thickness=wall.thickness / pixels_per_meter,
        id=wall.id,
    )


def convert_walls_to_meters(walls: Sequence[Wall], pixels_per_meter: float = WALLMAKER_PIXELS_PER_METER) -> List[Wall]:
    return [convert_wall_to_meters(wall, pixels_per_meter) for wall in walls]


def convert_wall_to_pixels(wall: Wall, pixels_per_meter: float = WALLMAKER_PIXELS_PER_METER) -> Wall:
    return Wall(
        start=Point(wall.start.x * pixels_per_meter, wall.start.y * pixels_per_meter),
        end=Point(wall.end.x * pixels_per_meter, wall.end.y * pixels_per_meter),
        thickness=wall.thickness * pixels_per_meter,
        id=wall.id,
    )


def convert_walls_to_pixels(walls: Sequence[Wall], pixels_per_meter: float = WALLMAKER_PIXELS_PER_METER) -> List[Wall]:
    return [convert_wall_to_pixels(wall, pixels_per_meter) for wall in walls]


def normalize_walls(walls: Sequence[Wall]) -> Tuple[List[Wall], Point]:
    """
    Shift walls so the smallest x and y coordinates become 0.

    Works for either unit system since only subtraction is involved.

    Returns:
        Tuple[List[Wall], Point]: The shifted walls and the offset that was
            subtracted. An empty input gives ([], Point(0, 0)).
    """
    if not walls:
        return [], ORIGIN

    min_x = min(min(w.start.x, w.end.x) for w in walls)
    min_y = min(min(w.start.y, w.end.y) for w in walls)
    offset = Point(min_x, min_y)

    shifted = [replace(w, start=w.start - offset, end=w.end - offset) for w in walls]
    return shifted, offset


def calculate_total_wall_length(walls: Sequence[Wall], pixels_per_meter: float = WALLMAKER_PIXELS_PER_METER) -> float:
    """Total length in meters of walls given in pixel coordinates."""
    return sum(wall.length for wall in walls) / pixels_per_meter
