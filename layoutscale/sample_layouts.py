"""
Sample layouts for verifying proportions by eye and in tests.

In the 20m x 15m test venue a 1.8m table covers 9% of the room width, and
the table at (5, 5) sits 25% from the left and a third from the top.
"""

# Layoutscale imports
from layoutscale.layout_types import (
    ConfigurableDimensions,
    ElementKind,
    FixedDimensions,
    LayoutElement,
    Point,
    SpaceBounds,
    Wall,
)

# Standard library imports
from typing import List


TEST_SPACE_BOUNDS = SpaceBounds.from_size(20.0, 15.0)

# fmt: off
# autopep8: off
TEST_ELEMENTS: List[LayoutElement] = [
    LayoutElement("test-round-table-1",  ElementKind.TABLE_ROUND,       Point(5, 5),    FixedDimensions(diameter=1.8),            0,   label="Table 1"),
    LayoutElement("test-round-table-2",  ElementKind.TABLE_ROUND,       Point(8, 5),    FixedDimensions(diameter=1.5),            0,   label="Table 2"),
    LayoutElement("test-rect-table",     ElementKind.TABLE_RECTANGULAR, Point(12, 5),   FixedDimensions(width=2.4, height=0.9),   45,  label="Rect Table"),
    LayoutElement("test-imperial-table", ElementKind.TABLE_IMPERIAL,    Point(16, 5),   FixedDimensions(width=2.4, height=1.2),   0,   label="Imperial"),
    LayoutElement("test-dance-floor",    ElementKind.DANCE_FLOOR,       Point(10, 10),  ConfigurableDimensions(0.6, 5, 4, 2, 20), 0,   label="Dance Floor"),
    LayoutElement("test-stage",          ElementKind.STAGE,             Point(10, 2),   FixedDimensions(width=6.0, height=4.0),   0,   label="Stage"),
    LayoutElement("test-chair-1",        ElementKind.CHAIR,             Point(3.5, 5),  FixedDimensions(width=0.45, height=0.45), 90),
    LayoutElement("test-chair-2",        ElementKind.CHAIR,             Point(6.5, 5),  FixedDimensions(width=0.45, height=0.45), -90),
]
# fmt: on
# autopep8: on


def create_venue_walls(width_m: float = 20.0, height_m: float = 15.0, pixels_per_meter: float = 100.0,
                       origin_px: Point = Point(0.0, 0.0), thickness_px: float = 20.0) -> List[Wall]:
    """Four walls enclosing a rectangular room, in wall tool pixel coordinates."""
    x0, y0 = origin_px.x, origin_px.y
    x1, y1 = x0 + width_m * pixels_per_meter, y0 + height_m * pixels_per_meter
    return [
        Wall(Point(x0, y0), Point(x1, y0), thickness_px, id="wall-north"),
        Wall(Point(x1, y0), Point(x1, y1), thickness_px, id="wall-east"),
        Wall(Point(x1, y1), Point(x0, y1), thickness_px, id="wall-south"),
        Wall(Point(x0, y1), Point(x0, y0), thickness_px, id="wall-west"),
    ]


def create_proportion_test_elements(space_width: float = 20.0, space_height: float = 15.0) -> List[LayoutElement]:
    """
    Reference markers at known positions and sizes.

    Returns:
        List[LayoutElement]: 1m circles inset 1m from each corner, a 2m circle
            at the centre and a 1m x 1m square at (5, 5).
    """
    corners = [
        Point(1, 1),
        Point(space_width - 1, 1),
        Point(1, space_height - 1),
        Point(space_width - 1, space_height - 1),
    ]
    elements = [
        LayoutElement(
            id=f"corner-marker-{i}",
            kind=ElementKind.TABLE_ROUND,
            position=pos,
            dimensions=FixedDimensions(diameter=1.0),
            label=f"C{i + 1}",
        )
        for i, pos in enumerate(corners)
    ]
    elements.append(LayoutElement(
        id="center-marker",
        kind=ElementKind.TABLE_ROUND,
        position=Point(space_width / 2, space_height / 2),
        dimensions=FixedDimensions(diameter=2.0),
        label="Center",
    ))
    elements.append(LayoutElement(
        id="scale-reference",
        kind=ElementKind.TABLE_RECTANGULAR,
        position=Point(5, 5),
        dimensions=FixedDimensions(width=1.0, height=1.0),
        label="1m x 1m",
    ))
    return elements


def create_wedding_layout() -> List[LayoutElement]:
    """Head table, a 3x3 grid of guest tables T1..T9 and a dance floor."""
    elements = [
        LayoutElement(
            id="head-table",
            kind=ElementKind.TABLE_IMPERIAL,
            position=Point(10, 2),
            dimensions=FixedDimensions(width=2.4, height=1.2),
            label="Head Table",
        )
    ]

    start_x, start_y, spacing = 4, 6, 4
    table_num = 1
    for row in range(3):
        for col in range(3):
            elements.append(LayoutElement(
                id=f"guest-table-{table_num}",
                kind=ElementKind.TABLE_ROUND,
                position=Point(start_x + col * spacing, start_y + row * spacing),
                dimensions=FixedDimensions(diameter=1.8),
                label=f"T{table_num}",
            ))
            table_num += 1

    elements.append(LayoutElement(
        id="dance-floor",
        kind=ElementKind.DANCE_FLOOR,
        position=Point(16, 10),
        dimensions=ConfigurableDimensions(unit_size=0.6, units_wide=6, units_deep=5, min_units=2, max_units=20),
        label="Dance Floor",
    ))
    return elements
