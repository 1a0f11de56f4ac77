"""
Core value types for the layout proportion system.

All measurements are either real-world meters or canvas pixels; the unit of a
Point is given by context and is never mixed without an explicit conversion.
Every type here is an immutable dataclass: "changing" a value produces a new
instance, so observers holding an older reference never read a half-updated
state.

This module contains:
- Point, SpaceBounds, CanvasSize, GridConfig, AnchorPoint
- FixedDimensions / ConfigurableDimensions: the ElementDimensions union
- ElementKind: the closed set of element kinds the editor understands
- LayoutElement, ElementRenderData, Wall
"""

# Layoutscale imports
from layoutscale import config

# Standard library imports
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union


class InvalidGeometryError(ValueError):
    """Raised when space or canvas dimensions cannot produce a scale."""


@dataclass(frozen=True)
class Point:
    """A 2D coordinate in meters or pixels."""

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class SpaceBounds:
    """
    Real-world extent of the room in meters, normalized to the origin.

    Attributes:
        min_x (float): Always 0 after extraction.
        min_y (float): Always 0 after extraction.
        max_x (float): Equals width after extraction.
        max_y (float): Equals height after extraction.
        width (float): Room width in meters, strictly positive.
        height (float): Room height in meters, strictly positive.

    A room that does not enclose an area has no bounds at all; callers use
    None for that case instead of a zero-sized instance.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float
    width: float
    height: float

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidGeometryError(f"Space bounds {name} must be positive, got {value}")

    @classmethod
    def from_size(cls, width: float, height: float) -> "SpaceBounds":
        return cls(min_x=0.0, min_y=0.0, max_x=width, max_y=height, width=width, height=height)


@dataclass(frozen=True)
class CanvasSize:
    """Pixel dimensions of the rendering canvas. (0, 0) means not yet measured."""

    width: float
    height: float

    @property
    def is_measured(self) -> bool:
        return (
            math.isfinite(self.width) and math.isfinite(self.height)
            and self.width > 0 and self.height > 0
        )


UNMEASURED_CANVAS = CanvasSize(0.0, 0.0)


@dataclass(frozen=True)
class GridConfig:
    """
    Snapping and visual grid settings.

    Attributes:
        size (float): Grid cell size in meters, strictly positive.
        enabled (bool): Snap dragged positions to the grid.
        visible (bool): Draw grid lines.
    """

    size: float = config.DEFAULT_GRID_SIZE
    enabled: bool = True
    visible: bool = True

    def __post_init__(self):
        if not math.isfinite(self.size) or self.size <= 0:
            raise ValueError(f"Grid size must be positive, got {self.size}")

    def toggle_snap(self) -> "GridConfig":
        return replace(self, enabled=not self.enabled)

    def toggle_visible(self) -> "GridConfig":
        return replace(self, visible=not self.visible)

    def with_size(self, size: float) -> "GridConfig":
        """Return a copy using the new cell size; non-positive sizes are ignored."""
        if not math.isfinite(size) or size <= 0:
            return self
        return replace(self, size=size)


@dataclass(frozen=True)
class AnchorPoint:
    """Fraction of the element's bounding box that coincides with its position."""

    x: float = 0.5
    y: float = 0.5


DEFAULT_ANCHOR = AnchorPoint(0.5, 0.5)


# -------------------------------------------------------------------------
# Element dimensions
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class FixedDimensions:
    """
    Fixed real-world footprint.

    When diameter is set the footprint is circular and the diameter applies
    to both axes; otherwise width and height are used as given.
    """

    diameter: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    def real_size(self) -> Tuple[float, float]:
        if self.diameter is not None:
            return (self.diameter, self.diameter)
        return (
            self.width if self.width is not None else 0.0,
            self.height if self.height is not None else 0.0,
        )


@dataclass(frozen=True)
class ConfigurableDimensions:
    """
    Footprint built from whole units, e.g. dance floor panels or bar modules.

    units_wide / units_deep are kept within [min_units, max_units] by the
    owning editor through with_units(); real_size() does not clamp.
    """

    unit_size: float
    units_wide: int
    units_deep: int
    min_units: int
    max_units: int

    def real_size(self) -> Tuple[float, float]:
        return (self.unit_size * self.units_wide, self.unit_size * self.units_deep)

    def with_units(self, units_wide: int, units_deep: int) -> "ConfigurableDimensions":
        """Return a copy with unit counts clamped to the allowed range."""
        wide = max(self.min_units, min(self.max_units, int(units_wide)))
        deep = max(self.min_units, min(self.max_units, int(units_deep)))
        return replace(self, units_wide=wide, units_deep=deep)


ElementDimensions = Union[FixedDimensions, ConfigurableDimensions]


class ElementShape(Enum):
    ROUND = "round"
    RECTANGLE = "rectangle"


class ElementKind(Enum):
    """Closed set of element kinds placed on the layout."""

    TABLE_ROUND = "table_round"
    TABLE_RECTANGULAR = "table_rectangular"
    TABLE_IMPERIAL = "table_imperial"
    CHAIR = "chair"
    DANCE_FLOOR = "dance_floor"
    STAGE = "stage"
    DJ_BOOTH = "dj_booth"
    BAR = "bar"
    GENERIC = "generic"

    @property
    def shape(self) -> ElementShape:
        if self is ElementKind.TABLE_ROUND:
            return ElementShape.ROUND
        return ElementShape.RECTANGLE

    @property
    def is_table(self) -> bool:
        return self.value.startswith("table_")


@dataclass(frozen=True)
class LayoutElement:
    """
    An element placed in the room. Position is in meters.

    Attributes:
        id (str): Stable identifier owned by the external editor state.
        kind (ElementKind): What the element is.
        position (Point): Real-world location of the anchor point.
        rotation (float): Degrees, applied by the renderer around the centre.
        dimensions (ElementDimensions): Fixed or unit-configurable footprint.
        anchor (AnchorPoint, optional): Defaults to the centre.
        label (str, optional): Display text.
    """

    id: str
    kind: ElementKind
    position: Point
    dimensions: ElementDimensions
    rotation: float = 0.0
    anchor: Optional[AnchorPoint] = None
    label: Optional[str] = None

    @property
    def resolved_anchor(self) -> AnchorPoint:
        return self.anchor if self.anchor is not None else DEFAULT_ANCHOR

    def with_position(self, position: Point) -> "LayoutElement":
        return replace(self, position=position)


@dataclass(frozen=True)
class ElementRenderData:
    """Canvas-space box for one element. All values in pixels except rotation."""

    x: float            # top-left corner
    y: float
    width: float
    height: float
    center_x: float
    center_y: float
    rotation: float     # degrees, unchanged from the element


@dataclass(frozen=True)
class Wall:
    """A wall segment. Start and end share one coordinate system per call."""

    start: Point
    end: Point
    thickness: float = 0.0
    id: Optional[str] = None

    @property
    def length(self) -> float:
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)
