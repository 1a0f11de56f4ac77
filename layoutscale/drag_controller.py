"""
Drag Controller
===============

Moves one element at a time with grid snapping. Positions are tracked in
meters; the pointer arrives in canvas pixels and is converted with the
scale passed in on each call.

The persistence sink (on_drag_end) is written exactly once per gesture:
with the final position when the drag ends, or with the starting position
when it is cancelled.
"""

# Layoutscale imports
from layoutscale import config
from layoutscale.layout_types import GridConfig, LayoutElement, Point
from layoutscale.scale_calculator import ScaleState
from layoutscale.scale_utils import round_to_precision, snap_to_grid

# Standard library imports
import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)

PositionCallback = Callable[[str, Point], None]


@dataclass(frozen=True)
class IdleState:
    """No gesture in progress."""

    @property
    def is_dragging(self) -> bool:
        return False


@dataclass(frozen=True)
class DraggingState:
    """
    Attributes:
        element_id (str): Element being moved.
        start_position (Point): Position before the gesture, in meters.
        current_position (Point): Latest snapped position, in meters.
        pointer_offset (Point): Element position minus the real-world pointer
            position at grab time, so the element does not jump to the cursor.
    """

    element_id: str
    start_position: Point
    current_position: Point
    pointer_offset: Point

    @property
    def is_dragging(self) -> bool:
        return True


DragState = Union[IdleState, DraggingState]
IDLE = IdleState()


def snap_position(position: Point, grid: GridConfig) -> Point:
    """Grid snap when enabled, otherwise round to the nearest centimeter."""
    if grid.enabled:
        return snap_to_grid(position, grid.size)
    return Point(
        round_to_precision(position.x, config.DEFAULT_SNAP_PRECISION),
        round_to_precision(position.y, config.DEFAULT_SNAP_PRECISION),
    )


class DragController:
    """
    State machine for a single drag gesture.

    Args:
        on_drag_start (callable, optional): Called with (element_id, position)
            when a gesture begins.
        on_drag (callable, optional): Called with every intermediate position.
        on_drag_end (callable, optional): The persistence sink.
    """

    def __init__(
        self,
        on_drag_start: Optional[PositionCallback] = None,
        on_drag: Optional[PositionCallback] = None,
        on_drag_end: Optional[PositionCallback] = None,
    ):
        self.on_drag_start = on_drag_start
        self.on_drag = on_drag
        self.on_drag_end = on_drag_end
        self.state: DragState = IDLE

    @property
    def is_dragging(self) -> bool:
        return self.state.is_dragging

    def start_drag(self, element: LayoutElement, pointer_canvas: Point, scale: Optional[ScaleState]) -> None:
        if scale is None:
            logger.debug(f"Drag of {element.id} ignored: no scale available")
            return

        pointer_real = scale.canvas_to_real(pointer_canvas)
        self.state = DraggingState(
            element_id=element.id,
            start_position=element.position,
            current_position=element.position,
            pointer_offset=element.position - pointer_real,
        )
        if self.on_drag_start is not None:
            self.on_drag_start(element.id, element.position)

    def update_drag(self, pointer_canvas: Point, scale: Optional[ScaleState], grid: GridConfig) -> Optional[Point]:
        """
        Move the dragged element under the pointer.

        Returns:
            Optional[Point]: The new snapped position, or None when idle or
                without a scale.
        """
        if scale is None or not isinstance(self.state, DraggingState):
            return None

        pointer_real = scale.canvas_to_real(pointer_canvas)
        position = snap_position(pointer_real + self.state.pointer_offset, grid)
        self.state = replace(self.state, current_position=position)

        if self.on_drag is not None:
            self.on_drag(self.state.element_id, position)
        return position

    def end_drag(self, grid: GridConfig) -> Optional[Point]:
        """Commit the gesture. Returns the final position, or None when idle."""
        state = self.state
        self.state = IDLE
        if not isinstance(state, DraggingState):
            return None

        final_position = snap_position(state.current_position, grid)
        logger.debug(f"Drag end {state.element_id}: ({final_position.x:.2f}, {final_position.y:.2f})")
        if self.on_drag_end is not None:
            self.on_drag_end(state.element_id, final_position)
        return final_position

    def cancel_drag(self) -> Optional[Point]:
        """Abort the gesture and restore the element's starting position."""
        state = self.state
        self.state = IDLE
        if not isinstance(state, DraggingState):
            return None

        if self.on_drag_end is not None:
            self.on_drag_end(state.element_id, state.start_position)
        return state.start_position
