"""
Layout Session
==============

Owns the editable state of one layout and keeps the scale consistent with
it. Every setter recomputes the ScaleState before returning, so a caller
that changes the walls, the canvas size or the zoom can immediately render
with session.scale.

Walls are supplied in the wall tool's pixel coordinates; elements are in
meters relative to the normalized room origin.
"""

# Layoutscale imports
from layoutscale import config
from layoutscale.layout_types import CanvasSize, GridConfig, LayoutElement, Point, SpaceBounds, Wall
from layoutscale.scale_calculator import ScaleInputs, ScaleState, calculate_zoom_at_point, recompute_scale
from layoutscale.space_bounds import bounds_from_walls, get_wall_normalization_offset
from layoutscale.viewport import ViewportObserver
from layoutscale.zoom_controller import ZoomController

# Standard library imports
import logging
from typing import Callable, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)


class LayoutSession:
    """
    Explicit recompute-on-change holder for walls, elements and scale.

    Args:
        elements (Sequence[LayoutElement], optional): Initial elements.
        walls (Sequence[Wall], optional): Initial walls in pixels.
        space_bounds (SpaceBounds, optional): Used when no walls are given.
        wall_pixels_per_meter (float): Resolution the walls were drawn at.
        padding (float): Fraction of the canvas the room may occupy.
        snap_to_clean_scale (bool): Snap the base scale to clean values.
        grid (GridConfig, optional): Initial grid settings.
        zoom (ZoomController, optional): Initial zoom state.
        on_position_committed (callable, optional): External persistence
            sink, called after apply_position() stores a position.
    """

    def __init__(
        self,
        elements:               Optional[Sequence[LayoutElement]]           = None,
        walls:                  Optional[Sequence[Wall]]                    = None,
        space_bounds:           Optional[SpaceBounds]                       = None,
        wall_pixels_per_meter:  float                                       = config.WALLMAKER_PIXELS_PER_METER,
        padding:                float                                       = config.DEFAULT_PADDING,
        snap_to_clean_scale:    bool                                        = False,
        grid:                   Optional[GridConfig]                        = None,
        zoom:                   Optional[ZoomController]                    = None,
        on_position_committed:  Optional[Callable[[str, Point], None]]      = None,
    ):
        self.wall_pixels_per_meter                      = wall_pixels_per_meter
        self.padding                                    = padding
        self.snap_to_clean_scale                        = snap_to_clean_scale
        self.grid:              GridConfig              = grid or GridConfig()
        self.zoom:              ZoomController          = zoom or ZoomController()
        self.viewport                                   = ViewportObserver()
        self.on_position_committed                      = on_position_committed

        self.walls:             List[Wall]              = []
        self.wall_offset:       Optional[Point]         = None
        self.space_bounds:      Optional[SpaceBounds]   = space_bounds
        self._elements:         Dict[str, LayoutElement] = {}
        for element in elements or []:
            self._elements[element.id] = element

        self.scale:             Optional[ScaleState]    = None
        self._scale_inputs:     Optional[ScaleInputs]   = None

        if walls:
            self.set_walls(walls)
        else:
            self._recompute()

    # -------------------------------------------------------------------------
    # Scale recompute
    # -------------------------------------------------------------------------

    def _current_inputs(self) -> ScaleInputs:
        return ScaleInputs(
            space_bounds=self.space_bounds,
            canvas_size=self.viewport.canvas_size,
            zoom=self.zoom.zoom,
            padding=self.padding,
            snap_to_clean_scale=self.snap_to_clean_scale,
        )

    def _recompute(self) -> Optional[ScaleState]:
        inputs = self._current_inputs()
        self.scale = recompute_scale(self._scale_inputs, self.scale, inputs)
        self._scale_inputs = inputs
        return self.scale

    # -------------------------------------------------------------------------
    # Setters
    # -------------------------------------------------------------------------

    def set_walls(self, walls: Sequence[Wall]) -> Optional[ScaleState]:
        """Replace the wall list; bounds then scale are recomputed."""
        self.walls = list(walls)
        self.wall_offset = get_wall_normalization_offset(self.walls)
        self.space_bounds = bounds_from_walls(self.walls, self.wall_pixels_per_meter)
        if self.space_bounds is None:
            logger.info("Walls do not enclose an area; layout has no scale")
        return self._recompute()

    def set_space_bounds(self, space_bounds: Optional[SpaceBounds]) -> Optional[ScaleState]:
        self.space_bounds = space_bounds
        return self._recompute()

    def set_canvas_size(self, width: float, height: float) -> Optional[ScaleState]:
        self.viewport.observe(width, height)
        return self._recompute()

    def set_zoom(self, zoom: float) -> Optional[ScaleState]:
        self.zoom = self.zoom.set_zoom(zoom)
        return self._recompute()

    def zoom_in(self) -> Optional[ScaleState]:
        self.zoom = self.zoom.zoom_in()
        return self._recompute()

    def zoom_out(self) -> Optional[ScaleState]:
        self.zoom = self.zoom.zoom_out()
        return self._recompute()

    def fit_to_canvas(self) -> Optional[ScaleState]:
        self.zoom = self.zoom.fit_to_canvas()
        return self._recompute()

    def zoom_at(self, cursor_canvas: Point, new_zoom: float) -> Optional[ScaleState]:
        """
        Zoom keeping the real point under cursor_canvas fixed on screen.

        The shifted offset persists until the next change of bounds, canvas
        size or zoom, which re-centres the room.
        """
        self.zoom = self.zoom.set_zoom(new_zoom)
        if self.scale is None:
            logger.debug("Zoom-to-cursor ignored: no scale available")
            return self._recompute()

        self.scale = calculate_zoom_at_point(self.scale, self.zoom.zoom, cursor_canvas)
        self._scale_inputs = self._current_inputs()
        return self.scale

    def set_grid(self, grid: GridConfig) -> None:
        self.grid = grid

    def toggle_snap(self) -> None:
        self.grid = self.grid.toggle_snap()

    def toggle_grid_visible(self) -> None:
        self.grid = self.grid.toggle_visible()

    def set_grid_size(self, size: float) -> None:
        self.grid = self.grid.with_size(size)

    # -------------------------------------------------------------------------
    # Elements
    # -------------------------------------------------------------------------

    @property
    def elements(self) -> List[LayoutElement]:
        """Elements in draw order (insertion order)."""
        return list(self._elements.values())

    def get_element(self, element_id: str) -> Optional[LayoutElement]:
        return self._elements.get(element_id)

    def set_elements(self, elements: Sequence[LayoutElement]) -> None:
        """Replace every element, keeping the given order."""
        self._elements = {element.id: element for element in elements}

    def add_element(self, element: LayoutElement) -> None:
        self._elements[element.id] = element

    def remove_element(self, element_id: str) -> Optional[LayoutElement]:
        return self._elements.pop(element_id, None)

    def preview_position(self, element_id: str, position: Point) -> None:
        """Move an element for display during a drag without committing it."""
        element = self._elements.get(element_id)
        if element is not None:
            self._elements[element_id] = element.with_position(position)

    def apply_position(self, element_id: str, position: Point) -> None:
        """Persistence sink: store a committed position and notify the owner."""
        element = self._elements.get(element_id)
        if element is None:
            logger.warning(f"Position for unknown element '{element_id}' ignored")
            return
        self._elements[element_id] = element.with_position(position)
        if self.on_position_committed is not None:
            self.on_position_committed(element_id, position)

    # -------------------------------------------------------------------------
    # Debug
    # -------------------------------------------------------------------------

    def debug_summary(self) -> str:
        """Multi-line scale readout for the status panel."""
        bounds = self.space_bounds
        canvas = self.viewport.canvas_size
        lines = [
            "Space: " + (f"{bounds.width:.1f}m x {bounds.height:.1f}m" if bounds else "none"),
            "Scale: " + (f"{self.scale.pixels_per_meter:.2f} px/m" if self.scale else "none"),
            f"Zoom: {self.zoom.zoom_display}",
            f"Canvas: {canvas.width:.0f} x {canvas.height:.0f}px",
            "Offset: " + (f"({self.scale.offset.x:.0f}, {self.scale.offset.y:.0f})" if self.scale else "none"),
            f"Grid: {self.grid.size * 100:.0f}cm"
            f" {'snap' if self.grid.enabled else 'free'}"
            f" {'shown' if self.grid.visible else 'hidden'}",
        ]
        return "\n".join(lines)
