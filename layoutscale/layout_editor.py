"""
Interactive Layout Editor for venue floor plans.

Draws the room walls, an adaptive alignment grid and every layout element
at true proportional size, and lets the user drag elements around with grid
snapping. The axes use canvas pixels as data coordinates with y pointing
down, so the scale engine's canvas positions plot directly.

Controls:
    Left-drag         Move element (snaps to grid when snap is on)
    Ctrl+Scroll       Zoom centred on cursor
    Ctrl +/-          Zoom in / out
    Ctrl 0            Fit room to window
    g                 Toggle grid lines
    s                 Toggle grid snap
    Delete/Backspace  Delete selected elements
    Escape            Cancel drag / clear selection
    Ctrl A            Select all
    Ctrl C / Ctrl V   Copy / paste selection

Elements are written with their footprints to an optional JSON session file
whenever the layout changes. Reopening the editor restores that element set.
"""

# fmt: off
# autopep8: off

# Standard library imports
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Set

# Third-party imports
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.patches import Circle, Rectangle
import numpy as np
import pandas as pd

# Layoutscale imports
from layoutscale import config
from layoutscale.drag_controller import DragController
from layoutscale.element_render import calculate_render_frame, hit_test
from layoutscale.grid_lines import calculate_grid_lines
from layoutscale.keyboard import KEY_BINDINGS, KeyboardHandlers, dispatch_key
from layoutscale.layout_session import LayoutSession
from layoutscale.layout_types import (
    AnchorPoint,
    ConfigurableDimensions,
    ElementKind,
    FixedDimensions,
    LayoutElement,
    Point,
)
from layoutscale.scale_utils import real_to_canvas_array
from layoutscale.wall_adapter import convert_walls_to_meters, normalize_walls

logger = logging.getLogger(__name__)


class LayoutEditor:
    """Interactive matplotlib host for a LayoutSession.

    Args:
        session: The layout to edit. Its canvas size is driven by this window.
        session_path: Optional JSON file receiving the element set. If it
            already exists, its elements replace the session's on launch.
        show: Open the window and block in plt.show(). Pass False to drive
            the editor programmatically.
    """

    _WINDOW_TITLE = config.EDITOR_WINDOW_TITLE
    _PASTE_OFFSET = 0.5     # meters

    def __init__(
        self,
        session:                LayoutSession,
        session_path:           Optional[Path]              = None,
        show:                   bool                        = True,
    ):
        self.session                                    = session
        self.session_path                               = Path(session_path) if session_path else None

        # Selection / clipboard
        self.selected_ids:          Set[str]            = set()
        self.clipboard:             List[LayoutElement] = []
        self._paste_count:          int                 = 0

        # Last rendered element boxes, used for hit-testing clicks
        self._render_frame:         pd.DataFrame        = pd.DataFrame()

        self.drag = DragController(
            on_drag         = self._on_drag_preview,
            on_drag_end     = self._commit_position,
        )
        self.keyboard_handlers = KeyboardHandlers(
            on_zoom_in              = self.session.zoom_in,
            on_zoom_out             = self.session.zoom_out,
            on_fit_to_canvas        = self.session.fit_to_canvas,
            on_toggle_grid_visible  = self.session.toggle_grid_visible,
            on_toggle_snap          = self.session.toggle_snap,
            on_delete               = self._delete_selected,
            on_escape               = self._escape,
            on_select_all           = self._select_all,
            on_copy                 = self._copy_selected,
            on_paste                = self._paste,
        )

        # Our shortcuts take precedence over matplotlib's navigation keys
        self._release_default_keymaps()

        # Setup matplotlib figure
        self.fig = plt.figure(figsize=config.EDITOR_FIGSIZE, facecolor=config.EDITOR_FACECOLOR)
        if self.fig.canvas.manager is not None:
            self.fig.canvas.manager.set_window_title(self._WINDOW_TITLE)

        # Main canvas (left) and status panel (right strip)
        self.ax = self.fig.add_axes([0.02, 0.04, 0.80, 0.92])
        self.ax.set_facecolor(config.CANVAS_FACECOLOR)
        self.ax_status = self.fig.add_axes([0.84, 0.04, 0.14, 0.92])
        self.ax_status.axis('off')
        self._status_text = self.ax_status.text(
            0.0, 1.0, "", va='top', ha='left', family='monospace', fontsize=9,
            transform=self.ax_status.transAxes,
        )
        self._message_text = self.ax_status.text(
            0.0, 0.0, "", va='bottom', ha='left', fontsize=9, wrap=True,
            transform=self.ax_status.transAxes,
        )

        self._load_session()

        # Measure the canvas and draw the first frame
        self._sync_canvas_size()
        self._render()

        # Event handlers
        self.fig.canvas.mpl_connect('button_press_event', self._on_press)
        self.fig.canvas.mpl_connect('button_release_event', self._on_release)
        self.fig.canvas.mpl_connect('motion_notify_event', self._on_motion)
        self.fig.canvas.mpl_connect('key_press_event', self._on_key_press)
        self.fig.canvas.mpl_connect('scroll_event', self._on_scroll)
        self.fig.canvas.mpl_connect('resize_event', self._on_resize)

        if show:
            print("\n=== Layout Scale Editor ===")
            print(f"Loaded {len(self.session.elements)} element(s)")
            print("Drag: move | Ctrl+Scroll: zoom | Ctrl 0: fit | g: grid | s: snap")
            print("Delete: remove | Esc: cancel | Ctrl A/C/V: select all / copy / paste")
            print("===========================\n")
            plt.show()

    # -------------------------------------------------------------------------
    # Canvas sizing
    # -------------------------------------------------------------------------

    @staticmethod
    def _release_default_keymaps():
        """Remove our shortcut keys from matplotlib's default keymaps."""
        for param in [p for p in plt.rcParams if p.startswith('keymap.')]:
            keys = plt.rcParams[param]
            kept = [k for k in keys if k not in KEY_BINDINGS]
            if len(kept) != len(keys):
                plt.rcParams[param] = kept

    def _sync_canvas_size(self) -> bool:
        """Match data limits to the axes pixel size so 1 data unit = 1 pixel."""
        bbox   = self.ax.get_window_extent()
        width  = float(bbox.width)
        height = float(bbox.height)
        changed = self.session.viewport.canvas_size.width != width or self.session.viewport.canvas_size.height != height
        self.session.set_canvas_size(width, height)
        if width > 0 and height > 0:
            self.ax.set_xlim(0, width)
            self.ax.set_ylim(height, 0)     # y down, like a screen canvas
        return changed

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _pixels_to_points(self, pixels: float) -> float:
        return pixels * 72.0 / self.fig.dpi

    def _render(self):
        """Redraw walls, grid and elements for the current scale."""
        self.ax.cla()
        self.ax.set_facecolor(config.CANVAS_FACECOLOR)
        self.ax.set_xticks([])
        self.ax.set_yticks([])
        canvas = self.session.viewport.canvas_size
        if canvas.is_measured:
            self.ax.set_xlim(0, canvas.width)
            self.ax.set_ylim(canvas.height, 0)

        scale = self.session.scale
        if scale is None:
            self._render_frame = pd.DataFrame()
            self.ax.text(0.5, 0.5, "Draw walls to define the space...", ha='center', va='center',
                         transform=self.ax.transAxes, color='#6b7280')
            self._update_status()
            self.fig.canvas.draw_idle()
            return

        self._draw_grid(scale)
        self._draw_walls(scale)
        self._draw_elements(scale)
        self._update_status()
        self.fig.canvas.draw_idle()

    def _draw_grid(self, scale):
        lines = calculate_grid_lines(scale, self.session.grid)
        if lines.is_empty:
            return
        segments = np.concatenate([lines.vertical, lines.horizontal])
        major    = np.concatenate([lines.vertical_major, lines.horizontal_major])
        if (~major).any():
            self.ax.add_collection(LineCollection(segments[~major], colors=config.GRID_MINOR_COLOR, linewidths=0.5, zorder=1))
        if major.any():
            self.ax.add_collection(LineCollection(segments[major], colors=config.GRID_MAJOR_COLOR, linewidths=1.0, zorder=1))

    def _draw_walls(self, scale):
        if not self.session.walls:
            return
        # Walls are stored in pixels at the wall tool's resolution; bring them
        # into normalized meters before placing them on this canvas
        normalized, _ = normalize_walls(self.session.walls)
        meter_walls   = convert_walls_to_meters(normalized, self.session.wall_pixels_per_meter)
        for wall in meter_walls:
            pts = real_to_canvas_array(np.array([wall.start.as_tuple(), wall.end.as_tuple()]), scale.pixels_per_meter, scale.offset)
            width_pt = max(1.0, self._pixels_to_points(scale.meters_to_pixels(wall.thickness)))
            self.ax.plot(pts[:, 0], pts[:, 1], color=config.WALL_COLOR, linewidth=width_pt, solid_capstyle='projecting', zorder=2)

    def _draw_elements(self, scale):
        frame = calculate_render_frame(self.session.elements, scale)
        self._render_frame = frame
        for row in frame.itertuples(index=False):
            selected  = row.id in self.selected_ids
            edgecolor = config.SELECTED_EDGECOLOR if selected else config.ELEMENT_EDGECOLOR
            linewidth = 2.0 if selected else 1.0
            if row.shape == 'round':
                patch = Circle((row.center_x, row.center_y), row.width / 2,
                               facecolor=config.ELEMENT_FACECOLOR, edgecolor=edgecolor, linewidth=linewidth, zorder=3)
            else:
                patch = Rectangle((row.x, row.y), row.width, row.height, angle=row.rotation, rotation_point='center',
                                  facecolor=config.ELEMENT_FACECOLOR, edgecolor=edgecolor, linewidth=linewidth, zorder=3)
            self.ax.add_patch(patch)
            if row.label:
                self.ax.text(row.center_x, row.center_y, row.label, ha='center', va='center', fontsize=8, zorder=4)

    def _update_status(self, message: Optional[str] = None):
        self._status_text.set_text(self.session.debug_summary())
        if message is not None:
            self._message_text.set_text(message)

    # -------------------------------------------------------------------------
    # Mouse events
    # -------------------------------------------------------------------------

    def _on_press(self, event):
        """Left-click selects the topmost element under the cursor and starts a drag."""
        if event.inaxes != self.ax or event.button != 1:
            return
        if event.xdata is None or event.ydata is None:
            return

        pointer = Point(float(event.xdata), float(event.ydata))
        element_id = hit_test(self._render_frame, pointer)
        if element_id is None:
            self.selected_ids.clear()
            self._render()
            return

        self.selected_ids = {element_id}
        element = self.session.get_element(element_id)
        self.drag.start_drag(element, pointer, self.session.scale)
        self._render()

    def _on_motion(self, event):
        if not self.drag.is_dragging or event.inaxes != self.ax:
            return
        if event.xdata is None or event.ydata is None:
            return
        self.drag.update_drag(Point(float(event.xdata), float(event.ydata)), self.session.scale, self.session.grid)
        self._render()

    def _on_release(self, event):
        if event.button != 1 or not self.drag.is_dragging:
            return
        self.drag.end_drag(self.session.grid)
        self._render()

    def _on_scroll(self, event):
        """Ctrl+wheel zooms around the cursor; plain scrolling is left alone."""
        key = event.key or ''
        modifier = any(key == m or key.startswith(m + '+') for m in config.ZOOM_MODIFIER_KEYS)
        new_zoom = self.session.zoom.handle_wheel(event.step, modifier)
        if new_zoom is None:
            return

        if event.inaxes == self.ax and event.xdata is not None and event.ydata is not None:
            self.session.zoom_at(Point(float(event.xdata), float(event.ydata)), new_zoom.zoom)
        else:
            self.session.set_zoom(new_zoom.zoom)
        self._render()

    def _on_resize(self, event):
        if self._sync_canvas_size():
            self._render()

    # -------------------------------------------------------------------------
    # Keyboard
    # -------------------------------------------------------------------------

    def _on_key_press(self, event):
        action = dispatch_key(event.key, self.keyboard_handlers)
        if action is not None:
            self._update_status(f"{action.value.replace('_', ' ')}")
            self._render()

    def _escape(self):
        if self.drag.is_dragging:
            self.drag.cancel_drag()
        else:
            self.selected_ids.clear()

    def _delete_selected(self):
        for element_id in sorted(self.selected_ids):
            self.session.remove_element(element_id)
            logger.info(f"Deleted element '{element_id}'")
        self.selected_ids.clear()
        self._save_session()

    def _select_all(self):
        self.selected_ids = {element.id for element in self.session.elements}

    def _copy_selected(self):
        self.clipboard = [e for e in self.session.elements if e.id in self.selected_ids]
        self._paste_count = 0

    def _paste(self):
        """Paste copies shifted diagonally, selecting the new elements."""
        if not self.clipboard:
            return
        self._paste_count += 1
        shift = Point(self._PASTE_OFFSET * self._paste_count, self._PASTE_OFFSET * self._paste_count)
        new_ids = set()
        for element in self.clipboard:
            new_id = self._unique_id(element.id)
            self.session.add_element(replace(element, id=new_id, position=element.position + shift))
            new_ids.add(new_id)
        self.selected_ids = new_ids
        self._save_session()

    def _unique_id(self, base: str) -> str:
        n = 1
        while self.session.get_element(f"{base}-copy{n}") is not None:
            n += 1
        return f"{base}-copy{n}"

    # -------------------------------------------------------------------------
    # Drag callbacks
    # -------------------------------------------------------------------------

    def _on_drag_preview(self, element_id: str, position: Point):
        self.session.preview_position(element_id, position)

    def _commit_position(self, element_id: str, position: Point):
        self.session.apply_position(element_id, position)
        self._update_status(f"Moved '{element_id}' to ({position.x:.2f}m, {position.y:.2f}m)")
        self._save_session()

    # -------------------------------------------------------------------------
    # Session persistence
    # -------------------------------------------------------------------------

    @staticmethod
    def _element_record(element: LayoutElement) -> dict:
        dims = element.dimensions
        if isinstance(dims, ConfigurableDimensions):
            dimensions = {
                'type':         'configurable',
                'unit_size':    dims.unit_size,
                'units_wide':   dims.units_wide,
                'units_deep':   dims.units_deep,
                'min_units':    dims.min_units,
                'max_units':    dims.max_units,
            }
        else:
            dimensions = {
                'type':         'fixed',
                'diameter':     dims.diameter,
                'width':        dims.width,
                'height':       dims.height,
            }
        return {
            'id':           element.id,
            'kind':         element.kind.value,
            'x':            element.position.x,
            'y':            element.position.y,
            'rotation':     element.rotation,
            'label':        element.label,
            'anchor':       [element.anchor.x, element.anchor.y] if element.anchor is not None else None,
            'dimensions':   dimensions,
        }

    @staticmethod
    def _element_from_record(item: dict, existing: Optional[LayoutElement]) -> Optional[LayoutElement]:
        """
        Rebuild an element from a saved record.

        Records written before footprints were stored only carry a position;
        those reuse the footprint of the live element with the same id and
        are skipped when there is none.
        """
        position = Point(float(item['x']), float(item['y']))
        dims = item.get('dimensions')
        if dims is None:
            return existing.with_position(position) if existing is not None else None

        if dims.get('type') == 'configurable':
            dimensions = ConfigurableDimensions(
                unit_size   = float(dims['unit_size']),
                units_wide  = int(dims['units_wide']),
                units_deep  = int(dims['units_deep']),
                min_units   = int(dims['min_units']),
                max_units   = int(dims['max_units']),
            )
        else:
            dimensions = FixedDimensions(
                diameter    = dims.get('diameter'),
                width       = dims.get('width'),
                height      = dims.get('height'),
            )
        anchor = item.get('anchor')
        return LayoutElement(
            id          = item['id'],
            kind        = ElementKind(item['kind']),
            position    = position,
            dimensions  = dimensions,
            rotation    = float(item.get('rotation', 0.0)),
            anchor      = AnchorPoint(*anchor) if anchor is not None else None,
            label       = item.get('label'),
        )

    def _save_session(self):
        """Write every element to the JSON session file, if configured."""
        if self.session_path is None:
            return
        self.session_path.parent.mkdir(parents=True, exist_ok=True)
        data = {'elements': [self._element_record(e) for e in self.session.elements]}
        with open(self.session_path, 'w') as f:
            json.dump(data, f, indent=2)
        logger.debug(f"Session saved to {self.session_path}")

    def _load_session(self):
        """Replace the session's elements with those saved in the file."""
        if self.session_path is None or not self.session_path.exists():
            return
        with open(self.session_path, 'r') as f:
            data = json.load(f)

        elements = []
        for item in data.get('elements', []):
            element = self._element_from_record(item, self.session.get_element(item.get('id')))
            if element is None:
                logger.warning(f"Skipped saved element '{item.get('id')}': no footprint stored")
                continue
            elements.append(element)
        self.session.set_elements(elements)
        logger.info(f"Restored {len(elements)} element(s) from {self.session_path}")
