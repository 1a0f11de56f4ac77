"""
Grid line geometry for the alignment overlay.

Grid density adapts to the zoom level: 10cm lines when zoomed in past
GRID_FINE_THRESHOLD_PPM, whole meters below GRID_COARSE_THRESHOLD_PPM, and
the configured grid size in between. Lines on whole meters are "major".
"""

# Layoutscale imports
from layoutscale import config
from layoutscale.layout_types import GridConfig
from layoutscale.scale_calculator import ScaleState

# Standard library imports
import math
from dataclasses import dataclass

# Third-party imports
import numpy as np


@dataclass(frozen=True)
class GridLines:
    """
    Line segments in canvas pixels.

    vertical / horizontal are (N, 2, 2) arrays of [[x1, y1], [x2, y2]];
    the matching *_major arrays are boolean masks of length N.
    """

    vertical: np.ndarray
    horizontal: np.ndarray
    vertical_major: np.ndarray
    horizontal_major: np.ndarray

    @property
    def is_empty(self) -> bool:
        return len(self.vertical) == 0 and len(self.horizontal) == 0


def _empty() -> GridLines:
    return GridLines(
        vertical=np.empty((0, 2, 2)),
        horizontal=np.empty((0, 2, 2)),
        vertical_major=np.empty(0, dtype=bool),
        horizontal_major=np.empty(0, dtype=bool),
    )


def grid_interval(grid_size: float, pixels_per_meter: float) -> float:
    """Spacing in meters between drawn grid lines at the given scale."""
    if pixels_per_meter > config.GRID_FINE_THRESHOLD_PPM:
        return config.GRID_FINE_INTERVAL
    if pixels_per_meter < config.GRID_COARSE_THRESHOLD_PPM:
        return config.GRID_COARSE_INTERVAL
    return grid_size


def _line_positions(extent: float, interval: float) -> np.ndarray:
    # Index-based so float drift never drops the last line
    count = int(math.floor(extent / interval + 1e-9))
    return np.arange(count + 1) * interval


def _is_major(positions: np.ndarray) -> np.ndarray:
    return np.abs(positions - np.round(positions)) < 1e-3


def calculate_grid_lines(scale: ScaleState, grid: GridConfig) -> GridLines:
    """
    Grid segments covering the room at the current scale.

    Returns an empty GridLines when the grid is hidden.
    """
    if not grid.visible:
        return _empty()

    bounds = scale.space_bounds
    ppm = scale.pixels_per_meter
    ox, oy = scale.offset.x, scale.offset.y
    interval = grid_interval(grid.size, ppm)

    xs = _line_positions(bounds.width, interval)
    ys = _line_positions(bounds.height, interval)
    canvas_xs = xs * ppm + ox
    canvas_ys = ys * ppm + oy
    bottom = oy + bounds.height * ppm
    right = ox + bounds.width * ppm

    vertical = np.stack([
        np.column_stack([canvas_xs, np.full_like(canvas_xs, oy)]),
        np.column_stack([canvas_xs, np.full_like(canvas_xs, bottom)]),
    ], axis=1)
    horizontal = np.stack([
        np.column_stack([np.full_like(canvas_ys, ox), canvas_ys]),
        np.column_stack([np.full_like(canvas_ys, right), canvas_ys]),
    ], axis=1)

    return GridLines(
        vertical=vertical,
        horizontal=horizontal,
        vertical_major=_is_major(xs),
        horizontal_major=_is_major(ys),
    )
