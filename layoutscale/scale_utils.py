"""
Scale Utilities
===============

Pure conversion and snapping functions for the layout proportion system.
Every function takes its scale parameters explicitly; nothing reads ambient
state, so each one can be tested standalone.

Numeric conversions are total: non-finite inputs or a zero divisor degrade
to a zero result instead of propagating NaN/Infinity into the renderer.
"""

# Layoutscale imports
from layoutscale import config
from layoutscale.layout_types import ORIGIN, Point

# Standard library imports
import math
from typing import Sequence

# Third-party imports
import numpy as np


# -------------------------------------------------------------------------
# Meter <-> pixel conversion
# -------------------------------------------------------------------------

def meters_to_pixels(meters: float, pixels_per_meter: float) -> float:
    """
    Convert a distance in meters to pixels.

    Args:
        meters (float): Distance in meters.
        pixels_per_meter (float): Scale factor.

    Returns:
        float: Distance in pixels, or 0.0 when either input is not finite.
    """
    if not math.isfinite(meters) or not math.isfinite(pixels_per_meter):
        return 0.0
    return meters * pixels_per_meter


def pixels_to_meters(pixels: float, pixels_per_meter: float) -> float:
    """
    Convert a distance in pixels to meters.

    Returns 0.0 when either input is not finite or pixels_per_meter is zero.
    """
    if not math.isfinite(pixels) or not math.isfinite(pixels_per_meter) or pixels_per_meter == 0:
        return 0.0
    return pixels / pixels_per_meter


def real_to_canvas(real_pos: Point, pixels_per_meter: float, offset: Point) -> Point:
    """
    Convert a real-world position (meters) to canvas pixels.

    Args:
        real_pos (Point): Position in meters.
        pixels_per_meter (float): Scale factor.
        offset (Point): Canvas offset in pixels.

    Returns:
        Point: Position in canvas pixels. A non-finite scale maps everything
               onto the offset.
    """
    if not math.isfinite(pixels_per_meter):
        return Point(offset.x, offset.y)
    return Point(
        real_pos.x * pixels_per_meter + offset.x,
        real_pos.y * pixels_per_meter + offset.y,
    )


def canvas_to_real(canvas_pos: Point, pixels_per_meter: float, offset: Point) -> Point:
    """
    Convert a canvas position (pixels) to real-world meters.

    Returns the origin when pixels_per_meter is zero or not finite rather
    than dividing by zero.
    """
    if not math.isfinite(pixels_per_meter) or pixels_per_meter == 0:
        return ORIGIN
    return Point(
        (canvas_pos.x - offset.x) / pixels_per_meter,
        (canvas_pos.y - offset.y) / pixels_per_meter,
    )


def point_to_pixels(point: Point, pixels_per_meter: float) -> Point:
    """Scale a meter point to pixels without any offset."""
    return Point(
        meters_to_pixels(point.x, pixels_per_meter),
        meters_to_pixels(point.y, pixels_per_meter),
    )


def point_to_meters(point: Point, pixels_per_meter: float) -> Point:
    """Scale a pixel point to meters without any offset."""
    return Point(
        pixels_to_meters(point.x, pixels_per_meter),
        pixels_to_meters(point.y, pixels_per_meter),
    )


def real_to_canvas_array(real_pts: np.ndarray, pixels_per_meter: float, offset: Point) -> np.ndarray:
    """
    Vectorized real_to_canvas for an (N, 2) array of meter coordinates.

    Non-finite rows come back as the offset so a single bad vertex cannot
    poison a whole polyline.
    """
    pts = np.asarray(real_pts, dtype=float).reshape(-1, 2)
    off = np.array([offset.x, offset.y], dtype=float)
    if not math.isfinite(pixels_per_meter):
        return np.tile(off, (len(pts), 1))
    out = pts * pixels_per_meter + off
    bad = ~np.isfinite(out).all(axis=1)
    out[bad] = off
    return out


def canvas_to_real_array(canvas_pts: np.ndarray, pixels_per_meter: float, offset: Point) -> np.ndarray:
    """Vectorized canvas_to_real for an (N, 2) array of pixel coordinates."""
    pts = np.asarray(canvas_pts, dtype=float).reshape(-1, 2)
    if not math.isfinite(pixels_per_meter) or pixels_per_meter == 0:
        return np.zeros_like(pts)
    out = (pts - np.array([offset.x, offset.y], dtype=float)) / pixels_per_meter
    out[~np.isfinite(out).all(axis=1)] = 0.0
    return out


# -------------------------------------------------------------------------
# Grid snapping
# -------------------------------------------------------------------------

def _round_half_up(value: float) -> float:
    # Halves round towards +inf, so 0.5 -> 1 and -0.5 -> 0
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def snap_to_grid(real_pos: Point, grid_size: float) -> Point:
    """
    Snap a position to the nearest grid point.

    Each coordinate is rounded independently to the nearest multiple of
    grid_size. The point is returned unchanged when grid_size is not a
    positive finite number.
    """
    if not math.isfinite(grid_size) or grid_size <= 0:
        return Point(real_pos.x, real_pos.y)
    return Point(
        _round_half_up(real_pos.x / grid_size) * grid_size,
        _round_half_up(real_pos.y / grid_size) * grid_size,
    )


def snap_value_to_grid(value: float, grid_size: float) -> float:
    """Snap a single value to the nearest multiple of grid_size."""
    if not math.isfinite(grid_size) or grid_size <= 0:
        return value
    return _round_half_up(value / grid_size) * grid_size


def round_to_precision(value: float, precision: float) -> float:
    """
    Round a value to a precision step, e.g. 0.01 for centimeters.

    Used to suppress floating-point drift while dragging without a grid.
    """
    if precision <= 0:
        return value
    return _round_half_up(value / precision) * precision


# -------------------------------------------------------------------------
# Clean scale snapping
# -------------------------------------------------------------------------

def snap_to_clean_scale(raw_scale: float, clean_scales: Sequence[float] = config.CLEAN_SCALES) -> float:
    """
    Snap a raw scale to the largest clean value that does not exceed it.

    Args:
        raw_scale (float): Raw pixels-per-meter value.
        clean_scales (Sequence[float]): Ascending set of "nice" values.

    Returns:
        float: The chosen clean scale. Falls back to the smallest member when
               raw_scale is below all of them or is not a positive number.

    Example:
        >>> snap_to_clean_scale(87.5)
        50
    """
    if not math.isfinite(raw_scale) or raw_scale <= 0:
        return clean_scales[0]
    result = clean_scales[0]
    for scale in clean_scales:
        if scale <= raw_scale:
            result = scale
        else:
            break
    return result


def get_next_larger_scale(current_scale: float, clean_scales: Sequence[float] = config.CLEAN_SCALES) -> float:
    """Next clean scale above current_scale, or the largest one."""
    for scale in clean_scales:
        if scale > current_scale:
            return scale
    return clean_scales[-1]


def get_next_smaller_scale(current_scale: float, clean_scales: Sequence[float] = config.CLEAN_SCALES) -> float:
    """Next clean scale below current_scale, or the smallest one."""
    for scale in reversed(clean_scales):
        if scale < current_scale:
            return scale
    return clean_scales[0]


# -------------------------------------------------------------------------
# Fit helpers
# -------------------------------------------------------------------------

def clamp_zoom(zoom: float, min_zoom: float = config.MIN_ZOOM, max_zoom: float = config.MAX_ZOOM) -> float:
    """Clamp zoom into [min_zoom, max_zoom]. Non-finite zoom resets to 1.0."""
    if not math.isfinite(zoom):
        return max(min_zoom, min(max_zoom, config.DEFAULT_ZOOM))
    return max(min_zoom, min(max_zoom, zoom))


def calculate_fit_scale(
    space_width: float,
    space_height: float,
    canvas_width: float,
    canvas_height: float,
    padding: float = config.DEFAULT_PADDING,
) -> float:
    """
    Pixels-per-meter that fits the space inside the padded canvas.

    The binding axis determines the scale, so the room never overflows the
    canvas and its aspect ratio is preserved. Invalid sizes fall back to
    100 px/m; callers that need strict validation check before calling.
    """
    if space_width <= 0 or space_height <= 0 or canvas_width <= 0 or canvas_height <= 0:
        return 100.0

    available_width = canvas_width * padding
    available_height = canvas_height * padding

    scale_by_width = available_width / space_width
    scale_by_height = available_height / space_height
    return min(scale_by_width, scale_by_height)


def calculate_center_offset(
    space_width: float,
    space_height: float,
    canvas_width: float,
    canvas_height: float,
    pixels_per_meter: float,
) -> Point:
    """Offset in pixels that centres the rendered space on the canvas."""
    return Point(
        (canvas_width - space_width * pixels_per_meter) / 2,
        (canvas_height - space_height * pixels_per_meter) / 2,
    )
