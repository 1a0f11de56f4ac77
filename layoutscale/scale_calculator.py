"""
Scale Calculator
================

Central calculation for the proportional layout system: finds the
pixels-per-meter and offset that fit a real-world space into the canvas.

A ScaleState is never patched. Any change in space bounds, canvas size or
zoom produces a fresh state via calculate_scale() (or recompute_scale(),
which also short-circuits identical inputs), so every consumer in a given
update sees the same ppm and offset.
"""

# Layoutscale imports
from layoutscale import config
from layoutscale import scale_utils
from layoutscale.layout_types import CanvasSize, InvalidGeometryError, Point, SpaceBounds

# Standard library imports
import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaleState:
    """
    Complete scale state used for one rendered frame.

    Attributes:
        pixels_per_meter (float): Effective scale including zoom. Always > 0.
        meters_per_pixel (float): Reciprocal of pixels_per_meter.
        offset (Point): Canvas pixel position of the room origin.
        zoom (float): Clamped zoom level the state was built with.
        space_bounds (SpaceBounds): Room extent in meters.
        canvas_size (CanvasSize): Canvas extent in pixels.
        base_pixels_per_meter (float): Fit scale before zoom was applied.
        padding (float): Fraction of the canvas the room was fitted into.
        snap_to_clean_scale (bool): Whether the base scale was snapped.
        fixed_scale (bool): Base scale was pinned to a target ratio rather
            than fitted to the canvas.
    """

    pixels_per_meter: float
    meters_per_pixel: float
    offset: Point
    zoom: float
    space_bounds: SpaceBounds
    canvas_size: CanvasSize
    base_pixels_per_meter: float
    padding: float = config.DEFAULT_PADDING
    snap_to_clean_scale: bool = False
    fixed_scale: bool = False

    def meters_to_pixels(self, meters: float) -> float:
        return scale_utils.meters_to_pixels(meters, self.pixels_per_meter)

    def pixels_to_meters(self, pixels: float) -> float:
        return scale_utils.pixels_to_meters(pixels, self.pixels_per_meter)

    def real_to_canvas(self, real_pos: Point) -> Point:
        return scale_utils.real_to_canvas(real_pos, self.pixels_per_meter, self.offset)

    def canvas_to_real(self, canvas_pos: Point) -> Point:
        return scale_utils.canvas_to_real(canvas_pos, self.pixels_per_meter, self.offset)

    @property
    def scale_ratio_label(self) -> str:
        """Human-readable ratio, e.g. '1:100' means 100 px for one meter."""
        return f"1:{round(self.pixels_per_meter)}"


def _build_state(
    space_bounds: SpaceBounds,
    canvas_size: CanvasSize,
    base_ppm: float,
    zoom: float,
    padding: float,
    snap_to_clean_scale: bool = False,
    fixed_scale: bool = False,
) -> ScaleState:
    clamped_zoom = scale_utils.clamp_zoom(zoom)
    ppm = base_ppm * clamped_zoom
    if not math.isfinite(ppm) or ppm <= 0:
        raise InvalidGeometryError(f"Scale must be positive and finite, got {ppm} px/m")

    offset = scale_utils.calculate_center_offset(
        space_bounds.width,
        space_bounds.height,
        canvas_size.width,
        canvas_size.height,
        ppm,
    )
    return ScaleState(
        pixels_per_meter=ppm,
        meters_per_pixel=1 / ppm,
        offset=offset,
        zoom=clamped_zoom,
        space_bounds=space_bounds,
        canvas_size=canvas_size,
        base_pixels_per_meter=base_ppm,
        padding=padding,
        snap_to_clean_scale=snap_to_clean_scale,
        fixed_scale=fixed_scale,
    )


def calculate_scale(
    space_bounds: SpaceBounds,
    canvas_size: CanvasSize,
    zoom: float = config.DEFAULT_ZOOM,
    padding: float = config.DEFAULT_PADDING,
    snap_to_clean_scale: bool = False,
) -> ScaleState:
    """
    Calculate the scale state that fits a space into the canvas.

    Algorithm:
        1. Reject non-positive space, canvas or padding values
        2. Shrink the canvas by the padding fraction
        3. Scale per axis = available / space
        4. Base scale = the smaller of the two, preserving aspect ratio
        5. Optionally snap the base scale to a clean value
        6. Clamp zoom and multiply
        7. Centre the rendered space on the canvas

    Args:
        space_bounds (SpaceBounds): Room extent in meters.
        canvas_size (CanvasSize): Canvas extent in pixels.
        zoom (float): Requested zoom, clamped to [MIN_ZOOM, MAX_ZOOM].
        padding (float): Fraction of the canvas available to the room.
        snap_to_clean_scale (bool): Snap the base scale to CLEAN_SCALES.

    Returns:
        ScaleState: A fresh state.

    Raises:
        InvalidGeometryError: If the space or canvas has a non-positive or
            non-finite dimension, or padding is not a positive number.
    """
    if space_bounds is None:
        raise InvalidGeometryError("Space bounds are required to calculate a scale")
    if not (math.isfinite(space_bounds.width) and math.isfinite(space_bounds.height)) \
            or space_bounds.width <= 0 or space_bounds.height <= 0:
        raise InvalidGeometryError("Space bounds must have positive width and height")
    if not canvas_size.is_measured:
        raise InvalidGeometryError("Canvas size must have positive width and height")
    if not math.isfinite(padding) or padding <= 0:
        raise InvalidGeometryError(f"Padding must be a positive fraction, got {padding}")

    base_ppm = scale_utils.calculate_fit_scale(
        space_bounds.width,
        space_bounds.height,
        canvas_size.width,
        canvas_size.height,
        padding,
    )
    if snap_to_clean_scale:
        base_ppm = scale_utils.snap_to_clean_scale(base_ppm)

    return _build_state(space_bounds, canvas_size, base_ppm, zoom, padding, snap_to_clean_scale)


def try_calculate_scale(
    space_bounds: Optional[SpaceBounds],
    canvas_size: CanvasSize,
    zoom: float = config.DEFAULT_ZOOM,
    padding: float = config.DEFAULT_PADDING,
    snap_to_clean_scale: bool = False,
) -> Optional[ScaleState]:
    """Like calculate_scale() but returns None while bounds or canvas are missing."""
    if space_bounds is None or not canvas_size.is_measured:
        return None
    return calculate_scale(space_bounds, canvas_size, zoom, padding, snap_to_clean_scale)


def calculate_zoom_at_point(current_scale: ScaleState, new_zoom: float, cursor_canvas: Point) -> ScaleState:
    """
    Recompute the scale at a new zoom while keeping the real-world point
    under the cursor at the same canvas position.

    The new state inherits padding and clean-scale snapping from
    current_scale, so zooming around the cursor composes with a snapped base
    scale. A state pinned by calculate_scale_for_ratio() keeps its base
    scale instead of being refitted, so the ratio times the zoom is exact.
    """
    cursor_real = current_scale.canvas_to_real(cursor_canvas)

    if current_scale.fixed_scale:
        new_scale = _build_state(
            current_scale.space_bounds,
            current_scale.canvas_size,
            current_scale.base_pixels_per_meter,
            new_zoom,
            current_scale.padding,
            fixed_scale=True,
        )
    else:
        new_scale = calculate_scale(
            current_scale.space_bounds,
            current_scale.canvas_size,
            zoom=new_zoom,
            padding=current_scale.padding,
            snap_to_clean_scale=current_scale.snap_to_clean_scale,
        )

    # Where the cursor's real point would land with the centred offset
    new_cursor_canvas = new_scale.real_to_canvas(cursor_real)
    adjusted_offset = Point(
        new_scale.offset.x + (cursor_canvas.x - new_cursor_canvas.x),
        new_scale.offset.y + (cursor_canvas.y - new_cursor_canvas.y),
    )
    return replace(new_scale, offset=adjusted_offset)


def calculate_scale_for_ratio(
    space_bounds: SpaceBounds,
    canvas_size: CanvasSize,
    target_scale_ratio: float,
) -> Optional[ScaleState]:
    """
    Pin the scale to an exact pixels-per-meter value (e.g. 100 for 1:100).

    Returns:
        Optional[ScaleState]: A centred state at zoom 1.0, or None when the
            space would not fit the canvas at that scale.
    """
    if not math.isfinite(target_scale_ratio) or target_scale_ratio <= 0:
        return None

    ppm = float(target_scale_ratio)
    if space_bounds.width * ppm > canvas_size.width or space_bounds.height * ppm > canvas_size.height:
        logger.debug(f"Scale 1:{target_scale_ratio} does not fit {canvas_size.width}x{canvas_size.height}px")
        return None

    return _build_state(space_bounds, canvas_size, ppm, config.DEFAULT_ZOOM, config.DEFAULT_PADDING, fixed_scale=True)


# -------------------------------------------------------------------------
# Explicit recompute-on-change
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class ScaleInputs:
    """Everything a ScaleState depends on."""

    space_bounds: Optional[SpaceBounds]
    canvas_size: CanvasSize
    zoom: float = config.DEFAULT_ZOOM
    padding: float = config.DEFAULT_PADDING
    snap_to_clean_scale: bool = False


def recompute_scale(
    previous_inputs: Optional[ScaleInputs],
    previous_scale: Optional[ScaleState],
    new_inputs: ScaleInputs,
) -> Optional[ScaleState]:
    """
    Return the scale for new_inputs.

    Identical inputs hand back previous_scale unchanged; anything else
    builds a fresh state. None means no scale can exist yet (no bounds or an
    unmeasured canvas).
    """
    if previous_inputs is not None and previous_scale is not None and previous_inputs == new_inputs:
        return previous_scale

    return try_calculate_scale(
        new_inputs.space_bounds,
        new_inputs.canvas_size,
        zoom=new_inputs.zoom,
        padding=new_inputs.padding,
        snap_to_clean_scale=new_inputs.snap_to_clean_scale,
    )
