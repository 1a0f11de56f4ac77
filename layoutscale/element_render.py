"""
Element Render Data
===================

Turns layout elements (meters) into canvas boxes (pixels) for a given
scale. Rotation is carried through untouched; the renderer applies it
about the box centre.
"""

# Layoutscale imports
from layoutscale import scale_utils
from layoutscale.layout_types import (
    ConfigurableDimensions,
    ElementDimensions,
    ElementRenderData,
    FixedDimensions,
    LayoutElement,
    Point,
)
from layoutscale.scale_calculator import ScaleState

# Standard library imports
from typing import Optional, Sequence, Tuple

# Third-party imports
import numpy as np
import pandas as pd


RENDER_COLUMNS = ["id", "kind", "shape", "label", "x", "y", "width", "height", "center_x", "center_y", "rotation"]


def get_real_dimensions(dimensions: ElementDimensions) -> Tuple[float, float]:
    """
    Resolve an element's footprint to (width, height) in meters.

    Fixed footprints use the diameter for both axes when one is set,
    otherwise width and height (missing values count as 0). Configurable
    footprints multiply unit size by unit counts without clamping.
    """
    if isinstance(dimensions, (FixedDimensions, ConfigurableDimensions)):
        return dimensions.real_size()
    return (0.0, 0.0)


def get_element_render_data(element: LayoutElement, pixels_per_meter: float, offset: Point) -> ElementRenderData:
    """
    Calculate the canvas box for an element.

    Args:
        element (LayoutElement): Element positioned in meters.
        pixels_per_meter (float): Current scale.
        offset (Point): Current canvas offset.

    Returns:
        ElementRenderData: Top-left corner, size and centre in pixels.

    Example:
        A 1.8m table at (5, 5) with 100 px/m and no offset has its top-left
        at (410, 410) and measures 180 x 180 px.
    """
    real_width, real_height = get_real_dimensions(element.dimensions)
    pixel_width = scale_utils.meters_to_pixels(real_width, pixels_per_meter)
    pixel_height = scale_utils.meters_to_pixels(real_height, pixels_per_meter)

    anchor = element.resolved_anchor
    canvas_anchor = scale_utils.real_to_canvas(element.position, pixels_per_meter, offset)

    # The position is where the anchor lands, so back off by the anchor fraction
    x = canvas_anchor.x - pixel_width * anchor.x
    y = canvas_anchor.y - pixel_height * anchor.y

    return ElementRenderData(
        x=x,
        y=y,
        width=pixel_width,
        height=pixel_height,
        center_x=x + pixel_width / 2,
        center_y=y + pixel_height / 2,
        rotation=element.rotation,
    )


def calculate_render_data(element: LayoutElement, scale: ScaleState) -> ElementRenderData:
    return get_element_render_data(element, scale.pixels_per_meter, scale.offset)


def calculate_render_frame(elements: Sequence[LayoutElement], scale: ScaleState) -> pd.DataFrame:
    """
    Render data for many elements as one DataFrame, in draw order.

    Returns:
        pd.DataFrame: One row per element with the columns in RENDER_COLUMNS.
    """
    rows = []
    for element in elements:
        data = calculate_render_data(element, scale)
        rows.append({
            "id": element.id,
            "kind": element.kind.value,
            "shape": element.kind.shape.value,
            "label": element.label,
            "x": data.x,
            "y": data.y,
            "width": data.width,
            "height": data.height,
            "center_x": data.center_x,
            "center_y": data.center_y,
            "rotation": data.rotation,
        })
    return pd.DataFrame(rows, columns=RENDER_COLUMNS)


def hit_test(frame: pd.DataFrame, canvas_point: Point) -> Optional[str]:
    """
    Find the topmost element whose rotated box contains a canvas point.

    Rows later in the frame are drawn on top, so they win ties.

    Returns:
        Optional[str]: The element id, or None when nothing is hit.
    """
    if frame.empty:
        return None

    theta = np.radians(frame["rotation"].to_numpy(dtype=float))
    dx = canvas_point.x - frame["center_x"].to_numpy(dtype=float)
    dy = canvas_point.y - frame["center_y"].to_numpy(dtype=float)

    # Point in each box's unrotated frame
    local_x = dx * np.cos(theta) + dy * np.sin(theta)
    local_y = -dx * np.sin(theta) + dy * np.cos(theta)

    inside = (
        (np.abs(local_x) <= frame["width"].to_numpy(dtype=float) / 2 + 1e-9)
        & (np.abs(local_y) <= frame["height"].to_numpy(dtype=float) / 2 + 1e-9)
    )
    hits = np.flatnonzero(inside)
    if hits.size == 0:
        return None
    return str(frame["id"].iloc[hits[-1]])
