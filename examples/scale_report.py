"""
Layoutscale: Scale Report

Prints how the test venue elements land on a 1200 x 800 px canvas at a few
zoom levels, including the snapped clean scale. Useful for checking
proportions without opening a window.
"""

# fmt: off
# autopep8: off

from layoutscale import config
from layoutscale.element_render import calculate_render_frame
from layoutscale.layout_types import CanvasSize
from layoutscale.sample_layouts import TEST_ELEMENTS, TEST_SPACE_BOUNDS
from layoutscale.scale_calculator import calculate_scale

CANVAS = CanvasSize(1200, 800)

if __name__ == "__main__":
    config.configure_logging()

    for zoom in (0.5, 1.0, 2.0):
        for snap in (False, True):
            scale = calculate_scale(TEST_SPACE_BOUNDS, CANVAS, zoom=zoom, snap_to_clean_scale=snap)
            print(f"\nzoom={zoom:.1f} snap={snap}: {scale.pixels_per_meter:.2f} px/m, "
                  f"offset=({scale.offset.x:.1f}, {scale.offset.y:.1f})")
            frame = calculate_render_frame(TEST_ELEMENTS, scale)
            print(frame[["id", "x", "y", "width", "height", "rotation"]].round(1).to_string(index=False))
