"""
Viewport Observer: tracks the canvas pixel size reported by the host window.
"""

# Layoutscale imports
from layoutscale.layout_types import UNMEASURED_CANVAS, CanvasSize

# Standard library imports
import logging
import math

logger = logging.getLogger(__name__)


class ViewportObserver:
    """
    Records canvas size changes.

    A size with a non-positive or non-finite side is treated as "not yet
    measured": it is recorded as (0, 0) so no scale gets computed from it.
    """

    def __init__(self):
        self.canvas_size: CanvasSize = UNMEASURED_CANVAS

    def observe(self, width: float, height: float) -> bool:
        """
        Record a reported size.

        Returns:
            bool: True when the recorded size changed. Reporting the same
                  size again returns False.
        """
        if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
            new_size = UNMEASURED_CANVAS
        else:
            new_size = CanvasSize(float(width), float(height))

        if new_size == self.canvas_size:
            return False

        logger.debug(f"Canvas resized: {self.canvas_size.width}x{self.canvas_size.height} -> {new_size.width}x{new_size.height}")
        self.canvas_size = new_size
        return True

    @property
    def is_measured(self) -> bool:
        return self.canvas_size.is_measured
