"""
Zoom Controller
===============

Immutable zoom state with discrete steps. Each operation returns a new
controller; the owner swaps it in and recomputes the scale.
"""

# Layoutscale imports
from layoutscale import config
from layoutscale.scale_utils import clamp_zoom

# Standard library imports
import logging
from dataclasses import dataclass, replace
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoomController:
    """
    Attributes:
        zoom (float): Current zoom, always inside [min_zoom, max_zoom].
        step (float): Increment applied by zoom_in / zoom_out / wheel.
        min_zoom (float): Lower clamp, not below config.MIN_ZOOM.
        max_zoom (float): Upper clamp, not above config.MAX_ZOOM.
        require_modifier (bool): Wheel zoom only when Ctrl/Cmd is held.
    """

    zoom: float = config.DEFAULT_ZOOM
    step: float = config.ZOOM_STEP
    min_zoom: float = config.MIN_ZOOM
    max_zoom: float = config.MAX_ZOOM
    require_modifier: bool = config.WHEEL_REQUIRES_CTRL

    def __post_init__(self):
        if self.min_zoom > self.max_zoom:
            raise ValueError(f"min_zoom {self.min_zoom} exceeds max_zoom {self.max_zoom}")
        if self.min_zoom < config.MIN_ZOOM or self.max_zoom > config.MAX_ZOOM:
            raise ValueError(
                f"Zoom limits [{self.min_zoom}, {self.max_zoom}] must lie within "
                f"[{config.MIN_ZOOM}, {config.MAX_ZOOM}], the range the scale supports"
            )
        # Frozen dataclass, so the clamp goes through object.__setattr__
        object.__setattr__(self, "zoom", clamp_zoom(self.zoom, self.min_zoom, self.max_zoom))

    def set_zoom(self, zoom: float) -> "ZoomController":
        return replace(self, zoom=clamp_zoom(zoom, self.min_zoom, self.max_zoom))

    def zoom_in(self) -> "ZoomController":
        return self.set_zoom(self.zoom + self.step)

    def zoom_out(self) -> "ZoomController":
        return self.set_zoom(self.zoom - self.step)

    def fit_to_canvas(self) -> "ZoomController":
        """Back to 1.0, where the room exactly fills the padded canvas."""
        return self.set_zoom(config.DEFAULT_ZOOM)

    def handle_wheel(self, scroll_step: float, modifier_pressed: bool) -> Optional["ZoomController"]:
        """
        Apply one wheel notch.

        Args:
            scroll_step (float): Positive for scrolling up (zoom in), negative
                for scrolling down (zoom out), matching matplotlib's
                ScrollEvent.step.
            modifier_pressed (bool): Whether Ctrl/Cmd was held.

        Returns:
            Optional[ZoomController]: The new controller, or None when the
                event is left to normal scrolling because the modifier gate
                rejected it.
        """
        if self.require_modifier and not modifier_pressed:
            return None
        if scroll_step > 0:
            return self.zoom_in()
        if scroll_step < 0:
            return self.zoom_out()
        return self

    @property
    def can_zoom_in(self) -> bool:
        return self.zoom < self.max_zoom

    @property
    def can_zoom_out(self) -> bool:
        return self.zoom > self.min_zoom

    @property
    def zoom_percent(self) -> int:
        return round(self.zoom * 100)

    @property
    def zoom_display(self) -> str:
        return f"{self.zoom_percent}%"
