"""
Layoutscale Configuration Module
================================

Centralized constants for the proportional scale engine and the interactive
layout editor. Values that a deployment may want to change can be overridden
through environment variables.
"""

# fmt: off
# autopep8: off

import logging
import os
from pathlib import Path

# Root directory of the project
PROJECT_ROOT        = Path(__file__).parent.parent

# Output directory for editor session files
OUTPUTS_DIR         = Path(os.getenv("LAYOUTSCALE_OUTPUTS_DIR", str(PROJECT_ROOT / "outputs")))
SESSION_DIR         = OUTPUTS_DIR / "sessions"

# ============================================================================
# LOGGING
# ============================================================================
LOG_LEVEL           = os.getenv("LAYOUTSCALE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT          = "%(asctime)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"

# ============================================================================
# SCALE CONSTANTS
# ============================================================================
DEFAULT_PADDING         = 0.9       # fraction of the canvas the room may occupy
DEFAULT_GRID_SIZE       = 0.1       # 10cm grid
DEFAULT_SNAP_PRECISION  = 0.01      # 1cm rounding when grid snap is off
DEFAULT_ZOOM            = 1.0
MIN_ZOOM                = 0.5
MAX_ZOOM                = 5.0
ZOOM_STEP               = 0.1

# Clean scale values for user-friendly display (1:N format), ascending
CLEAN_SCALES            = (10, 20, 25, 40, 50, 100, 200, 250, 500, 1000)

# Wall Maker stores wall geometry in pixels at this resolution
WALLMAKER_PIXELS_PER_METER = 100.0

# Space bounds derived from walls never shrink below this (meters)
MIN_SPACE_SIZE          = 1.0

# ============================================================================
# GRID
# ============================================================================
# (size in meters, display label)
GRID_SIZE_OPTIONS = [
    (0.05,  "5cm"),
    (0.1,   "10cm"),
    (0.25,  "25cm"),
    (0.5,   "50cm"),
    (1.0,   "1m"),
]

# Adaptive grid density: finer lines when zoomed in, coarser when zoomed out
GRID_FINE_THRESHOLD_PPM     = 100.0
GRID_FINE_INTERVAL          = 0.1
GRID_COARSE_THRESHOLD_PPM   = 30.0
GRID_COARSE_INTERVAL        = 1.0

# ============================================================================
# INTERACTION
# ============================================================================
# Wheel zoom only when Ctrl (or Cmd) is held so normal scrolling is untouched
WHEEL_REQUIRES_CTRL = os.getenv("LAYOUTSCALE_WHEEL_REQUIRES_CTRL", "1").lower() not in ("0", "false", "no")

# Modifier names as reported by matplotlib key events
ZOOM_MODIFIER_KEYS  = ("control", "ctrl", "cmd", "super")

# ============================================================================
# EDITOR APPEARANCE
# ============================================================================
EDITOR_WINDOW_TITLE     = "Layout Scale Editor"
EDITOR_FIGSIZE          = (14, 9)
EDITOR_FACECOLOR        = "#F5F5F0"
CANVAS_FACECOLOR        = "#FAFAF8"
GRID_MAJOR_COLOR        = "#d1d5db"
GRID_MINOR_COLOR        = "#e5e7eb"
WALL_COLOR              = "#374151"
ELEMENT_FACECOLOR       = "#dbeafe"
ELEMENT_EDGECOLOR       = "#1d4ed8"
SELECTED_EDGECOLOR      = "#f59e0b"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Apply the project-wide logging format at the given level."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
    )
