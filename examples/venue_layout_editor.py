"""
Layoutscale: Interactive Venue Layout Editor

Opens the 20m x 15m test venue with the wedding layout (head table, nine
guest tables and a dance floor) drawn at true proportional size. Drag
elements to rearrange them; committed positions are saved to
outputs/sessions/wedding_layout.json and restored on the next launch.

Controls:
    Left-drag         Move element (10cm grid snap)
    Ctrl+Scroll       Zoom centred on cursor
    Ctrl +/-          Zoom in / out
    Ctrl 0            Fit room to window
    g                 Toggle grid lines
    s                 Toggle grid snap
    Delete            Delete selected element
    Escape            Cancel drag
"""

# fmt: off
# autopep8: off

from layoutscale import config
from layoutscale.layout_editor import LayoutEditor
from layoutscale.layout_session import LayoutSession
from layoutscale.sample_layouts import create_venue_walls, create_wedding_layout

if __name__ == "__main__":
    config.configure_logging()

    session = LayoutSession(
        elements    = create_wedding_layout(),
        walls       = create_venue_walls(20.0, 15.0, pixels_per_meter=config.WALLMAKER_PIXELS_PER_METER),
    )
    LayoutEditor(session, session_path=config.SESSION_DIR / "wedding_layout.json")
