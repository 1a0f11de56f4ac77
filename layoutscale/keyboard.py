"""
Keyboard shortcuts for the layout editor.

Key strings follow matplotlib's KeyEvent.key convention, e.g. 'ctrl+=',
'ctrl+Z' (shift held) or 'delete'. On macOS 'cmd+' is accepted wherever
'ctrl+' is.

Shortcuts:
    Ctrl +/=          Zoom in
    Ctrl -            Zoom out
    Ctrl 0            Fit to canvas
    g                 Toggle grid visibility
    s                 Toggle grid snap
    Delete/Backspace  Delete selection
    Escape            Deselect / cancel drag
    Ctrl A/C/V        Select all / copy / paste
    Ctrl Z            Undo
    Ctrl Shift Z, Y   Redo
"""

# Standard library imports
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional


class LayoutAction(Enum):
    ZOOM_IN = "zoom_in"
    ZOOM_OUT = "zoom_out"
    FIT_TO_CANVAS = "fit_to_canvas"
    TOGGLE_GRID_VISIBLE = "toggle_grid_visible"
    TOGGLE_SNAP = "toggle_snap"
    DELETE = "delete"
    ESCAPE = "escape"
    SELECT_ALL = "select_all"
    COPY = "copy"
    PASTE = "paste"
    UNDO = "undo"
    REDO = "redo"


# fmt: off
# autopep8: off
KEY_BINDINGS: Dict[str, LayoutAction] = {
    "ctrl++":           LayoutAction.ZOOM_IN,
    "ctrl+=":           LayoutAction.ZOOM_IN,
    "ctrl+-":           LayoutAction.ZOOM_OUT,
    "ctrl+0":           LayoutAction.FIT_TO_CANVAS,
    "g":                LayoutAction.TOGGLE_GRID_VISIBLE,
    "s":                LayoutAction.TOGGLE_SNAP,
    "delete":           LayoutAction.DELETE,
    "backspace":        LayoutAction.DELETE,
    "escape":           LayoutAction.ESCAPE,
    "ctrl+a":           LayoutAction.SELECT_ALL,
    "ctrl+c":           LayoutAction.COPY,
    "ctrl+v":           LayoutAction.PASTE,
    "ctrl+z":           LayoutAction.UNDO,
    "ctrl+Z":           LayoutAction.REDO,
    "ctrl+shift+z":     LayoutAction.REDO,
    "ctrl+y":           LayoutAction.REDO,
}
# fmt: on
# autopep8: on

_COMMAND_PREFIXES = ("cmd+", "super+")


def _normalize_key(key: str) -> str:
    for prefix in _COMMAND_PREFIXES:
        if key.startswith(prefix):
            return "ctrl+" + key[len(prefix):]
    return key


def resolve_key_action(key: Optional[str], input_focused: bool = False) -> Optional[LayoutAction]:
    """
    Map a key string to an editor action.

    Args:
        key (str, optional): matplotlib key string.
        input_focused (bool): True while a text field has focus; all
            shortcuts are suppressed so typing is not hijacked.

    Returns:
        Optional[LayoutAction]: The bound action, or None.
    """
    if key is None or input_focused:
        return None
    return KEY_BINDINGS.get(_normalize_key(key))


@dataclass
class KeyboardHandlers:
    """Pass-through callbacks for actions the scale engine does not own."""

    on_delete: Optional[Callable[[], None]] = None
    on_escape: Optional[Callable[[], None]] = None
    on_select_all: Optional[Callable[[], None]] = None
    on_copy: Optional[Callable[[], None]] = None
    on_paste: Optional[Callable[[], None]] = None
    on_undo: Optional[Callable[[], None]] = None
    on_redo: Optional[Callable[[], None]] = None
    on_zoom_in: Optional[Callable[[], None]] = None
    on_zoom_out: Optional[Callable[[], None]] = None
    on_fit_to_canvas: Optional[Callable[[], None]] = None
    on_toggle_grid_visible: Optional[Callable[[], None]] = None
    on_toggle_snap: Optional[Callable[[], None]] = None

    def handler_for(self, action: LayoutAction) -> Optional[Callable[[], None]]:
        return getattr(self, f"on_{action.value}")


def dispatch_key(
    key: Optional[str],
    handlers: KeyboardHandlers,
    input_focused: bool = False,
) -> Optional[LayoutAction]:
    """
    Resolve a key and call the matching handler if one is registered.

    Returns the resolved action (even when no handler was set), or None.
    """
    action = resolve_key_action(key, input_focused)
    if action is None:
        return None
    handler = handlers.handler_for(action)
    if handler is not None:
        handler()
    return action
