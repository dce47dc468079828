# caja_desktop/core/shortcuts.py
"""
Keyboard shortcuts shared by the pages:

    Escape        back to the menu
    Ctrl/Cmd + K  focus the main input
    R             refresh (ignored while typing)
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class Action(str, Enum):
    BACK = "back"
    FOCUS_INPUT = "focus_input"
    REFRESH = "refresh"


def resolve_shortcut(
    key: str,
    ctrl: bool = False,
    meta: bool = False,
    typing: bool = False,
) -> Optional[Action]:
    """Map a key press to an action, or None when the key is not bound.

    ``key`` is the key name ("Escape", "k", "R", ...); ``typing`` is true
    while focus sits in a text input.
    """
    if key == "Escape":
        return Action.BACK

    lowered = key.lower()
    if (ctrl or meta) and lowered == "k":
        return Action.FOCUS_INPUT

    if typing:
        return None

    if lowered == "r" and not (ctrl or meta):
        return Action.REFRESH
    return None
