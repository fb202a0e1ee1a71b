"""Input classifier: key events to semantic movements and actions.

Pure functions only. When several bindings could claim a key, the fixed
priority is quit > help > movement > panel-switch > select > back >
download > search-start > refresh.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .keys import (
    BACKSPACE,
    BACKTAB,
    DOWN,
    END,
    ENTER,
    ESC,
    HOME,
    LEFT,
    PAGE_DOWN,
    PAGE_UP,
    TAB,
    UP,
    KeyEvent,
)

# Out-of-range deltas so jumps stay exact regardless of the item count.
JUMP_TOP_DELTA = -(2**31)
JUMP_BOTTOM_DELTA = 2**31 - 1


class MovementKind(enum.Enum):
    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HALF_PAGE_UP = "half_page_up"
    HALF_PAGE_DOWN = "half_page_down"
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Movement:
    kind: MovementKind
    lines: int = 1


LINE_UP = Movement(MovementKind.UP)
LINE_DOWN = Movement(MovementKind.DOWN)
PAGE_UP_MOVE = Movement(MovementKind.PAGE_UP)
PAGE_DOWN_MOVE = Movement(MovementKind.PAGE_DOWN)
HALF_PAGE_UP_MOVE = Movement(MovementKind.HALF_PAGE_UP)
HALF_PAGE_DOWN_MOVE = Movement(MovementKind.HALF_PAGE_DOWN)
TOP_MOVE = Movement(MovementKind.TOP)
BOTTOM_MOVE = Movement(MovementKind.BOTTOM)


class Action(enum.Enum):
    QUIT = "quit"
    HELP = "help"
    PANEL_SWITCH = "panel_switch"
    SELECT = "select"
    BACK = "back"
    DOWNLOAD = "download"
    START_SEARCH = "start_search"
    REFRESH = "refresh"


_CTRL_MOVEMENTS: dict[str, Movement] = {
    "f": PAGE_DOWN_MOVE,
    "b": PAGE_UP_MOVE,
    "d": HALF_PAGE_DOWN_MOVE,
    "u": HALF_PAGE_UP_MOVE,
}

_NAMED_MOVEMENTS: dict[str, Movement] = {
    UP: LINE_UP,
    DOWN: LINE_DOWN,
    PAGE_UP: PAGE_UP_MOVE,
    PAGE_DOWN: PAGE_DOWN_MOVE,
    HOME: TOP_MOVE,
    END: BOTTOM_MOVE,
}

_LETTER_MOVEMENTS: dict[str, Movement] = {
    "k": LINE_UP,
    "j": LINE_DOWN,
    "g": TOP_MOVE,
    "G": BOTTOM_MOVE,
}


def key_to_movement(event: KeyEvent) -> Movement | None:
    """Map ``event`` to a cursor movement, or ``None``."""
    if event.ctrl:
        if event.is_char:
            return _CTRL_MOVEMENTS.get(event.code.lower())
        return _NAMED_MOVEMENTS.get(event.code)
    if event.code in _NAMED_MOVEMENTS:
        return _NAMED_MOVEMENTS[event.code]
    if event.alt:
        return None
    return _LETTER_MOVEMENTS.get(event.code)


def movement_delta(movement: Movement, visible_height: int) -> int:
    """Resolve ``movement`` into a signed index delta for a panel of ``visible_height`` rows."""
    height = max(1, visible_height)
    kind = movement.kind
    if kind is MovementKind.UP:
        return -movement.lines
    if kind is MovementKind.DOWN:
        return movement.lines
    if kind is MovementKind.PAGE_UP:
        return -height
    if kind is MovementKind.PAGE_DOWN:
        return height
    if kind is MovementKind.HALF_PAGE_UP:
        return -max(1, height // 2)
    if kind is MovementKind.HALF_PAGE_DOWN:
        return max(1, height // 2)
    if kind is MovementKind.TOP:
        return JUMP_TOP_DELTA
    return JUMP_BOTTOM_DELTA


def clamp_cursor(current: int, delta: int, max_index: int) -> int:
    """Apply ``delta`` to ``current`` and clamp into ``[0, max_index]``."""
    if delta == JUMP_TOP_DELTA:
        return 0
    if delta == JUMP_BOTTOM_DELTA:
        return max_index
    return max(0, min(max_index, current + delta))


def _plain(event: KeyEvent, *codes: str) -> bool:
    return not event.ctrl and not event.alt and event.code in codes


def is_quit(event: KeyEvent) -> bool:
    return _plain(event, "q", ESC)


def is_help(event: KeyEvent) -> bool:
    return _plain(event, "?")


def is_panel_switch(event: KeyEvent) -> bool:
    return event.code in {TAB, BACKTAB}


def is_select(event: KeyEvent) -> bool:
    return event.code == ENTER


def is_back(event: KeyEvent) -> bool:
    return _plain(event, BACKSPACE, LEFT, "h")


def is_download(event: KeyEvent) -> bool:
    # Ctrl-D is half-page down.
    return _plain(event, "d")


def is_search_start(event: KeyEvent) -> bool:
    return _plain(event, "/")


def is_refresh(event: KeyEvent) -> bool:
    return _plain(event, "r")


_ACTION_PREDICATES = (
    (Action.PANEL_SWITCH, is_panel_switch),
    (Action.SELECT, is_select),
    (Action.BACK, is_back),
    (Action.DOWNLOAD, is_download),
    (Action.START_SEARCH, is_search_start),
    (Action.REFRESH, is_refresh),
)


def classify_key(event: KeyEvent) -> Movement | Action | None:
    """Classify ``event`` into exactly one movement or action."""
    if is_quit(event):
        return Action.QUIT
    if is_help(event):
        return Action.HELP
    movement = key_to_movement(event)
    if movement is not None:
        return movement
    for action, predicate in _ACTION_PREDICATES:
        if predicate(event):
            return action
    return None


__all__ = [
    "Action",
    "BOTTOM_MOVE",
    "HALF_PAGE_DOWN_MOVE",
    "HALF_PAGE_UP_MOVE",
    "JUMP_BOTTOM_DELTA",
    "JUMP_TOP_DELTA",
    "LINE_DOWN",
    "LINE_UP",
    "Movement",
    "MovementKind",
    "PAGE_DOWN_MOVE",
    "PAGE_UP_MOVE",
    "TOP_MOVE",
    "clamp_cursor",
    "classify_key",
    "is_back",
    "is_download",
    "is_help",
    "is_panel_switch",
    "is_quit",
    "is_refresh",
    "is_search_start",
    "is_select",
    "key_to_movement",
    "movement_delta",
]
