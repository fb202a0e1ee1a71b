"""Key event value type: a key code plus the active modifier set."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Modifier(enum.Flag):
    NONE = 0
    SHIFT = enum.auto()
    ALT = enum.auto()
    CTRL = enum.auto()


UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
HOME = "HOME"
END = "END"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"
ENTER = "ENTER"
ESC = "ESC"
TAB = "TAB"
BACKTAB = "BACKTAB"
BACKSPACE = "BACKSPACE"
DELETE = "DELETE"
INSERT = "INSERT"
UNKNOWN = "UNKNOWN"

NAMED_KEYS = frozenset(
    {
        UP,
        DOWN,
        LEFT,
        RIGHT,
        HOME,
        END,
        PAGE_UP,
        PAGE_DOWN,
        ENTER,
        ESC,
        TAB,
        BACKTAB,
        BACKSPACE,
        DELETE,
        INSERT,
        UNKNOWN,
    }
)


@dataclass(frozen=True)
class KeyEvent:
    """One decoded key press.

    ``code`` is either a single character or one of the named key constants
    in this module.
    """

    code: str
    modifiers: Modifier = Modifier.NONE

    @property
    def ctrl(self) -> bool:
        return bool(self.modifiers & Modifier.CTRL)

    @property
    def shift(self) -> bool:
        return bool(self.modifiers & Modifier.SHIFT)

    @property
    def alt(self) -> bool:
        return bool(self.modifiers & Modifier.ALT)

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1

    @property
    def printable_char(self) -> str | None:
        """The character to insert into a text field, if this key types one."""
        if self.is_char and not self.ctrl and not self.alt and self.code.isprintable():
            return self.code
        return None

    @property
    def token(self) -> str:
        """Stable string form such as ``CTRL+f`` or ``SHIFT+TAB`` for dispatch tables."""
        prefix = ""
        if self.ctrl:
            prefix += "CTRL+"
        if self.alt:
            prefix += "ALT+"
        if self.shift and not self.is_char:
            prefix += "SHIFT+"
        return prefix + self.code


def key(code: str, modifiers: Modifier = Modifier.NONE) -> KeyEvent:
    return KeyEvent(code, modifiers)


def ctrl(letter: str) -> KeyEvent:
    return KeyEvent(letter, Modifier.CTRL)
