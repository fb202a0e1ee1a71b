"""Searching-mode key handling for the files panel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..input.classify import LINE_DOWN, LINE_UP, key_to_movement
from ..input.key_registry import KeyComboBinding, KeyComboRegistry
from ..input.keys import BACKSPACE, DELETE, DOWN, END, ENTER, ESC, HOME, LEFT, RIGHT, UP, KeyEvent

if TYPE_CHECKING:
    from ..controller import AppController


class SearchPanel:
    """Routes keys while the files filter prompt is being edited."""

    def __init__(self, owner: AppController) -> None:
        self.owner = owner

    def _edit(self, changed: bool) -> None:
        if changed:
            self.owner.apply_search_filter()

    def handle_key(self, event: KeyEvent) -> None:
        search = self.owner.state.search

        def insert(ch: str) -> None:
            search.insert(ch)
            self.owner.apply_search_filter()

        bindings = KeyComboRegistry().register_bindings(
            KeyComboBinding((ESC,), self.owner.cancel_search),
            KeyComboBinding((ENTER,), self.owner.confirm_search),
            KeyComboBinding((UP,), lambda: self.owner.apply_movement(LINE_UP)),
            KeyComboBinding((DOWN,), lambda: self.owner.apply_movement(LINE_DOWN)),
            KeyComboBinding((BACKSPACE,), lambda: self._edit(search.backspace())),
            KeyComboBinding((DELETE,), lambda: self._edit(search.delete())),
            KeyComboBinding((LEFT,), search.cursor_left),
            KeyComboBinding((RIGHT,), search.cursor_right),
            KeyComboBinding((HOME,), search.cursor_home),
            KeyComboBinding((END,), search.cursor_end),
        )
        handled, _ = bindings.dispatch(event)
        if handled:
            return

        # Control page movements still scroll the filtered list.
        if event.ctrl:
            movement = key_to_movement(event)
            if movement is not None:
                self.owner.apply_movement(movement)
            return

        ch = event.printable_char
        if ch is not None:
            insert(ch)
