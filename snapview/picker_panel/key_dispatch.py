"""Keyboard dispatch for the restore-destination dialog."""

from __future__ import annotations

import enum

from ..input.key_registry import KeyComboBinding, KeyComboRegistry
from ..input.keys import (
    BACKSPACE,
    BACKTAB,
    DELETE,
    DOWN,
    END,
    ENTER,
    ESC,
    HOME,
    LEFT,
    RIGHT,
    TAB,
    UP,
    KeyEvent,
)
from .picker import DialogFocus, DirectoryPicker


class PickerOutcome(enum.Enum):
    NONE = "none"
    CONFIRM = "confirm"
    CANCEL = "cancel"


def _path_input_bindings(picker: DirectoryPicker) -> KeyComboRegistry:
    return KeyComboRegistry().register_bindings(
        KeyComboBinding((DOWN,), picker.select_next),
        KeyComboBinding((UP,), picker.select_prev),
        KeyComboBinding((ENTER,), picker.enter_selected),
        KeyComboBinding((LEFT,), picker.cursor_left),
        KeyComboBinding((RIGHT,), picker.cursor_right),
        KeyComboBinding((HOME,), picker.cursor_home),
        KeyComboBinding((END,), picker.cursor_end),
        KeyComboBinding((BACKSPACE,), picker.backspace),
        KeyComboBinding((DELETE,), picker.delete),
    )


def handle_picker_key(picker: DirectoryPicker, event: KeyEvent) -> PickerOutcome:
    """Apply one key to ``picker`` and report whether the dialog should close."""
    if event.code == ESC:
        return PickerOutcome.CANCEL

    if event.code == BACKTAB or (event.code == TAB and event.shift):
        picker.focus_prev()
        return PickerOutcome.NONE
    if event.code == TAB:
        picker.focus_next()
        return PickerOutcome.NONE

    if picker.focus is DialogFocus.PATH_INPUT:
        handled, _ = _path_input_bindings(picker).dispatch(event)
        if handled:
            return PickerOutcome.NONE
        ch = event.printable_char
        if ch is not None:
            picker.insert_char(ch)
        return PickerOutcome.NONE

    if event.code != ENTER:
        return PickerOutcome.NONE
    if picker.focus is DialogFocus.CONFIRM:
        return PickerOutcome.CONFIRM
    return PickerOutcome.CANCEL
