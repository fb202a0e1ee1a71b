"""One-line status bar text for each mode."""

from __future__ import annotations

from ..state import (
    AppState,
    Downloading,
    Error,
    Help,
    Loading,
    PickingDestination,
    Ready,
    Searching,
)
from ..ui_theme import UITheme

READY_HINTS = "[↑↓/jk]move  [Tab]panel  [Enter]open  [Backspace]back  [d]download  [/]search  [?]help  [q]uit"
SEARCH_HINTS = "[Enter]confirm  [Esc]clear  [↑↓]navigate"
DIALOG_HINTS = "[Tab]switch  [↑↓]select  [Enter]open/confirm  [Esc]cancel"
HELP_HINT = "Press q or ? to close help"


def status_text(state: AppState) -> str:
    mode = state.mode
    if isinstance(mode, Loading):
        return f"{state.spinner_char()} Loading..."
    if isinstance(mode, Downloading):
        return f"{state.spinner_char()} Downloading: {mode.path}"
    if isinstance(mode, Searching):
        return SEARCH_HINTS
    if isinstance(mode, PickingDestination):
        return DIALOG_HINTS
    if isinstance(mode, Error):
        return f"Error: {mode.message}"
    if isinstance(mode, Help):
        return HELP_HINT
    if isinstance(mode, Ready) and state.status_message:
        return state.status_message
    return READY_HINTS


def status_color(state: AppState, theme: UITheme) -> str:
    mode = state.mode
    if isinstance(mode, Error):
        return theme.status_error
    if isinstance(mode, (Loading, Downloading)):
        return theme.spinner
    return theme.status_bar


__all__ = ["DIALOG_HINTS", "HELP_HINT", "READY_HINTS", "SEARCH_HINTS", "status_color", "status_text"]
