"""Centered modal boxes drawn over the panels.

The busy box shows the spinner while a listing or restore is in flight; the
destination dialog renders the directory picker.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import display_width, fit_ansi_line, truncate_left
from ..picker_panel import DialogFocus, DirectoryPicker
from ..state import AppState, Downloading, Loading
from ..ui_theme import UITheme
from .panels import download_name

DIALOG_CHROME_ROWS = 7


@dataclass(frozen=True)
class OverlayBox:
    """Rows of a box anchored at 0-based ``(top, left)``."""

    top: int
    left: int
    rows: tuple[str, ...]

    def to_ansi(self) -> str:
        out: list[str] = []
        for offset, row in enumerate(self.rows):
            out.append(f"\033[{self.top + offset + 1};{self.left + 1}H")
            out.append(row)
            out.append("\033[0m")
        return "".join(out)


def draw_modal_frame(title: str, body: list[str], width: int, color: str, theme: UITheme) -> list[str]:
    inner_w = max(1, width - 2)
    reset = theme.reset
    title_text = truncate_left(title, max(0, inner_w - 2))
    fill = "─" * max(0, inner_w - 1 - display_width(title_text))
    rows = [f"{color}╭─{theme.modal_title}{title_text}{reset}{color}{fill}╮{reset}"]
    for line in body:
        rows.append(f"{color}│{reset}{fit_ansi_line(line, inner_w)}{reset}{color}│{reset}")
    rows.append(f"{color}╰{'─' * inner_w}╯{reset}")
    return rows


def _center(text: str, width: int) -> str:
    pad = max(0, (width - display_width(text)) // 2)
    return " " * pad + text


def busy_message(state: AppState) -> str | None:
    mode = state.mode
    if isinstance(mode, Loading):
        return f"{state.spinner_char()}  Loading..."
    if isinstance(mode, Downloading):
        return f"{state.spinner_char()}  Downloading: {download_name(mode.path)}"
    return None


def busy_overlay(state: AppState, width: int, height: int, theme: UITheme) -> OverlayBox | None:
    message = busy_message(state)
    if message is None:
        return None
    box_w = max(20, min(width - 2, max(width * 40 // 100, display_width(message) + 6)))
    inner_w = box_w - 2
    body = ["", _center(f"{theme.spinner}{message}{theme.reset}", inner_w), ""]
    rows = draw_modal_frame("", body, box_w, theme.spinner, theme)
    top = max(0, (height - len(rows)) // 2)
    left = max(0, (width - box_w) // 2)
    return OverlayBox(top=top, left=left, rows=tuple(rows))


def dialog_geometry(width: int, height: int) -> tuple[int, int]:
    """Return ``(box_width, box_height)`` of the destination dialog."""
    box_w = min(72, max(30, width - 8))
    box_h = min(max(DIALOG_CHROME_ROWS + 2, height - 2), max(14, height * 60 // 100))
    return box_w, box_h


def _path_input_row(picker: DirectoryPicker) -> str:
    text = picker.input_text
    if picker.focus is not DialogFocus.PATH_INPUT:
        return f" {text}"
    before = text[: picker.cursor_pos]
    at = text[picker.cursor_pos : picker.cursor_pos + 1] or " "
    after = text[picker.cursor_pos + 1 :]
    return f" {before}\033[7m{at}\033[27m{after}"


def _button(label: str, focused: bool, theme: UITheme) -> str:
    if focused:
        return f"{theme.button_focused} [ {label} ] \033[0m"
    return f" [ {label} ] "


def dialog_overlay(
    picker: DirectoryPicker,
    width: int,
    height: int,
    theme: UITheme,
) -> OverlayBox:
    box_w, box_h = dialog_geometry(width, height)
    inner_w = box_w - 2
    list_height = max(1, box_h - DIALOG_CHROME_ROWS)
    path_color = theme.help_key if picker.focus is DialogFocus.PATH_INPUT else theme.help_dim

    body = [
        f"{path_color} Target directory:{theme.reset}",
        _path_input_row(picker),
        f"{theme.help_dim}{'─' * inner_w}{theme.reset}",
    ]
    if not picker.entries:
        body.append(f"{theme.help_dim}  (no subdirectories){theme.reset}")
    window = picker.entries[picker.scroll : picker.scroll + list_height]
    for offset, name in enumerate(window):
        selected = picker.scroll + offset == picker.selected
        label = name if name == ".." else f"{name}/"
        if selected:
            body.append(f"{theme.reverse}> {label}\033[0m")
        else:
            body.append(f"  {label}")
    while len(body) < 3 + list_height:
        body.append("")
    buttons = (
        _button("Restore", picker.focus is DialogFocus.CONFIRM, theme)
        + "      "
        + _button("Cancel", picker.focus is DialogFocus.CANCEL, theme)
    )
    body.append("")
    body.append(_center(buttons, inner_w))

    title = f" Restore: {download_name(picker.source_path)} "
    rows = draw_modal_frame(title, body, box_w, theme.modal_border, theme)
    top = max(0, (height - len(rows)) // 2)
    left = max(0, (width - box_w) // 2)
    return OverlayBox(top=top, left=left, rows=tuple(rows))


__all__ = [
    "OverlayBox",
    "draw_modal_frame",
    "busy_message",
    "busy_overlay",
    "dialog_geometry",
    "dialog_overlay",
]
