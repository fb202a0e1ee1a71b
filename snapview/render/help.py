"""Help modal content and rendering.

Rendering helpers here are presentation-only and side-effect free.
"""

from __future__ import annotations

from ..ui_theme import UITheme
from .overlays import OverlayBox, draw_modal_frame

HELP_TITLE = " snapview help "

# (keys, description); a ``None`` key starts a section heading.
HELP_ROWS: tuple[tuple[str | None, str], ...] = (
    (None, "Keyboard Controls"),
    ("↑ / k", "Move cursor up"),
    ("↓ / j", "Move cursor down"),
    ("Ctrl-F", "Page down (full screen)"),
    ("Ctrl-B", "Page up (full screen)"),
    ("Ctrl-D", "Scroll down (half screen)"),
    ("Ctrl-U", "Scroll up (half screen)"),
    ("g / Home", "Go to first item"),
    ("G / End", "Go to last item"),
    ("", ""),
    ("Tab", "Switch panel (Snapshots / Files)"),
    ("Enter", "Open directory / Select snapshot"),
    ("Bksp/h", "Go to parent directory"),
    ("", ""),
    ("/", "Search/filter files (in Files panel)"),
    ("d", "Restore selected file/folder"),
    ("r", "Reload snapshot list"),
    ("?", "Toggle this help"),
    ("q / Esc", "Quit"),
    ("", ""),
    (None, "Command Log"),
    ("", "Shows restic commands with OK/FAIL status"),
    ("", ""),
    (None, "Search Mode"),
    ("", "Type to filter, Enter=confirm, Esc=clear"),
    ("", ""),
    (None, "Restore Dialog"),
    ("", "Tab/Shift+Tab=switch focus  Esc=cancel"),
    ("", "Path: type, ↑↓=select, Enter=open"),
    ("", "On button: Enter=activate"),
)

KEY_COLUMN_WIDTH = 10


def help_lines(theme: UITheme) -> list[str]:
    lines: list[str] = []
    for keys, text in HELP_ROWS:
        if keys is None:
            lines.append(f"{theme.help_heading}{text}{theme.reset}")
        elif keys:
            lines.append(f"  {theme.help_key}{keys:<{KEY_COLUMN_WIDTH}}{theme.reset}{text}")
        else:
            lines.append(f"  {text}" if text else "")
    lines.append("")
    lines.append(f"{theme.help_dim}Press ? / Esc / q to close{theme.reset}")
    return lines


def help_overlay(width: int, height: int, theme: UITheme) -> OverlayBox:
    """Centered help modal clipped to the terminal height."""
    modal_w = min(64, max(40, width - 10))
    body = [f" {line}" for line in help_lines(theme)]
    max_body = max(1, height - 2)
    if len(body) > max_body:
        body = body[: max_body - 1] + body[-1:]
    rows = draw_modal_frame(HELP_TITLE, body, modal_w, theme.modal_border, theme)
    top = max(0, (height - len(rows)) // 2)
    left = max(0, (width - modal_w) // 2)
    return OverlayBox(top=top, left=left, rows=tuple(rows))


__all__ = ["HELP_ROWS", "help_lines", "help_overlay"]
