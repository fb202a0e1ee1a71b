"""Rendering engine for the three-panel snapshot browser.

Composes full ANSI frames from ``AppState``. The only state written here is
the visible-height hints and scroll offsets the next movement needs.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable

from ..ansi import fit_ansi_line
from ..state import AppState, Help, Panel, PickingDestination
from ..ui_theme import DEFAULT_THEME, UITheme
from .help import help_overlay
from .overlays import DIALOG_CHROME_ROWS, OverlayBox, busy_overlay, dialog_geometry, dialog_overlay
from .panels import (
    compute_layout,
    draw_box,
    file_list_height,
    file_panel_rows,
    files_panel_title,
    log_panel_rows,
    snapshot_panel_rows,
)
from .status import status_color, status_text

MIN_WIDTH = 20
MIN_HEIGHT = 10


def update_view_hints(state: AppState, width: int, height: int) -> None:
    """Record per-panel visible heights and scroll the cursors into view."""
    layout = compute_layout(height)
    state.snapshot_visible_height = max(1, layout.snapshots_height - 2)
    state.file_visible_height = file_list_height(state, layout.files_height - 2)
    _, dialog_h = dialog_geometry(width, height)
    state.picker_visible_height = max(1, dialog_h - DIALOG_CHROME_ROWS)
    state.adjust_scroll()
    if state.picker is not None:
        state.picker.adjust_scroll(state.picker_visible_height)


def frame_overlays(state: AppState, width: int, height: int, theme: UITheme) -> list[OverlayBox]:
    overlays: list[OverlayBox] = []
    busy = busy_overlay(state, width, height, theme)
    if busy is not None:
        overlays.append(busy)
    if isinstance(state.mode, PickingDestination) and state.picker is not None:
        overlays.append(dialog_overlay(state.picker, width, height, theme))
    if isinstance(state.mode, Help):
        overlays.append(help_overlay(width, height, theme))
    return overlays


def build_frame(state: AppState, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> str:
    """Return the complete ANSI payload for one frame."""
    width = max(MIN_WIDTH, width)
    height = max(MIN_HEIGHT, height)
    update_view_hints(state, width, height)
    layout = compute_layout(height)

    rows: list[str] = []
    rows.extend(
        draw_box(
            f" Snapshots ({len(state.snapshots)}) ",
            snapshot_panel_rows(state, layout.snapshots_height - 2, theme),
            width,
            layout.snapshots_height,
            theme,
            focused=state.focused_panel is Panel.SNAPSHOTS,
        )
    )
    rows.extend(
        draw_box(
            files_panel_title(state),
            file_panel_rows(state, layout.files_height - 2, width - 2, theme),
            width,
            layout.files_height,
            theme,
            focused=state.focused_panel is Panel.FILES,
        )
    )
    rows.extend(
        draw_box(
            f" Command Log ({len(state.oplog)}) ",
            log_panel_rows(state, layout.log_height - 2, theme),
            width,
            layout.log_height,
            theme,
        )
    )

    out: list[str] = ["\033[H\033[J"]
    status_row = min(layout.status_row, height - 1)
    for idx, row in enumerate(rows[:status_row]):
        out.append(f"\033[{idx + 1};1H")
        out.append(row)
    status = fit_ansi_line(f"{status_color(state, theme)}{status_text(state)}{theme.reset}", width)
    out.append(f"\033[{status_row + 1};1H")
    out.append(status)
    out.append("\033[0m")

    for overlay in frame_overlays(state, width, height, theme):
        out.append(overlay.to_ansi())
    return "".join(out)


def render_frame(state: AppState, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> None:
    """Render one frame directly to stdout."""
    payload = build_frame(state, width, height, theme)
    os.write(sys.stdout.fileno(), payload.encode("utf-8", errors="replace"))


def make_renderer(theme: UITheme) -> Callable[[AppState, int, int], None]:
    def render(state: AppState, width: int, height: int) -> None:
        render_frame(state, width, height, theme)

    return render


__all__ = [
    "build_frame",
    "frame_overlays",
    "make_renderer",
    "render_frame",
    "update_view_hints",
]
