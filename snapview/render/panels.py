"""Panel layout and row formatting for the three stacked panels.

Snapshots take 35% of the rows above the status bar, files 45% and the
operation log the rest. Every panel is a bordered box whose inner height is
reported back to ``AppState`` as the visible-height hint.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from ..ansi import display_width, fit_ansi_line, truncate_left
from ..model import FileEntry, Snapshot
from ..oplog import LogEntry
from ..state import AppState, Loading, Searching
from ..ui_theme import UITheme

MIN_PANEL_HEIGHT = 3
SIZE_COLUMN_WIDTH = 10


@dataclass(frozen=True)
class PanelLayout:
    """Row offsets (0-based) and heights of each screen region."""

    snapshots_top: int
    snapshots_height: int
    files_top: int
    files_height: int
    log_top: int
    log_height: int
    status_row: int


def compute_layout(height: int) -> PanelLayout:
    body = max(3 * MIN_PANEL_HEIGHT, height - 1)
    snapshots_height = max(MIN_PANEL_HEIGHT, body * 35 // 100)
    files_height = max(MIN_PANEL_HEIGHT, body * 45 // 100)
    log_height = max(MIN_PANEL_HEIGHT, body - snapshots_height - files_height)
    return PanelLayout(
        snapshots_top=0,
        snapshots_height=snapshots_height,
        files_top=snapshots_height,
        files_height=files_height,
        log_top=snapshots_height + files_height,
        log_height=log_height,
        status_row=snapshots_height + files_height + log_height,
    )


def draw_box(
    title: str,
    body: list[str],
    width: int,
    height: int,
    theme: UITheme,
    focused: bool = False,
) -> list[str]:
    """Return ``height`` rows drawing ``body`` inside a titled border."""
    inner_w = max(1, width - 2)
    inner_h = max(0, height - 2)
    border = theme.border_focused if focused else theme.border
    reset = theme.reset

    title_text = truncate_left(title, max(0, inner_w - 2))
    top_fill = "─" * max(0, inner_w - 1 - display_width(title_text))
    rows = [f"{border}┌─{reset}{theme.title}{title_text}{reset}{border}{top_fill}┐{reset}"]
    for idx in range(inner_h):
        text = body[idx] if idx < len(body) else ""
        rows.append(f"{border}│{reset}{fit_ansi_line(text, inner_w)}{reset}{border}│{reset}")
    rows.append(f"{border}└{'─' * inner_w}┘{reset}")
    return rows[:height]


def format_snapshot_row(snapshot: Snapshot, selected: bool, theme: UITheme) -> str:
    if selected:
        plain = (
            f"> {snapshot.display_id:8}  {snapshot.formatted_time}  {snapshot.hostname:16}"
            f"  {snapshot.username:8}  {snapshot.tags_label}"
        )
        return f"{theme.reverse}{plain}\033[0m"
    reset = theme.reset
    return (
        f"  {theme.snapshot_id}{snapshot.display_id:8}{reset}"
        f"  {theme.snapshot_time}{snapshot.formatted_time}{reset}"
        f"  {theme.snapshot_host}{snapshot.hostname:16}{reset}"
        f"  {snapshot.username:8}"
        f"  {theme.snapshot_tags}{snapshot.tags_label}{reset}"
    )


def snapshot_panel_rows(state: AppState, inner_height: int, theme: UITheme) -> list[str]:
    if not state.snapshots:
        message = "Loading snapshots..." if isinstance(state.mode, Loading) else "No snapshots found"
        return [f"  {message}"]
    visible = state.snapshots[state.snapshot_scroll : state.snapshot_scroll + inner_height]
    return [
        format_snapshot_row(snapshot, state.snapshot_scroll + offset == state.snapshot_cursor, theme)
        for offset, snapshot in enumerate(visible)
    ]


def format_file_row(entry: FileEntry, selected: bool, inner_width: int, theme: UITheme) -> str:
    name = f"{entry.name}/" if entry.is_dir and not entry.is_parent else entry.name
    name_width = max(1, inner_width - 3 - SIZE_COLUMN_WIDTH)
    if len(name) > name_width:
        name = name[: max(0, name_width - 1)] + "…"
    if selected:
        return f"{theme.reverse}> {name:<{name_width}} {entry.formatted_size:>{SIZE_COLUMN_WIDTH}}\033[0m"
    color = theme.file_dir if entry.is_dir else theme.file_default
    return (
        f"  {color}{name:<{name_width}}{theme.reset}"
        f" {theme.file_size}{entry.formatted_size:>{SIZE_COLUMN_WIDTH}}{theme.reset}"
    )


def files_panel_title(state: AppState) -> str:
    if state.active_snapshot is None:
        return " Files "
    total = len(state.files)
    if state.filter_active():
        return f" {state.current_path} [{state.visible_file_count()}/{total} matches] "
    return f" {state.current_path} [{total} items] "


def search_prompt_row(state: AppState, theme: UITheme) -> str:
    search = state.search
    if not isinstance(state.mode, Searching):
        return f"{theme.search_query}/{search.query}{theme.reset}"
    before = search.query[: search.cursor]
    at = search.query[search.cursor : search.cursor + 1] or " "
    after = search.query[search.cursor + 1 :]
    return f"{theme.search_query}/{before}{theme.reset}\033[7m{at}\033[27m{theme.search_query}{after}{theme.reset}"


def file_list_height(state: AppState, inner_height: int) -> int:
    """Rows available for entries; the search prompt takes one while filtering."""
    if state.filter_active():
        return max(1, inner_height - 1)
    return max(1, inner_height)


def file_panel_rows(state: AppState, inner_height: int, inner_width: int, theme: UITheme) -> list[str]:
    rows: list[str] = []
    if state.filter_active():
        rows.append(search_prompt_row(state, theme))
    if state.active_snapshot is None:
        rows.append("  Select a snapshot to browse files")
        return rows

    visible = state.visible_files()
    if not visible:
        if state.filter_active():
            rows.append("  No matches found")
        elif isinstance(state.mode, Loading):
            rows.append("  Loading files...")
        else:
            rows.append("  Empty directory")
        return rows

    list_height = file_list_height(state, inner_height)
    window = visible[state.file_scroll : state.file_scroll + list_height]
    for offset, entry in enumerate(window):
        selected = state.file_scroll + offset == state.file_cursor
        rows.append(format_file_row(entry, selected, inner_width, theme))
    return rows


def format_log_entry(entry: LogEntry, theme: UITheme) -> list[str]:
    color = theme.log_ok if entry.success else theme.log_fail
    header = (
        f"{theme.log_dim}[{entry.timestamp:%H:%M:%S}]{theme.reset} "
        f"{color}[{entry.status_label:4}]{theme.reset} {entry.command}"
    )
    lines = [header]
    lines.extend(f"     {theme.log_fail}{line}{theme.reset}" for line in entry.error_lines)
    return lines


def log_panel_rows(state: AppState, inner_height: int, theme: UITheme) -> list[str]:
    entries = state.oplog.entries
    if not entries:
        return ["  No commands executed yet"]
    lines: list[str] = []
    for entry in entries:
        lines.extend(format_log_entry(entry, theme))
    # Newest at the bottom.
    return lines[-inner_height:] if inner_height > 0 else []


def download_name(path: str) -> str:
    return posixpath.basename(path.rstrip("/")) or path


__all__ = [
    "PanelLayout",
    "compute_layout",
    "download_name",
    "draw_box",
    "file_list_height",
    "file_panel_rows",
    "files_panel_title",
    "format_file_row",
    "format_log_entry",
    "format_snapshot_row",
    "log_panel_rows",
    "search_prompt_row",
    "snapshot_panel_rows",
]
