"""Application state owned by the control loop.

``Mode`` is a small closed set of tagged variants. The renderer reads
everything here but writes only the visible-height hints and scroll offsets.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from typing import Union

from .filter_panel import SearchState
from .model import FileEntry, Snapshot
from .navigation import NavigationCache
from .oplog import OperationLog
from .picker_panel import DirectoryPicker

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
DEFAULT_VISIBLE_HEIGHT = 20


class Panel(enum.Enum):
    SNAPSHOTS = "snapshots"
    FILES = "files"

    def toggled(self) -> Panel:
        return Panel.FILES if self is Panel.SNAPSHOTS else Panel.SNAPSHOTS


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Ready:
    pass


@dataclass(frozen=True)
class Searching:
    pass


@dataclass(frozen=True)
class PickingDestination:
    pass


@dataclass(frozen=True)
class Downloading:
    path: str


@dataclass(frozen=True)
class Error:
    message: str


@dataclass(frozen=True)
class Help:
    pass


Mode = Union[Loading, Ready, Searching, PickingDestination, Downloading, Error, Help]

LOADING = Loading()
READY = Ready()
SEARCHING = Searching()
PICKING = PickingDestination()
HELP = Help()


def is_busy(mode: Mode) -> bool:
    """Whether a background operation is in flight and input is suppressed."""
    return isinstance(mode, (Loading, Downloading))


@dataclass
class AppState:
    mode: Mode = LOADING
    focused_panel: Panel = Panel.SNAPSHOTS
    snapshots: list[Snapshot] = field(default_factory=list)
    snapshot_cursor: int = 0
    snapshot_scroll: int = 0
    active_snapshot: Snapshot | None = None
    current_path: str = ""
    files: list[FileEntry] = field(default_factory=list)
    file_cursor: int = 0
    file_scroll: int = 0
    nav_cache: NavigationCache = field(default_factory=NavigationCache)
    search: SearchState = field(default_factory=SearchState)
    picker: DirectoryPicker | None = None
    last_download_dir: str = field(default_factory=os.getcwd)
    status_message: str = ""
    spinner_frame: int = 0
    oplog: OperationLog = field(default_factory=OperationLog)
    snapshot_visible_height: int = DEFAULT_VISIBLE_HEIGHT
    file_visible_height: int = DEFAULT_VISIBLE_HEIGHT
    picker_visible_height: int = DEFAULT_VISIBLE_HEIGHT
    # Mode underneath the help overlay.
    help_return_mode: Mode | None = None
    should_quit: bool = False

    @property
    def snapshot_root(self) -> str | None:
        if self.active_snapshot is None:
            return None
        return self.active_snapshot.primary_path

    def filter_active(self) -> bool:
        """Whether the files panel shows the filtered view."""
        return bool(self.search.query) or isinstance(self.mode, Searching)

    def visible_files(self) -> list[FileEntry]:
        if not self.filter_active():
            return self.files
        return [self.files[idx] for idx in self.search.matches if 0 <= idx < len(self.files)]

    def visible_file_count(self) -> int:
        if not self.filter_active():
            return len(self.files)
        return len(self.search.matches)

    def file_index_at_cursor(self) -> int:
        """Index into ``files`` of the highlighted row, filtered or not."""
        if not self.filter_active():
            return self.file_cursor
        if 0 <= self.file_cursor < len(self.search.matches):
            return self.search.matches[self.file_cursor]
        return 0

    def file_at_cursor(self) -> FileEntry | None:
        visible = self.visible_files()
        if 0 <= self.file_cursor < len(visible):
            return visible[self.file_cursor]
        return None

    def snapshot_at_cursor(self) -> Snapshot | None:
        if 0 <= self.snapshot_cursor < len(self.snapshots):
            return self.snapshots[self.snapshot_cursor]
        return None

    def adjust_scroll(self) -> None:
        """Keep both panel cursors inside their visible windows."""
        self.snapshot_scroll = _scroll_to_cursor(
            self.snapshot_cursor, self.snapshot_scroll, self.snapshot_visible_height
        )
        self.file_scroll = _scroll_to_cursor(self.file_cursor, self.file_scroll, self.file_visible_height)

    def tick_spinner(self) -> None:
        self.spinner_frame = (self.spinner_frame + 1) % len(SPINNER_FRAMES)

    def spinner_char(self) -> str:
        return SPINNER_FRAMES[self.spinner_frame % len(SPINNER_FRAMES)]


def _scroll_to_cursor(cursor: int, scroll: int, visible_height: int) -> int:
    height = max(1, visible_height)
    if cursor < scroll:
        return cursor
    if cursor >= scroll + height:
        return cursor - height + 1
    return scroll


__all__ = [
    "AppState",
    "DEFAULT_VISIBLE_HEIGHT",
    "Downloading",
    "Error",
    "HELP",
    "Help",
    "LOADING",
    "Loading",
    "Mode",
    "PICKING",
    "Panel",
    "PickingDestination",
    "READY",
    "Ready",
    "SEARCHING",
    "SPINNER_FRAMES",
    "Searching",
    "is_busy",
]
