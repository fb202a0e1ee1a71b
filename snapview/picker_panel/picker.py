"""Restore-destination directory picker.

Holds an editable path, the sub-directories of whatever directory that path
resolves to, a selection, a scroll offset and which dialog control has focus.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path

PARENT_ROW = ".."


class DialogFocus(enum.Enum):
    PATH_INPUT = "path_input"
    CONFIRM = "confirm"
    CANCEL = "cancel"

    def next(self) -> DialogFocus:
        return _FOCUS_CYCLE[(_FOCUS_CYCLE.index(self) + 1) % len(_FOCUS_CYCLE)]

    def prev(self) -> DialogFocus:
        return _FOCUS_CYCLE[(_FOCUS_CYCLE.index(self) - 1) % len(_FOCUS_CYCLE)]


_FOCUS_CYCLE: tuple[DialogFocus, ...] = (
    DialogFocus.PATH_INPUT,
    DialogFocus.CONFIRM,
    DialogFocus.CANCEL,
)


def expand_tilde(text: str) -> str:
    """Expand a leading ``~`` or ``~/`` to the home directory."""
    if text == "~":
        return str(Path.home())
    if text.startswith("~/"):
        return str(Path.home()) + text[1:]
    return text


def _as_path(text: str) -> Path:
    expanded = expand_tilde(text)
    if not expanded:
        return Path("/")
    path = Path(expanded)
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def _is_dir(path: Path) -> bool:
    # Over-long names and unsearchable parents raise instead of returning False.
    try:
        return path.is_dir()
    except OSError:
        return False


def resolve_listing_dir(text: str) -> Path:
    """Directory to list for ``text``: itself when it is a directory, else its parent."""
    path = _as_path(text)
    if _is_dir(path):
        return path
    return path.parent


def is_filesystem_root(path: Path) -> bool:
    return path.parent == path


def list_subdirectories(directory: Path) -> list[str]:
    """Visible sub-directory names of ``directory`` in case-insensitive order.

    Symlinks are not followed and unreadable directories yield nothing.
    """
    names: list[str] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                if child.name.startswith("."):
                    continue
                try:
                    if not child.is_dir(follow_symlinks=False):
                        continue
                except OSError:
                    continue
                names.append(child.name)
    except OSError:
        return []
    names.sort(key=str.lower)
    return names


@dataclass
class DirectoryPicker:
    source_path: str
    input_text: str
    cursor_pos: int = 0
    entries: list[str] = field(default_factory=list)
    selected: int = 0
    scroll: int = 0
    focus: DialogFocus = DialogFocus.PATH_INPUT

    @classmethod
    def open(cls, source_path: str, initial_dir: str) -> DirectoryPicker:
        picker = cls(source_path=source_path, input_text=initial_dir, cursor_pos=len(initial_dir))
        picker.refresh_entries()
        return picker

    def focus_next(self) -> None:
        self.focus = self.focus.next()

    def focus_prev(self) -> None:
        self.focus = self.focus.prev()

    @property
    def listing_dir(self) -> Path:
        return resolve_listing_dir(self.input_text)

    def refresh_entries(self) -> None:
        """Re-list the resolved directory and reset selection and scroll."""
        self.selected = 0
        self.scroll = 0
        directory = self.listing_dir
        entries = [] if is_filesystem_root(directory) else [PARENT_ROW]
        entries.extend(list_subdirectories(directory))
        self.entries = entries

    def _set_text(self, text: str) -> None:
        self.input_text = text
        self.cursor_pos = len(text)
        self.refresh_entries()

    def insert_char(self, ch: str) -> None:
        self.input_text = self.input_text[: self.cursor_pos] + ch + self.input_text[self.cursor_pos :]
        self.cursor_pos += len(ch)
        self.refresh_entries()

    def backspace(self) -> None:
        if self.cursor_pos <= 0:
            return
        self.input_text = self.input_text[: self.cursor_pos - 1] + self.input_text[self.cursor_pos :]
        self.cursor_pos -= 1
        self.refresh_entries()

    def delete(self) -> None:
        if self.cursor_pos >= len(self.input_text):
            return
        self.input_text = self.input_text[: self.cursor_pos] + self.input_text[self.cursor_pos + 1 :]
        self.refresh_entries()

    def cursor_left(self) -> None:
        self.cursor_pos = max(0, self.cursor_pos - 1)

    def cursor_right(self) -> None:
        self.cursor_pos = min(len(self.input_text), self.cursor_pos + 1)

    def cursor_home(self) -> None:
        self.cursor_pos = 0

    def cursor_end(self) -> None:
        self.cursor_pos = len(self.input_text)

    def select_prev(self) -> None:
        if self.selected > 0:
            self.selected -= 1

    def select_next(self) -> None:
        if self.selected < len(self.entries) - 1:
            self.selected += 1

    @property
    def selected_entry(self) -> str | None:
        if 0 <= self.selected < len(self.entries):
            return self.entries[self.selected]
        return None

    def enter_selected(self) -> None:
        """Commit the selected row into the path text."""
        name = self.selected_entry
        if name is None:
            return
        if name == PARENT_ROW:
            self.go_parent()
            return
        self._set_text(str(self.listing_dir / name))

    def go_parent(self) -> None:
        directory = self.listing_dir
        if is_filesystem_root(directory):
            return
        self._set_text(str(directory.parent))

    def confirmed_path(self) -> str:
        """Final destination: the typed directory, or the parent of a non-directory path."""
        expanded = expand_tilde(self.input_text)
        if expanded and _is_dir(_as_path(self.input_text)):
            return expanded
        return str(resolve_listing_dir(self.input_text))

    def adjust_scroll(self, visible_height: int) -> None:
        if visible_height <= 0:
            return
        if self.selected < self.scroll:
            self.scroll = self.selected
        elif self.selected >= self.scroll + visible_height:
            self.scroll = self.selected - visible_height + 1


__all__ = [
    "DialogFocus",
    "DirectoryPicker",
    "PARENT_ROW",
    "expand_tilde",
    "is_filesystem_root",
    "list_subdirectories",
    "resolve_listing_dir",
]
