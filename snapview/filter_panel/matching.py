"""Name filtering for the files panel."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..model import FileEntry


@dataclass
class SearchState:
    """Query text, edit cursor, and indices of matching entries (in entry order)."""

    query: str = ""
    cursor: int = 0
    matches: list[int] = field(default_factory=list)

    def clear(self) -> None:
        self.query = ""
        self.cursor = 0
        self.matches = []

    def insert(self, ch: str) -> None:
        self.query = self.query[: self.cursor] + ch + self.query[self.cursor :]
        self.cursor += len(ch)

    def backspace(self) -> bool:
        if self.cursor <= 0:
            return False
        self.query = self.query[: self.cursor - 1] + self.query[self.cursor :]
        self.cursor -= 1
        return True

    def delete(self) -> bool:
        if self.cursor >= len(self.query):
            return False
        self.query = self.query[: self.cursor] + self.query[self.cursor + 1 :]
        return True

    def cursor_left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def cursor_right(self) -> None:
        self.cursor = min(len(self.query), self.cursor + 1)

    def cursor_home(self) -> None:
        self.cursor = 0

    def cursor_end(self) -> None:
        self.cursor = len(self.query)


def entry_matches(entry: FileEntry, folded_query: str) -> bool:
    if entry.is_parent:
        return True
    return not folded_query or folded_query in entry.name.lower()


def compute_matches(entries: Sequence[FileEntry], query: str) -> list[int]:
    """Indices of ``entries`` matching ``query``; ``..`` always matches."""
    folded = query.lower()
    return [idx for idx, entry in enumerate(entries) if entry_matches(entry, folded)]
