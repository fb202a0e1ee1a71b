"""Domain datatypes for snapshots and the entries captured inside them.

Both records are immutable; listings replace them wholesale.
JSON parsing helpers accept the objects printed by ``restic --json``.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from datetime import datetime, timezone

from dateutil.parser import isoparse

PARENT_ENTRY_NAME = ".."
KIND_DIR = "dir"
KIND_FILE = "file"

# restic prints nanoseconds; datetime stores microseconds.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")

_SIZE_UNITS: tuple[tuple[int, str], ...] = (
    (1024**3, "GB"),
    (1024**2, "MB"),
    (1024, "KB"),
)


def parse_timestamp(raw: str) -> datetime:
    """Parse an RFC 3339 timestamp, truncating sub-microsecond precision."""
    parsed = isoparse(_FRACTION_RE.sub(r"\1", raw.strip()))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_bytes(size: int) -> str:
    """Format ``size`` in 1024-based units with one decimal above bytes."""
    for unit_size, unit in _SIZE_UNITS:
        if size >= unit_size:
            return f"{size / unit_size:.1f} {unit}"
    return f"{size} B"


@dataclass(frozen=True)
class Snapshot:
    """One point-in-time capture in the repository."""

    id: str
    short_id: str
    time: datetime
    paths: tuple[str, ...]
    hostname: str = ""
    username: str = ""
    tags: tuple[str, ...] = ()

    @property
    def display_id(self) -> str:
        return self.short_id

    @property
    def primary_path(self) -> str:
        """Root path browsed when the snapshot is opened."""
        return self.paths[0] if self.paths else "/"

    @property
    def formatted_time(self) -> str:
        return self.time.strftime("%Y-%m-%d %H:%M")

    @property
    def tags_label(self) -> str:
        return f"[{','.join(self.tags)}]" if self.tags else ""

    @classmethod
    def from_json(cls, obj: object) -> Snapshot:
        """Build a snapshot from one ``restic snapshots --json`` object.

        Raises ``ValueError`` when required fields are missing or malformed.
        """
        if not isinstance(obj, dict):
            raise ValueError("snapshot is not a JSON object")
        full_id = obj.get("id")
        raw_time = obj.get("time")
        paths = obj.get("paths")
        if not isinstance(full_id, str) or not full_id:
            raise ValueError("snapshot has no id")
        if not isinstance(raw_time, str):
            raise ValueError(f"snapshot {full_id} has no time")
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            raise ValueError(f"snapshot {full_id} has no paths")
        short_id = obj.get("short_id")
        if not isinstance(short_id, str) or not short_id:
            short_id = full_id[:8]
        tags = obj.get("tags") or []
        return cls(
            id=full_id,
            short_id=short_id,
            time=parse_timestamp(raw_time),
            paths=tuple(paths),
            hostname=str(obj.get("hostname") or ""),
            username=str(obj.get("username") or ""),
            tags=tuple(str(tag) for tag in tags) if isinstance(tags, list) else (),
        )


@dataclass(frozen=True)
class FileEntry:
    """A file or directory node as it appeared inside a snapshot."""

    name: str
    kind: str
    path: str
    size: int | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind == KIND_DIR

    @property
    def is_parent(self) -> bool:
        """Whether this is the synthetic ``..`` row injected by the UI."""
        return self.name == PARENT_ENTRY_NAME

    @property
    def formatted_size(self) -> str:
        if self.is_dir:
            return "[DIR]"
        if self.size is None:
            return "-"
        return format_bytes(self.size)

    @classmethod
    def from_json(cls, obj: object) -> FileEntry:
        """Build an entry from one ``restic ls --json`` node line."""
        if not isinstance(obj, dict):
            raise ValueError("node is not a JSON object")
        name = obj.get("name")
        node_type = obj.get("type")
        path = obj.get("path")
        if not isinstance(name, str) or not isinstance(node_type, str) or not isinstance(path, str):
            raise ValueError("node is missing name, type or path")
        size = obj.get("size")
        if isinstance(size, bool) or not isinstance(size, int):
            size = None
        return cls(
            name=name,
            kind=KIND_DIR if node_type == KIND_DIR else KIND_FILE,
            path=path,
            size=size,
        )


def parent_path(path: str) -> str:
    """Return the parent of a POSIX path inside a snapshot (``/`` is its own parent)."""
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    parent = posixpath.dirname(stripped)
    return parent or "/"


def parent_entry(current_path: str) -> FileEntry:
    return FileEntry(name=PARENT_ENTRY_NAME, kind=KIND_DIR, path=parent_path(current_path))


def entry_sort_key(entry: FileEntry) -> tuple[int, str]:
    return (0 if entry.is_dir else 1, entry.name.lower())


def sort_entries(entries: list[FileEntry]) -> list[FileEntry]:
    """Directories first, then case-insensitive name order."""
    return sorted(entries, key=entry_sort_key)


def sort_snapshots(snapshots: list[Snapshot]) -> list[Snapshot]:
    """Newest snapshot first."""
    return sorted(snapshots, key=lambda snapshot: snapshot.time, reverse=True)


__all__ = [
    "FileEntry",
    "KIND_DIR",
    "KIND_FILE",
    "PARENT_ENTRY_NAME",
    "Snapshot",
    "entry_sort_key",
    "format_bytes",
    "parent_entry",
    "parent_path",
    "parse_timestamp",
    "sort_entries",
    "sort_snapshots",
]
