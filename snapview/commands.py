"""Commands emitted by the state machine and the typed results folded back in.

Each command is executed by the task orchestrator as one unit of work that
reports exactly one result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .model import FileEntry, Snapshot
from .oplog import CommandRecord


@dataclass(frozen=True)
class ListSnapshots:
    """(Re)load the snapshot list."""


@dataclass(frozen=True)
class LoadSnapshot:
    """Enter a snapshot at its primary root path."""

    snapshot_id: str
    path: str


@dataclass(frozen=True)
class NavigateDir:
    snapshot_id: str
    path: str


@dataclass(frozen=True)
class Download:
    """Restore ``path`` from the snapshot into the local ``target`` directory."""

    snapshot_id: str
    path: str
    target: str


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[ListSnapshots, LoadSnapshot, NavigateDir, Download, Quit]


@dataclass(frozen=True)
class SnapshotsLoaded:
    snapshots: tuple[Snapshot, ...] = ()
    error: str | None = None
    record: CommandRecord | None = None


@dataclass(frozen=True)
class FilesLoaded:
    path: str
    entries: tuple[FileEntry, ...] = ()
    error: str | None = None
    record: CommandRecord | None = None


@dataclass(frozen=True)
class RestoreFinished:
    path: str
    target: str
    error: str | None = None
    record: CommandRecord | None = None


TaskResult = Union[SnapshotsLoaded, FilesLoaded, RestoreFinished]


__all__ = [
    "Command",
    "Download",
    "FilesLoaded",
    "ListSnapshots",
    "LoadSnapshot",
    "NavigateDir",
    "Quit",
    "RestoreFinished",
    "SnapshotsLoaded",
    "TaskResult",
]
