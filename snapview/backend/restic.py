"""restic command-line client.

Every operation runs one ``restic`` process, parses its JSON output and
returns ``(value, CommandRecord)``. Failures raise ``BackendError`` carrying
the record so the operation log can still show what was run.
"""

from __future__ import annotations

import json
import shlex
import subprocess

from ..config import ResticSettings
from ..debug import get_logger
from ..errors import BackendError
from ..model import FileEntry, Snapshot, sort_entries, sort_snapshots
from ..oplog import CommandRecord

logger = get_logger("backend")


def is_direct_child(child_path: str, parent_path: str) -> bool:
    """Whether ``child_path`` sits exactly one level below ``parent_path``.

    Trailing slashes are ignored on both sides.
    """
    parent = parent_path.rstrip("/")
    child = child_path.rstrip("/")
    if not child.startswith(parent):
        return False
    remaining = child[len(parent) :]
    if remaining.startswith("/"):
        return "/" not in remaining[1:] and bool(remaining[1:])
    if not parent:
        trimmed = remaining.lstrip("/")
        return bool(trimmed) and "/" not in trimmed
    return False


class ResticClient:
    """Thin wrapper over the ``restic`` binary for one repository."""

    def __init__(self, settings: ResticSettings) -> None:
        self.settings = settings

    def _base_args(self, json_output: bool = True) -> list[str]:
        args = [self.settings.binary, "--repo", self.settings.repository]
        if json_output:
            args.append("--json")
        return args

    def _run(
        self,
        args: list[str],
        label: str,
        timeout: float | None,
    ) -> tuple[str, CommandRecord]:
        """Run ``args`` and return stdout plus a success record.

        Raises ``BackendError`` on a missing binary, timeout or non-zero exit.
        """
        command = shlex.join(args)
        logger.debug("running %s", command)
        try:
            proc = subprocess.run(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            message = f"restic {label} timed out after {timeout:g}s"
            raise BackendError(message, CommandRecord(command, False, message)) from None
        except OSError as exc:
            message = f"Failed to run restic {label}: {exc}"
            raise BackendError(message, CommandRecord(command, False, str(exc))) from exc

        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            raise BackendError(
                f"restic {label} failed: {stderr or f'exit status {proc.returncode}'}",
                CommandRecord(command, False, stderr or None),
            )
        return proc.stdout or "", CommandRecord(command, True)

    def list_snapshots(self) -> tuple[list[Snapshot], CommandRecord]:
        """All snapshots, newest first. Objects that fail to parse are dropped."""
        stdout, record = self._run(
            [*self._base_args(), "snapshots"],
            "snapshots",
            self.settings.list_timeout,
        )
        try:
            raw = json.loads(stdout) if stdout.strip() else []
        except ValueError as exc:
            message = f"Failed to parse snapshots JSON: {exc}"
            raise BackendError(message, CommandRecord(record.command, False, message)) from exc
        if not isinstance(raw, list):
            message = "Failed to parse snapshots JSON: expected a list"
            raise BackendError(message, CommandRecord(record.command, False, message))

        snapshots: list[Snapshot] = []
        for obj in raw:
            try:
                snapshots.append(Snapshot.from_json(obj))
            except ValueError as exc:
                logger.debug("skipping snapshot: %s", exc)
        return sort_snapshots(snapshots), record

    def list_entries(self, snapshot_id: str, path: str) -> tuple[list[FileEntry], CommandRecord]:
        """Direct children of ``path`` inside the snapshot, directories first."""
        stdout, record = self._run(
            [*self._base_args(), "ls", snapshot_id, path],
            "ls",
            self.settings.list_timeout,
        )
        entries: list[FileEntry] = []
        # NDJSON: the first line describes the snapshot, then one node per line.
        for line in stdout.splitlines():
            if not line.strip():
                continue
            try:
                entry = FileEntry.from_json(json.loads(line))
            except ValueError:
                continue
            if entry.path == path or not is_direct_child(entry.path, path):
                continue
            entries.append(entry)
        return sort_entries(entries), record

    def restore(self, snapshot_id: str, path: str, target: str) -> tuple[str, CommandRecord]:
        """Restore ``path`` from the snapshot below ``target`` and return ``target``."""
        _, record = self._run(
            [*self._base_args(json_output=False), "restore", snapshot_id, "--include", path, "--target", target],
            "restore",
            None,
        )
        return target, record


__all__ = ["ResticClient", "is_direct_child"]
