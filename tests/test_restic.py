"""restic client tests with ``subprocess.run`` mocked out.

Check the argument vectors, JSON/NDJSON parsing and how failures become
``BackendError`` values carrying a failed ``CommandRecord``.
"""

from __future__ import annotations

import json
import subprocess
import unittest
from unittest import mock

from snapview.backend import ResticClient, is_direct_child
from snapview.config import ResticSettings
from snapview.errors import BackendError


def _completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


SNAPSHOTS_JSON = json.dumps(
    [
        {"id": "abc123", "short_id": "abc123", "time": "2024-05-01T01:00:00Z", "paths": ["/home"]},
        {"id": "def456", "short_id": "def456", "time": "2024-05-02T01:00:00Z", "paths": ["/home"]},
        {"id": "broken"},
    ]
)

LS_NDJSON = "\n".join(
    json.dumps(obj)
    for obj in (
        {"struct_type": "snapshot", "id": "def456", "paths": ["/home"]},
        {"name": "home", "type": "dir", "path": "/home"},
        {"name": "notes.txt", "type": "file", "path": "/home/notes.txt", "size": 512},
        {"name": "docs", "type": "dir", "path": "/home/docs"},
        {"name": "a.txt", "type": "file", "path": "/home/docs/a.txt", "size": 1},
    )
) + "\nnot json\n"


class ResticClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = ResticClient(ResticSettings(repository="/srv/repo"))

    def test_list_snapshots_parses_sorts_and_skips_bad_objects(self) -> None:
        with mock.patch("snapview.backend.restic.subprocess.run", return_value=_completed(SNAPSHOTS_JSON)) as run:
            snapshots, record = self.client.list_snapshots()

        self.assertEqual([s.id for s in snapshots], ["def456", "abc123"])
        self.assertEqual(run.call_args.args[0], ["restic", "--repo", "/srv/repo", "--json", "snapshots"])
        self.assertEqual(run.call_args.kwargs["timeout"], 300.0)
        self.assertTrue(record.success)
        self.assertEqual(record.command, "restic --repo /srv/repo --json snapshots")

    def test_non_zero_exit_raises_with_stderr(self) -> None:
        failed = _completed(returncode=1, stderr="Fatal: wrong password\n")
        with mock.patch("snapview.backend.restic.subprocess.run", return_value=failed):
            with self.assertRaises(BackendError) as ctx:
                self.client.list_snapshots()

        self.assertEqual(str(ctx.exception), "restic snapshots failed: Fatal: wrong password")
        self.assertFalse(ctx.exception.record.success)
        self.assertEqual(ctx.exception.record.error_output, "Fatal: wrong password")

    def test_malformed_snapshot_json_raises(self) -> None:
        with mock.patch("snapview.backend.restic.subprocess.run", return_value=_completed("{not json")):
            with self.assertRaises(BackendError) as ctx:
                self.client.list_snapshots()

        self.assertTrue(str(ctx.exception).startswith("Failed to parse snapshots JSON"))
        self.assertFalse(ctx.exception.record.success)

    def test_missing_binary_raises(self) -> None:
        with mock.patch("snapview.backend.restic.subprocess.run", side_effect=FileNotFoundError("restic")):
            with self.assertRaises(BackendError) as ctx:
                self.client.list_snapshots()

        self.assertIn("Failed to run restic snapshots", str(ctx.exception))

    def test_timeout_raises(self) -> None:
        timeout = subprocess.TimeoutExpired(cmd="restic", timeout=300.0)
        with mock.patch("snapview.backend.restic.subprocess.run", side_effect=timeout):
            with self.assertRaises(BackendError) as ctx:
                self.client.list_entries("def456", "/home")

        self.assertEqual(str(ctx.exception), "restic ls timed out after 300s")

    def test_list_entries_keeps_direct_children_only(self) -> None:
        with mock.patch("snapview.backend.restic.subprocess.run", return_value=_completed(LS_NDJSON)) as run:
            entries, record = self.client.list_entries("def456", "/home")

        self.assertEqual(run.call_args.args[0], ["restic", "--repo", "/srv/repo", "--json", "ls", "def456", "/home"])
        self.assertEqual([entry.name for entry in entries], ["docs", "notes.txt"])
        self.assertEqual(entries[1].size, 512)
        self.assertTrue(record.success)

    def test_restore_builds_include_and_target_arguments(self) -> None:
        with mock.patch("snapview.backend.restic.subprocess.run", return_value=_completed()) as run:
            target, record = self.client.restore("def456", "/home/notes.txt", "/tmp/my out")

        self.assertEqual(
            run.call_args.args[0],
            ["restic", "--repo", "/srv/repo", "restore", "def456", "--include", "/home/notes.txt", "--target", "/tmp/my out"],
        )
        self.assertIsNone(run.call_args.kwargs["timeout"])
        self.assertEqual(target, "/tmp/my out")
        self.assertIn("'/tmp/my out'", record.command)

    def test_custom_binary_is_used(self) -> None:
        client = ResticClient(ResticSettings(repository="s3:bucket", binary="/opt/restic"))
        with mock.patch("snapview.backend.restic.subprocess.run", return_value=_completed("[]")) as run:
            snapshots, _record = client.list_snapshots()

        self.assertEqual(snapshots, [])
        self.assertEqual(run.call_args.args[0][:3], ["/opt/restic", "--repo", "s3:bucket"])


class DirectChildTests(unittest.TestCase):
    def test_direct_children(self) -> None:
        self.assertTrue(is_direct_child("/home/docs", "/home"))
        self.assertTrue(is_direct_child("/home/docs/", "/home/"))
        self.assertTrue(is_direct_child("/etc", "/"))

    def test_non_children(self) -> None:
        self.assertFalse(is_direct_child("/home/docs/a", "/home"))
        self.assertFalse(is_direct_child("/home", "/home"))
        self.assertFalse(is_direct_child("/homework", "/home"))
        self.assertFalse(is_direct_child("/etc/x", "/"))


if __name__ == "__main__":
    unittest.main()
