"""Files-panel filter matching and query editing."""

from __future__ import annotations

import unittest

from snapview.filter_panel import SearchState, compute_matches
from snapview.model import FileEntry, parent_entry


class ComputeMatchesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.entries = [
            parent_entry("/home/docs"),
            FileEntry(name="Reports", kind="dir", path="/home/docs/Reports"),
            FileEntry(name="report.txt", kind="file", path="/home/docs/report.txt"),
            FileEntry(name="photo.jpg", kind="file", path="/home/docs/photo.jpg"),
        ]

    def test_case_insensitive_substring_in_entry_order(self) -> None:
        self.assertEqual(compute_matches(self.entries, "REPORT"), [0, 1, 2])

    def test_parent_entry_always_matches(self) -> None:
        self.assertEqual(compute_matches(self.entries, "zzz"), [0])

    def test_empty_query_matches_everything(self) -> None:
        self.assertEqual(compute_matches(self.entries, ""), [0, 1, 2, 3])

    def test_is_idempotent(self) -> None:
        self.assertEqual(compute_matches(self.entries, "o"), compute_matches(self.entries, "o"))


class SearchStateTests(unittest.TestCase):
    def test_insert_respects_cursor(self) -> None:
        search = SearchState()
        search.insert("a")
        search.insert("c")
        search.cursor_left()
        search.insert("b")

        self.assertEqual(search.query, "abc")
        self.assertEqual(search.cursor, 2)

    def test_backspace_and_delete_report_changes(self) -> None:
        search = SearchState(query="ab", cursor=2)

        self.assertFalse(search.delete())
        self.assertTrue(search.backspace())
        self.assertEqual(search.query, "a")
        search.cursor_home()
        self.assertFalse(search.backspace())
        self.assertTrue(search.delete())
        self.assertEqual(search.query, "")

    def test_clear_resets_everything(self) -> None:
        search = SearchState(query="x", cursor=1, matches=[0, 2])
        search.clear()

        self.assertEqual((search.query, search.cursor, search.matches), ("", 0, []))


if __name__ == "__main__":
    unittest.main()
