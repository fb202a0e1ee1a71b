"""Regression tests for ANSI-aware width and clipping helpers.

These protect panel borders from misalignment when rows carry colors or
wide characters.
"""

import unittest

from snapview import ansi as ansi_mod


class DisplayWidthTests(unittest.TestCase):
    def test_escape_sequences_have_no_width(self) -> None:
        self.assertEqual(ansi_mod.display_width("\033[1;34mdocs\033[0m"), 4)

    def test_wide_characters_take_two_cells(self) -> None:
        self.assertEqual(ansi_mod.display_width("日本"), 4)


class FitLineTests(unittest.TestCase):
    def test_clip_keeps_escapes_and_stops_at_width(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("\033[7mabcdef", 3), "\033[7mabc")

    def test_wide_character_is_not_split(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a日b", 2), "a")

    def test_fit_pads_to_exact_width(self) -> None:
        self.assertEqual(ansi_mod.fit_ansi_line("ab", 5), "ab   ")
        self.assertEqual(ansi_mod.fit_ansi_line("abcdef", 4), "abcd")

    def test_truncate_left_keeps_tail(self) -> None:
        self.assertEqual(ansi_mod.truncate_left("/home/user/docs", 8), "…er/docs")
        self.assertEqual(ansi_mod.truncate_left("/home", 8), "/home")
        self.assertEqual(ansi_mod.truncate_left("/home", 1), "…")
        self.assertEqual(ansi_mod.truncate_left("/home", 0), "")


if __name__ == "__main__":
    unittest.main()
