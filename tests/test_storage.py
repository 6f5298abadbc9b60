"""
Unit tests for local storage of saved input lines.

Storage contract:
- Missing/invalid file -> empty list
- Lines are stripped, blank lines dropped, order and duplicates kept
- JSON schema: {"lines": [ ... ]}
"""

import json
import tempfile
import unittest
from pathlib import Path

from courseadder.storage import load_saved_lines, save_lines


class TestStorage(unittest.TestCase):
    def test_load_missing_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "missing.json"
            self.assertEqual(load_saved_lines(p), [])

    def test_load_broken_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "saved_lines.json"
            p.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_saved_lines(p), [])
            p.write_text('{"lines": "CSE221"}', encoding="utf-8")
            self.assertEqual(load_saved_lines(p), [])

    def test_save_and_load_roundtrip(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "nested" / "saved_lines.json"
            stored = save_lines([" CSE221: Sec-09B ", "", "MATH101", "MATH101"], p)
            self.assertEqual(stored, ["CSE221: Sec-09B", "MATH101", "MATH101"])
            self.assertEqual(load_saved_lines(p), stored)

            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertEqual(data, {"lines": stored})


if __name__ == "__main__":
    unittest.main()
