"""
Tests for the serial driver (parse -> search -> match -> move, one line at a time).
"""

import io
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import requests

from courseadder.driver import run_add_sequence, summarize
from courseadder.model import ADDED, ERROR, NOT_FOUND, SKIPPED, Candidate, Target
from courseadder.widget import WidgetError, load_widget


PAGE = Path(__file__).resolve().parent / "data" / "widget.html"


class FakeWidget:
    """
    Records every call; rows are given per course code.
    """

    def __init__(self, rows: dict, failing: tuple = ()) -> None:
        self.rows = rows
        self.failing = failing
        self.calls: list = []

    def search(self, course: str) -> list:
        self.calls.append(("search", course))
        if course in self.failing:
            raise WidgetError("timeout")
        return [Candidate(label, label) for label in self.rows.get(course, [])]

    def move_to_selected(self, handle) -> None:
        self.calls.append(("move", handle))


def _run(lines, widget):
    with redirect_stdout(io.StringIO()):
        return run_add_sequence(lines, source=widget, sink=widget, settle_seconds=0, pause_seconds=0)


class TestRunAddSequence(unittest.TestCase):
    def test_lines_are_processed_in_order(self) -> None:
        widget = FakeWidget(
            {
                "CSE221": ["CSE221 Sec-01", "CSE221 Sec-09B"],
                "MATH101": ["MATH101 Sec-04"],
            }
        )
        results = _run(["CSE221: Sec-09B", "???", "MATH101", "CSE999 1"], widget)

        self.assertEqual([r.status for r in results], [ADDED, SKIPPED, ADDED, NOT_FOUND])
        self.assertEqual(results[0].target, Target("CSE221", "09B"))
        self.assertEqual(results[0].label, "CSE221 Sec-09B")
        self.assertIsNone(results[1].target)
        self.assertEqual(
            widget.calls,
            [
                ("search", "CSE221"),
                ("move", "CSE221 Sec-09B"),
                ("search", "MATH101"),
                ("move", "MATH101 Sec-04"),
                ("search", "CSE999"),
            ],
        )

    def test_only_one_row_is_moved_per_line(self) -> None:
        widget = FakeWidget({"CSE221": ["CSE221 Sec-09 A", "CSE221 Sec-09 B"]})
        _run(["CSE221 9"], widget)
        self.assertEqual([c for c in widget.calls if c[0] == "move"], [("move", "CSE221 Sec-09 A")])

    def test_widget_errors_do_not_stop_the_run(self) -> None:
        widget = FakeWidget({"MATH101": ["MATH101 Sec-01"]}, failing=("CSE221",))
        results = _run(["CSE221 9", "MATH101"], widget)

        self.assertEqual([r.status for r in results], [ERROR, ADDED])
        self.assertEqual(results[0].error, "timeout")

    def test_network_errors_do_not_stop_the_run(self) -> None:
        class Offline(FakeWidget):
            def search(self, course: str) -> list:
                raise requests.ConnectionError("offline")

        results = _run(["CSE221 9", "MATH101"], Offline({}))
        self.assertEqual([r.status for r in results], [ERROR, ERROR])

    def test_progress_is_printed(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            run_add_sequence(["???", "CSE221 9"], FakeWidget({}), FakeWidget({}), 0, 0)
        out = buf.getvalue()
        self.assertIn("SKIP", out)
        self.assertIn("NOT FOUND CSE221 sec=09", out)

    def test_summarize(self) -> None:
        widget = FakeWidget({"CSE221": ["CSE221 Sec-09"]})
        counts = summarize(_run(["CSE221 9", "???", "CSE221 10"], widget))
        self.assertEqual(counts, {ADDED: 1, NOT_FOUND: 1, SKIPPED: 1, ERROR: 0})


class TestRunOnSavedPage(unittest.TestCase):
    def test_full_sequence(self) -> None:
        widget = load_widget(PAGE)
        results = _run(["CSE221: Sec-09", "CSE 221 9B", "MATH101", "CSE221 sec 05"], widget)

        self.assertEqual([r.status for r in results], [ADDED, ADDED, ADDED, NOT_FOUND])
        self.assertEqual(
            widget.selected_labels(),
            ["CSE221 Sec-09 (MW 09:30)", "CSE221 Sec-09B (MW 11:00)", "MATH101 Sec-04"],
        )


if __name__ == "__main__":
    unittest.main()
