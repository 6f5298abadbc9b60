"""
Serial driver: input lines -> search -> match -> move.

One line is fully processed (search, pick, act, settle) before the next one
starts, because the widget is a single shared surface.

Outcomes per line (see LineResult.status):
    added      best acceptable row was moved to the selected list
    not_found  no visible row satisfies the target
    skipped    line has no course token
    error      the widget failed (missing button, network error, ...)
None of them stops the run.
"""

from __future__ import annotations

import time

from typing import Any, Iterable, List, Protocol

import requests

from courseadder.match import select_best_match
from courseadder.model import ADDED, ERROR, NOT_FOUND, SKIPPED, Candidate, LineResult, Target
from courseadder.parse import parse_target
from courseadder.widget import WidgetError


DEFAULT_SETTLE_SECONDS = 0.4
DEFAULT_PAUSE_SECONDS = 0.3


class LabelSource(Protocol):
    def search(self, course: str) -> List[Candidate]:
        ...


class ActionSink(Protocol):
    def move_to_selected(self, handle: Any) -> None:
        ...


def _describe(target: Target) -> str:
    return f"{target.course} sec={target.section or '*'}"


def _process_line(line: str, target: Target, source: LabelSource, sink: ActionSink, settle_seconds: float) -> LineResult:
    print(f"SEARCH    {_describe(target)}")
    candidates = source.search(target.course)

    handle = select_best_match(target, candidates)
    if handle is None:
        print(f"NOT FOUND {_describe(target)}")
        return LineResult(line=line, target=target, status=NOT_FOUND)

    label = next(c.label for c in candidates if c.handle is handle)
    sink.move_to_selected(handle)
    print(f"ADDED     {_describe(target)} -> {label}")
    time.sleep(settle_seconds)
    return LineResult(line=line, target=target, status=ADDED, label=label)


def run_add_sequence(
    lines: Iterable[str],
    source: LabelSource,
    sink: ActionSink,
    settle_seconds: float = DEFAULT_SETTLE_SECONDS,
    pause_seconds: float = DEFAULT_PAUSE_SECONDS,
) -> List[LineResult]:
    """
    Process all lines in order and return one LineResult per line.
    """
    results: List[LineResult] = []

    for line in lines:
        target = parse_target(line)
        if target is None:
            print(f"SKIP      invalid line: {line!r}")
            results.append(LineResult(line=line, target=None, status=SKIPPED))
            continue

        try:
            results.append(_process_line(line, target, source, sink, settle_seconds))
        except (WidgetError, requests.RequestException) as e:
            print(f"ERROR     {line!r}: {e}")
            results.append(LineResult(line=line, target=target, status=ERROR, error=str(e)))

        # tiny delay between courses
        time.sleep(pause_seconds)

    return results


def summarize(results: Iterable[LineResult]) -> dict[str, int]:
    counts = {ADDED: 0, NOT_FOUND: 0, SKIPPED: 0, ERROR: 0}
    for r in results:
        counts[r.status] = counts.get(r.status, 0) + 1
    return counts
