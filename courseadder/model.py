"""
Central data model definitions used across the project.

- Target: what one input line asks for (course + optional section)
- Candidate: one visible widget row (its text + whatever the caller needs to act on it)
- LineResult: outcome of processing one input line
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Target:
    """
    Canonical course/section request, e.g. Target("CSE221", "09B").

    section=None means "take the first visible row of this course".
    """

    course: str
    section: Optional[str]


@dataclass(frozen=True)
class Candidate:
    """
    One row of the available list.

    The handle is opaque to the matcher; only the label text is inspected.
    """

    label: str
    handle: Any


# LineResult.status values
ADDED = "added"
NOT_FOUND = "not_found"
SKIPPED = "skipped"
ERROR = "error"


@dataclass
class LineResult:
    line: str
    target: Optional[Target]
    status: str
    label: Optional[str] = None
    error: Optional[str] = None
