"""
Parsing (free text -> Target).

Turns one loosely formatted input line into a canonical Target:

    "CSE221: Sec-09B"  -> Target("CSE221", "09B")
    "cse221 sec-09"    -> Target("CSE221", "09")
    "CSE 221: 9B"      -> Target("CSE221", "09B")
    "CSE 221 9"        -> Target("CSE221", "09")
    "MATH101"          -> Target("MATH101", None)
    "???"              -> None

Important rules:
- A line without a course token is unparsable (None), nothing else fails
- The section is searched after the course first, then in the rest of the line
- Section digits are padded to 2, three-digit sections stay as they are
"""

from __future__ import annotations

import re

from typing import Iterable, List, Optional, Tuple

from courseadder.model import Target
from courseadder.normalize import normalize_token, strip_non_word


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

# ASCII letters + digits with optional space (e.g. CSE221 or CSE 221)
COURSE_RE = re.compile(r"[A-Z]{2,}\s*[0-9]{2,3}", re.IGNORECASE | re.ASCII)

# Optional "SEC"/"SECTION" keyword, then 1-3 digits and an optional letter
SECTION_RE = re.compile(r"(?:SEC(?:TION)?[\s:-]*)?([0-9]{1,3}[A-Z]?)", re.IGNORECASE | re.ASCII)

# Digit run + optional trailing letter of an already extracted section token
SECTION_PARTS_RE = re.compile(r"^([0-9]{1,3})([A-Z]?)$")

_LINE_SPLIT_RE = re.compile(r"\r?\n")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def canonical_section(token: str) -> Optional[str]:
    """
    "9" -> "09", "9b" -> "09B", "123" -> "123".

    Returns None if the token is not digits + optional letter.
    """
    m = SECTION_PARTS_RE.match(token.upper())
    if not m:
        return None

    digits, letter = m.group(1), m.group(2)
    width = len(digits) if len(digits) > 2 else 2
    return digits.zfill(width) + letter


def _find_section(raw: str, course_start: int, course_end: int) -> Optional[str]:
    # First pass: only the text after the course token
    m = SECTION_RE.search(raw[course_end:])

    # Fallback: the whole line, with the course token blanked out
    # so its own digits are never read as a section
    if not m:
        m = SECTION_RE.search(raw[:course_start] + " " + raw[course_end:])

    if not m or not m.group(1):
        return None
    return canonical_section(m.group(1))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_target(line: Optional[str]) -> Optional[Target]:
    """
    Parse one input line into a Target, or None if no course token is found.
    """
    raw = normalize_token(line)

    m_course = COURSE_RE.search(raw)
    if not m_course:
        return None

    course = strip_non_word(m_course.group(0))
    section = _find_section(raw, m_course.start(), m_course.end())

    return Target(course=course, section=section)


def split_lines(text: Optional[str]) -> List[str]:
    """
    Split raw multi-line input into target lines (stripped, blank lines dropped).
    """
    lines = [s.strip() for s in _LINE_SPLIT_RE.split(text or "")]
    return [s for s in lines if s]


def parse_targets(lines: Iterable[str]) -> List[Tuple[str, Optional[Target]]]:
    """
    Parse a batch of lines, keeping each raw line next to its Target (or None).
    """
    return [(line, parse_target(line)) for line in lines]
