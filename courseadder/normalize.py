"""
Text canonicalization primitives.

Every other module compares course and section text through these two
functions only, so casing and punctuation rules live in exactly one place.
"""

from __future__ import annotations

import re

from typing import Optional


_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^A-Z0-9]")


def normalize_token(text: Optional[str]) -> str:
    """
    Uppercase, collapse whitespace runs to a single space and trim.

    None or empty input returns "".
    """
    return _WHITESPACE_RE.sub(" ", (text or "").upper()).strip()


def strip_non_word(text: Optional[str]) -> str:
    """
    Uppercase and drop every character that is not an ASCII letter or digit.

    "CSE 221: Sec-09B" -> "CSE221SEC09B"
    """
    return _NON_WORD_RE.sub("", (text or "").upper())
