"""
Row matching and scoring.

Given a Target and the visible rows of the available list, decide which rows
satisfy the target and which one to act on.

Acceptance:
    the punctuation-stripped row text must contain the course code, and if a
    section is requested one of the section rules must match the row text:

    keyword    "SEC-09B", "Section: 9B"
    separator  ": 09B", "- 09B", " 09B"
    bare       "09B"

Scoring (higher wins, stable for ties):
    +10  course code contained
    +5   keyword rule matches
    +3   otherwise, bare rule matches
"""

from __future__ import annotations

import re

from functools import lru_cache

from typing import Any, Iterable, List, Optional, Tuple

from courseadder.model import Candidate, Target
from courseadder.normalize import normalize_token, strip_non_word


COURSE_SCORE = 10
KEYWORD_SCORE = 5
BARE_SCORE = 3


# ---------------------------------------------------------------------------
# Section rules
# ---------------------------------------------------------------------------

_FLAGS = re.IGNORECASE | re.ASCII


def _section_core(section: str) -> str:
    """
    Regex for the section digits with one optional leading zero ("09" -> "09" or "009").
    """
    return r"0?" + re.escape(section)


def _keyword_core(section: str) -> str:
    """
    After an explicit SEC keyword a padded section ("09", "09B") may also be
    written unpadded ("Sec: 9", "Sec 9B").
    """
    if len(section) >= 2 and section[0] == "0" and section[1].isdigit():
        return r"0{0,2}" + re.escape(section[1:])
    return _section_core(section)


@lru_cache(maxsize=128)
def keyword_rule(section: str) -> re.Pattern:
    return re.compile(r"\bSEC(?:TION)?\s*[:\-]*\s*" + _keyword_core(section) + r"\b", _FLAGS)


@lru_cache(maxsize=128)
def separator_rule(section: str) -> re.Pattern:
    return re.compile(r"[:\-\s]\s*" + _section_core(section) + r"\b", _FLAGS)


@lru_cache(maxsize=128)
def bare_rule(section: str) -> re.Pattern:
    return re.compile(r"\b" + _section_core(section) + r"\b", _FLAGS)


# Order matters
SECTION_RULES = (
    ("keyword", keyword_rule),
    ("separator", separator_rule),
    ("bare", bare_rule),
)


def matching_rule(label: str, section: str) -> Optional[str]:
    """
    Return the name of the first section rule matching the label, or None.
    """
    text = normalize_token(label)
    for name, build in SECTION_RULES:
        if build(section).search(text):
            return name
    return None


# ---------------------------------------------------------------------------
# Acceptance + score
# ---------------------------------------------------------------------------


def is_acceptable(label: str, target: Target) -> bool:
    if target.course not in strip_non_word(label):
        return False

    # no section specified -> any row of the course
    if not target.section:
        return True

    return matching_rule(label, target.section) is not None


def score(label: str, target: Target) -> int:
    text = normalize_token(label)
    total = 0

    if target.course in strip_non_word(text):
        total += COURSE_SCORE

    if target.section:
        if keyword_rule(target.section).search(text):
            total += KEYWORD_SCORE
        elif bare_rule(target.section).search(text):
            total += BARE_SCORE

    return total


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def rank_candidates(target: Target, candidates: Iterable[Candidate]) -> List[Tuple[int, bool, Candidate]]:
    """
    Return (score, acceptable, candidate) in scan order: best score first,
    original order kept among equal scores.
    """
    scored = [(score(c.label, target), c) for c in candidates]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [(s, is_acceptable(c.label, target), c) for s, c in scored]


def select_best_match(target: Target, candidates: Iterable[Candidate]) -> Optional[Any]:
    """
    Handle of the best acceptable candidate, or None ("not found").

    Only one row is ever chosen per target.
    """
    for _, acceptable, candidate in rank_candidates(target, candidates):
        if acceptable:
            return candidate.handle
    return None
