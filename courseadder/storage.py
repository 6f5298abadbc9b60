"""
Persistent storage for the user's input lines.

This module manages the file:

    data/saved_lines.json

It plays the role of the settings popup's saved text box: the lines are
stored once and can be checked or run later without retyping them.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable


def _default_lines_path() -> Path:
    """
    Return the default path of saved_lines.json inside the package.

    A function instead of a constant, so tests can pass their own path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "saved_lines.json"


def load_saved_lines(path: str | Path | None = None) -> list[str]:
    """
    Load saved input lines (in their original order).

    Returns an empty list if the file does not exist or is invalid.
    """
    lines_path = Path(path) if path is not None else _default_lines_path()

    # First run: nothing saved yet
    if not lines_path.exists():
        return []

    try:
        data = json.loads(lines_path.read_text(encoding="utf-8"))
        raw = data.get("lines", [])
        if not isinstance(raw, list):
            return []
        return [x.strip() for x in raw if isinstance(x, str) and x.strip()]
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        return []


def save_lines(lines: Iterable[str], path: str | Path | None = None) -> list[str]:
    """
    Save input lines to saved_lines.json and return what was stored.

    Lines are stripped and blank lines dropped; order and duplicates are kept,
    since every line is one add action.
    """
    lines_path = Path(path) if path is not None else _default_lines_path()
    lines_path.parent.mkdir(parents=True, exist_ok=True)

    norm = [str(x).strip() for x in lines if str(x).strip()]
    payload = {"lines": norm}

    lines_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return norm
