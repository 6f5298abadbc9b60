"""
Dual listbox widget adapter (HTML -> candidates, "click" -> moved row).

The registration page shows two lists side by side:

    available list   .dual-listbox__available .dual-listbox__item
    buttons          >  >>  <<<
    selected list    .dual-listbox__selected

DualListbox works on a saved (or freshly fetched) copy of that page:
- search() emulates the live filter of the search box
- move_to_selected() does what selecting a row and pressing ">>" does

It is the LabelSource and ActionSink used by the driver outside of a browser.
"""

from __future__ import annotations

import re

from pathlib import Path
from typing import List, Optional

import requests
from bs4 import BeautifulSoup, Tag

from courseadder.model import Candidate
from courseadder.normalize import strip_non_word


# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------

AVAILABLE_ROWS = ".dual-listbox__available .dual-listbox__item"
ANY_ROWS = ".dual-listbox__item"
SELECTED_LIST = ".dual-listbox__selected"
CENTRAL_BUTTONS = ".dual-listbox__buttons .dual-listbox__button"

# Preferred "add" buttons, best first
ADD_BUTTON_TEXTS = (">>", ">")

_HIDDEN_STYLE_RE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)


class WidgetError(Exception):
    """Raised when the page does not look like the expected widget."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_visible(el: Optional[Tag]) -> bool:
    """
    Inline-style visibility check, applied to the element and its parents.
    """
    node = el
    while isinstance(node, Tag):
        if node.has_attr("hidden"):
            return False
        if _HIDDEN_STYLE_RE.search(node.get("style", "") or ""):
            return False
        node = node.parent
    return el is not None


def row_label(row: Tag) -> str:
    return row.get_text(" ", strip=True)


def fetch_widget_html(url: str, timeout: float = 30) -> str:
    """
    Download the registration page.
    """
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.text


# ---------------------------------------------------------------------------
# Widget
# ---------------------------------------------------------------------------


class DualListbox:
    def __init__(self, html: str) -> None:
        self.soup = BeautifulSoup(html, "html.parser")

    def available_rows(self) -> List[Tag]:
        """
        Visible rows of the available list.

        Pages without the available/selected wrapper fall back to every item
        outside the selected list.
        """
        rows = self.soup.select(AVAILABLE_ROWS)
        if not rows:
            selected = self.soup.select_one(SELECTED_LIST)
            rows = [r for r in self.soup.select(ANY_ROWS) if not any(p is selected for p in r.parents)]
        return [r for r in rows if is_visible(r)]

    def search(self, course: str) -> List[Candidate]:
        """
        Rows the widget would still show after typing `course` into the search box.
        """
        query = strip_non_word(course)
        out: List[Candidate] = []
        for row in self.available_rows():
            label = row_label(row)
            if query in strip_non_word(label):
                out.append(Candidate(label=label, handle=row))
        return out

    def add_button(self) -> Optional[str]:
        """
        Text of the button used to move a row: ">>", then ">", then the first one.
        """
        texts = [b.get_text(strip=True) for b in self.soup.select(CENTRAL_BUTTONS) if is_visible(b)]
        for wanted in ADD_BUTTON_TEXTS:
            if wanted in texts:
                return wanted
        return texts[0] if texts else None

    def move_to_selected(self, handle: Tag) -> None:
        if self.add_button() is None:
            raise WidgetError("Central Add button not found")

        target_list = self.soup.select_one(SELECTED_LIST)
        if target_list is None:
            raise WidgetError("Selected list not found")

        target_list.append(handle.extract())

    def selected_labels(self) -> List[str]:
        target_list = self.soup.select_one(SELECTED_LIST)
        if target_list is None:
            return []
        return [row_label(r) for r in target_list.select(ANY_ROWS)]

    def to_html(self) -> str:
        return str(self.soup)


def load_widget(path: str | Path) -> DualListbox:
    return DualListbox(Path(path).read_text(encoding="utf-8"))
