"""BeautifulSoup lookups used by the KissKH page parsers.

Both helpers answer ``""`` when nothing matches, so the parsers can treat
a missing link and an empty attribute the same way.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def attr_of(root: BeautifulSoup | Tag, selector: str, attr: str) -> str:
    """Stripped *attr* of the first element matching *selector*."""
    match = root.select_one(selector)
    value = match.get(attr) if match is not None else None
    return str(value).strip() if value else ""


def text_of(root: BeautifulSoup | Tag, selector: str) -> str:
    """Whitespace-stripped text of the first element matching *selector*."""
    match = root.select_one(selector)
    return match.get_text(strip=True) if match is not None else ""
