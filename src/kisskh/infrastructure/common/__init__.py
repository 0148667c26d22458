"""Common infrastructure utilities."""

from __future__ import annotations

from .html_selectors import attr_of, parse_html, text_of

__all__ = [
    "attr_of",
    "parse_html",
    "text_of",
]
