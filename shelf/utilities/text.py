"""Helpers for cleaning HTML fragments returned by the catalogue APIs.

Spoonacular sends descriptions and summaries as HTML, sometimes with the
markup itself entity-encoded (``&lt;b&gt;``), so entities are decoded before
tags are stripped.
"""
import html
import re
from typing import Optional

_BREAK_TAGS = re.compile(r"<\s*(br|/p|/li|/div|/h[1-6])\s*/?\s*>", re.I)
_LIST_ITEM = re.compile(r"<\s*li[^>]*>", re.I)
_TAGS = re.compile(r"<[^>]+>")
_SPACES = re.compile(r"[ \t\f\v]+")
_BLANK_LINES = re.compile(r"\n\s*\n+")


def clean_html_text(value: Optional[str]) -> str:
    """Return plain text for an HTML fragment (None becomes "")."""
    if not value:
        return ""
    text = html.unescape(value)
    text = _BREAK_TAGS.sub("\n", text)
    text = _LIST_ITEM.sub("\n• ", text)
    text = _TAGS.sub("", text)
    # unescape again: double-encoded entities survive the first pass
    text = html.unescape(text).replace("\xa0", " ")
    text = _SPACES.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()


def clean_optional(value: Optional[str]) -> Optional[str]:
    """Like clean_html_text but keeps None/empty results as None."""
    cleaned = clean_html_text(value)
    return cleaned or None
