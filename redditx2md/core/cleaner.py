"""
Content cleaning for Reddit post text.

Reddit's JSON listing returns HTML-escaped text with irregular spacing.
``clean_content`` unescapes a fixed set of entities, compresses runs of blank
lines and trims whitespace around line breaks. Missing or blank input maps to
a fixed fallback string.
"""

from __future__ import annotations

import re
from typing import Any

from .types import NO_CONTENT_FALLBACK


# Order matters: &amp; must run last so "&amp;lt;" decodes to "&lt;", not "<".
# The apostrophe forms also match without the trailing semicolon.
_ENTITY_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"&#39;?"), "'"),
    (re.compile(r"&#x27;?"), "'"),
    (re.compile(r"&apos;?"), "'"),
    (re.compile(r"&quot;"), '"'),
    (re.compile(r"&lt;"), "<"),
    (re.compile(r"&gt;"), ">"),
    (re.compile(r"&amp;"), "&"),
)

_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_TRAILING_BLANKS_RE = re.compile(r"[ \t]+\n")
_LEADING_BLANKS_RE = re.compile(r"\n[ \t]+")


def clean_content(value: Any) -> str:
    """Clean raw post text.

    Args:
        value: Raw text. ``None`` and non-string values are accepted.

    Returns:
        The cleaned text, or NO_CONTENT_FALLBACK when the input is missing
        or blank.
    """
    text = _coerce(value)
    if text is None or not text.strip():
        return NO_CONTENT_FALLBACK

    text = unescape_entities(text.strip())
    text = compress_newlines(text)
    text = normalize_line_boundaries(text)
    return text


def unescape_entities(text: str) -> str:
    for pattern, replacement in _ENTITY_RULES:
        text = pattern.sub(replacement, text)
    return text


def compress_newlines(text: str) -> str:
    """Collapse runs of three or more newlines to exactly two."""
    return _EXCESS_NEWLINES_RE.sub("\n\n", text)


def normalize_line_boundaries(text: str) -> str:
    """Strip spaces/tabs next to newlines, then trim the whole string."""
    text = _TRAILING_BLANKS_RE.sub("\n", text)
    text = _LEADING_BLANKS_RE.sub("\n", text)
    # Removing blanks can join newline runs ("\n \n \n") into 3+ newlines.
    text = compress_newlines(text)
    return text.strip()


def _coerce(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    try:
        return str(value)
    except Exception:  # noqa: BLE001
        return None
