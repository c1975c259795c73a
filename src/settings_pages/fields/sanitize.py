"""Sanitizers for user-submitted field values."""

import re
import unicodedata
from typing import Any

import bleach

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_OCTET_RE = re.compile(r"%[a-fA-F0-9]{2}")
_INLINE_SPACE_RE = re.compile(r"[ \t\f\v]+")
_ALL_SPACE_RE = re.compile(r"\s+")
_LEADING_INT_RE = re.compile(r"^\s*[+-]?\d+")


def to_text(value: Any) -> str:
    """Convert a submitted value to the string text fields work on.

    ``None``, ``False`` and containers become ``""``; ``True`` becomes ``"1"``.
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, (list, tuple, dict, set)):
        return ""
    return str(value)


def _strip_markup_once(text: str) -> str:
    text = "".join(
        ch for ch in text
        if ch in "\n\t" or unicodedata.category(ch) != "Cc"
    )
    # Removing one octet can reveal another ("%%2020")
    while _OCTET_RE.search(text):
        text = _OCTET_RE.sub("", text)

    # bleach keeps the text of stripped elements, so drop script/style bodies first
    text = _SCRIPT_STYLE_RE.sub("", text)
    return bleach.clean(text, tags=set(), attributes={}, strip=True, strip_comments=True)


def _strip_markup(text: str) -> str:
    """Remove control characters, percent octets and tags; escape stray ``<``.

    Passes repeat until the text is stable, so a removal that joins two
    fragments into new markup is cleaned as well.
    """
    previous = None
    while text != previous:
        previous = text
        text = _strip_markup_once(text)
    return text


def sanitize_text(value: Any) -> str:
    """Clean a single-line string.

    Strips markup, collapses every whitespace run (line breaks included)
    into one space and trims the result.

    Examples:
        "  <b>Hello</b>\\n world " -> "Hello world"
        "a < b" -> "a &lt; b"

    Args:
        value: Raw submitted value.

    Returns:
        Plain string safe to store and render.
    """
    text = _strip_markup(to_text(value).replace("\r", "\n"))
    return _ALL_SPACE_RE.sub(" ", text).strip()


def sanitize_textarea(value: Any) -> str:
    """Clean a multi-line string, keeping its line breaks.

    Args:
        value: Raw submitted value.

    Returns:
        Plain string with ``\\n`` line endings.
    """
    text = to_text(value).replace("\r\n", "\n").replace("\r", "\n")
    text = _strip_markup(text)
    lines = [_INLINE_SPACE_RE.sub(" ", line).rstrip() for line in text.split("\n")]
    return "\n".join(lines).strip()


def absint(value: Any) -> int:
    """Convert a value to a non-negative integer.

    Strings contribute their leading digits ("12px" -> 12); anything that
    cannot be read as a number becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return abs(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        return abs(int(value))
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        return abs(int(match.group(0))) if match else 0
    return 0


__all__ = ["absint", "sanitize_text", "sanitize_textarea", "to_text"]
