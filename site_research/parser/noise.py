"""Heuristics telling human-readable copy apart from code, CSS and markup debris.

The regex set is a starting heuristic: false positives and negatives are
expected. The extractor takes the predicate as a parameter so callers can
swap in their own.
"""
from __future__ import annotations

import re
from typing import Callable, Final

NoisePredicate = Callable[[str], bool]

#: substrings that practically never occur in marketing copy
_CODE_MARKERS: Final[tuple[str, ...]] = (
    "function(",
    "var ",
    "window.",
    "document.",
    "@media",
    "@keyframes",
    "@font-face",
    "animation-timing-function",
    "transform:",
    "translate3d",
    "-webkit-",
    "unicode-range:",
    "font-stretch:",
    "font-display:",
    "data:image/",
    "rgba(",
)

_UNICODE_ESCAPE_RE: Final = re.compile(r"U\+[0-9A-F]{4}|\\u[0-9a-f]{4}", re.IGNORECASE)
_CSS_COLOR_RE: Final = re.compile(r"rgba?\([0-9,.\s]+\)", re.IGNORECASE)
_SYMBOL_RUN_RE: Final = re.compile(r"[{}\[\]()<>;:=|\\/*&^%$#@!~`+_-]{6,}")
_SYMBOLS_ONLY_RE: Final = re.compile(r"^[0-9\s.\-:/\\+={}\[\](),;\"'`~!@#$%^&*_|]+$")
_WS_RE: Final = re.compile(r"\s+")

MIN_PARAGRAPH_LENGTH: Final[int] = 20


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text or "").strip()


def is_noise(text: str) -> bool:
    """Return True if *text* looks like code, CSS or symbol soup."""
    if not text:
        return True
    if any(marker in text for marker in _CODE_MARKERS):
        return True
    if _UNICODE_ESCAPE_RE.search(text) or _CSS_COLOR_RE.search(text):
        return True
    if _SYMBOL_RUN_RE.search(text):
        return True
    compact = collapse_whitespace(text)
    if len(compact) > 20 and _SYMBOLS_ONLY_RE.match(compact):
        return True
    # long strings without spaces: minified code, hashes, base64
    if len(compact) > 100 and len(compact.split(" ")) < 10:
        return True
    return False


def clean_text(text: str, predicate: NoisePredicate = is_noise) -> str:
    """Collapse whitespace; return ``""`` when *predicate* flags the text."""
    if not text or predicate(text):
        return ""
    return collapse_whitespace(text)


__all__ = ["NoisePredicate", "is_noise", "clean_text", "collapse_whitespace", "MIN_PARAGRAPH_LENGTH"]
