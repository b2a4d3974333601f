"""Text helpers for the truncator."""

from __future__ import annotations

import re

_ENTITY_RE = re.compile(r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")
_NON_WORD_RE = re.compile(r"\W")


def entity_safe_cut(text: str, cut: int) -> int:
    """Move ``cut`` back to the start of a character entity it falls inside."""
    for match in _ENTITY_RE.finditer(text):
        if match.start() < cut < match.end():
            return match.start()
        if match.start() >= cut:
            break
    return cut


def last_boundary(text: str, cut: int) -> int:
    """Index of the last non-word character in ``text[:cut + 1]``, or -1."""
    window = text[: cut + 1]
    for index in range(len(window) - 1, -1, -1):
        if _NON_WORD_RE.match(window[index]):
            return index
    return -1


def ends_with_boundary(text: str) -> bool:
    """True when ``text`` ends with a non-word character."""
    return bool(text) and bool(_NON_WORD_RE.match(text[-1]))
