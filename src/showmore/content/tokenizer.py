"""Split markup into tag and text tokens."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

# A tag needs a name (or ! / ? for declarations) right after the bracket,
# so "1 < 2 > 0" stays text.
_TAG_RE = re.compile(r"<(?:/?[A-Za-z][^>]*|![^>]*|\?[^>]*)>")
_NAME_RE = re.compile(r"</?\s*([A-Za-z][A-Za-z0-9:_-]*)")


class TokenKind(str, Enum):
    TEXT = "text"
    OPEN = "open"
    CLOSE = "close"
    SELF = "self"


@dataclass
class Token:
    kind: TokenKind
    raw: str
    name: str = ""


def _classify(raw: str, ignore_tags: frozenset[str]) -> Token:
    match = _NAME_RE.match(raw)
    name = match.group(1).lower() if match else ""
    if not name or raw.startswith(("<!", "<?")):
        return Token(TokenKind.SELF, raw, name)
    if name in ignore_tags:
        return Token(TokenKind.SELF, raw, name)
    if raw.startswith("</"):
        return Token(TokenKind.CLOSE, raw, name)
    if raw.endswith("/>"):
        return Token(TokenKind.SELF, raw, name)
    return Token(TokenKind.OPEN, raw, name)


def tokenize(content: str, ignore_tags: Iterable[str] = ()) -> list[Token]:
    """Return the ordered tag/text tokens of ``content``.

    Tags named in ``ignore_tags`` (case-insensitive) are treated as
    self-terminating whatever their form, closers included.
    """
    ignored = frozenset(t.lower() for t in ignore_tags)
    tokens: list[Token] = []
    last = 0
    for match in _TAG_RE.finditer(content):
        if match.start() > last:
            tokens.append(Token(TokenKind.TEXT, content[last : match.start()]))
        tokens.append(_classify(match.group(0), ignored))
        last = match.end()
    if last < len(content):
        tokens.append(Token(TokenKind.TEXT, content[last:]))
    return tokens


def text_length(tokens: Iterable[Token]) -> int:
    """Number of text characters across ``tokens``; tags count for nothing."""
    return sum(len(t.raw) for t in tokens if t.kind is TokenKind.TEXT)
