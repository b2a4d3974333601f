"""Markup-aware truncation.

The content is split into a visible prefix and a hidden remainder. Tags still
open at the split point are closed at the end of the prefix and re-opened at
the start of the remainder, so each fragment is well-formed on its own.
"""

from __future__ import annotations

import logging
from typing import Optional

from showmore.content.tokenizer import Token, TokenKind, text_length, tokenize
from showmore.core.models import MoreOptions, TruncationResult
from showmore.utils.text import ends_with_boundary, entity_safe_cut, last_boundary

logger = logging.getLogger(__name__)


def _closers(open_tags: list[Token]) -> str:
    """Closing markup for ``open_tags``, innermost first."""
    return "".join(f"</{tag.name}>" for tag in reversed(open_tags))


def _walk(tokens: list[Token], stack: list[Token]) -> None:
    """Update ``stack`` with the tags opened and closed by ``tokens``."""
    for token in tokens:
        if token.kind is TokenKind.OPEN:
            stack.append(token)
        elif token.kind is TokenKind.CLOSE and stack:
            stack.pop()


def truncate(content: str, options: Optional[MoreOptions] = None) -> TruncationResult:
    """Truncate ``content`` to ``options.length`` text characters.

    Returns a result with ``truncated=False`` (and the content verbatim in
    ``visible_prefix``) when the text fits within ``length + leeway``.
    """
    opts = options or MoreOptions()
    unchanged = TruncationResult(visible_prefix=content)
    if not content:
        return unchanged

    tokens = tokenize(content, opts.ignore_tags)
    total = text_length(tokens)
    if total == 0:
        return unchanged
    # A non-positive length always truncates, leeway notwithstanding
    if opts.length > 0 and total <= opts.length + opts.leeway:
        return unchanged

    length = max(opts.length, 0)
    stack: list[Token] = []
    pos = 0
    previous_text = ""
    split: Optional[int] = None
    for index, token in enumerate(tokens):
        if token.kind is TokenKind.TEXT:
            if pos + len(token.raw) > length:
                split = index
                break
            pos += len(token.raw)
            previous_text = token.raw
        else:
            _walk([token], stack)

    if split is None:
        return unchanged

    text = tokens[split].raw
    cut = length - pos
    if opts.word_break:
        boundary = last_boundary(text, cut)
        if boundary >= 0:
            cut = boundary
        elif cut > 0 and ends_with_boundary(previous_text):
            # The split token starts a word; break before it
            cut = 0
    cut = entity_safe_cut(text, cut)

    open_tags = list(stack)
    head = "".join(t.raw for t in tokens[:split])
    visible = head + text[:cut] + _closers(open_tags)

    tail = tokens[split + 1 :]
    still_open = list(open_tags)
    _walk(tail, still_open)
    hidden = (
        "".join(t.raw for t in open_tags)
        + text[cut:]
        + "".join(t.raw for t in tail)
        + _closers(still_open)
    )

    logger.debug(
        "Truncated %d text characters at %d (%d tags open)",
        total, pos + cut, len(open_tags),
    )
    return TruncationResult(
        visible_prefix=visible,
        ellipsis=opts.ellipsis_text,
        hidden_remainder=hidden,
        truncated=True,
    )
