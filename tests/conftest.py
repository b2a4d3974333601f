from __future__ import annotations

import re

import pytest

from showmore.content.tokenizer import TokenKind, tokenize
from showmore.core.models import MoreOptions
from showmore.widget.controller import ToggleController

_TAG_RE = re.compile(r"<[^>]+>")


@pytest.fixture(autouse=True)
def _clear_showmore_env(monkeypatch: pytest.MonkeyPatch):
    for var in (
        "SHOWMORE_LENGTH",
        "SHOWMORE_LEEWAY",
        "SHOWMORE_WORD_BREAK",
        "SHOWMORE_TOGGLE",
        "SHOWMORE_ELLIPSIS_TEXT",
        "SHOWMORE_MORE_TEXT",
        "SHOWMORE_LESS_TEXT",
        "SHOWMORE_SANITIZE",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def controller() -> ToggleController:
    return ToggleController(defaults=MoreOptions())


def _strip_tags(markup: str) -> str:
    return _TAG_RE.sub("", markup)


def _is_balanced(markup: str) -> bool:
    """Every tag opened in ``markup`` is closed, in order, within it."""
    stack: list[str] = []
    for token in tokenize(markup, MoreOptions().ignore_tags):
        if token.kind is TokenKind.OPEN:
            stack.append(token.name)
        elif token.kind is TokenKind.CLOSE:
            if not stack or stack.pop() != token.name:
                return False
    return not stack


@pytest.fixture
def strip_tags():
    return _strip_tags


@pytest.fixture
def is_balanced():
    return _is_balanced
