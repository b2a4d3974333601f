"""Pydantic models for the show-more widget."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

# Line break, horizontal rule, image
DEFAULT_IGNORE_TAGS: frozenset[str] = frozenset({"br", "hr", "img"})

ChangeHandler = Callable[[bool], None]


class ViewState(str, Enum):
    NO_CONTROL = "no_control"
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


class CommandName(str, Enum):
    ATTACH = "attach"
    CHANGE = "change"
    OPTION = "option"
    TOGGLE = "toggle"
    DESTROY = "destroy"
    SETTINGS = "settings"


# --- Options ---

class MoreOptions(BaseModel):
    """Settings for one widget instance.

    Keys are accepted both in snake_case and in the camelCase form used by the
    host markup (``wordBreak``, ``ellipsisText`` ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    length: int = 100
    leeway: int = 5
    word_break: bool = False
    ignore_tags: frozenset[str] = DEFAULT_IGNORE_TAGS
    toggle: bool = True
    ellipsis_text: str = "..."
    more_text: str = "Show more"
    less_text: str = "Show less"
    on_change: Optional[ChangeHandler] = Field(default=None, exclude=True)

    @field_validator("ignore_tags", mode="before")
    @classmethod
    def _normalise_tags(cls, value: Any) -> frozenset[str]:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = value.replace(",", " ").split()
        return frozenset(str(tag).strip().lower() for tag in value if str(tag).strip())

    @classmethod
    def field_for(cls, key: str) -> Optional[str]:
        """Resolve a camelCase or snake_case key to the field name."""
        return _KEY_TO_FIELD.get(key)

    def merge(self, overrides: Optional[Mapping[str, Any]] = None) -> MoreOptions:
        """Return a copy with ``overrides`` applied key by key."""
        data = {name: getattr(self, name) for name in type(self).model_fields}
        for key, value in (overrides or {}).items():
            name = self.field_for(key)
            if name is None:
                logger.warning("Ignoring unknown option %r", key)
                continue
            data[name] = value
        return type(self).model_validate(data)

    def get(self, key: str) -> Any:
        name = self.field_for(key)
        if name is None:
            raise KeyError(key)
        return getattr(self, name)


_KEY_TO_FIELD: dict[str, str] = {}
for _name, _field in MoreOptions.model_fields.items():
    _KEY_TO_FIELD[_name] = _name
    if _field.alias:
        _KEY_TO_FIELD[_field.alias] = _name


# --- Truncation ---

class TruncationResult(BaseModel):
    visible_prefix: str = ""
    ellipsis: str = ""
    hidden_remainder: str = ""
    truncated: bool = False


# --- Instance ---

class Instance(BaseModel):
    """Runtime state for one managed element."""

    handle: str
    original_content: str
    options: MoreOptions = Field(default_factory=MoreOptions)
    result: TruncationResult = Field(default_factory=TruncationResult)
    expanded: bool = False
    control_removed: bool = False

    @property
    def truncated(self) -> bool:
        return self.result.truncated

    @property
    def state(self) -> ViewState:
        if not self.truncated:
            return ViewState.NO_CONTROL
        return ViewState.EXPANDED if self.expanded else ViewState.COLLAPSED


class RenderInstruction(BaseModel):
    """What the host should display for an instance."""

    handle: str
    state: ViewState
    content: str = ""  # verbatim content, NoControl only
    visible_prefix: str = ""
    ellipsis: str = ""
    hidden_remainder: str = ""
    remainder_hidden: bool = True
    ellipsis_hidden: bool = False
    control_label: Optional[str] = None

    @computed_field
    @property
    def has_control(self) -> bool:
        return self.control_label is not None


# --- Web payloads ---

class TruncateRequest(BaseModel):
    content: str
    options: dict[str, Any] = Field(default_factory=dict)


class AttachRequest(BaseModel):
    content: str
    handle: Optional[str] = None
    options: dict[str, Any] = Field(default_factory=dict)


class CommandRequest(BaseModel):
    args: list[Any] = Field(default_factory=list)


# --- Config models ---

class RenderConfig(BaseModel):
    sanitize: bool = True
    markdown: bool = False


class AppConfig(BaseModel):
    more: MoreOptions = Field(default_factory=MoreOptions)
    render: RenderConfig = Field(default_factory=RenderConfig)
