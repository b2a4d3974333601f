"""Shared dependencies for web routes."""

from __future__ import annotations

from typing import Any

from fastapi import Request

from showmore.core.config import load_config
from showmore.core.models import AppConfig, MoreOptions
from showmore.widget.controller import ToggleController

# Callables cannot travel over JSON; the server installs its own handler
_CALLBACK_KEYS = {"onChange", "on_change"}


def get_config(request: Request) -> AppConfig:
    cfg = getattr(request.app.state, "config", None)
    return cfg if cfg is not None else load_config()


def get_controller(request: Request) -> ToggleController:
    return request.app.state.controller


def clean_options(options: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in options.items() if k not in _CALLBACK_KEYS}


def options_payload(options: MoreOptions) -> dict[str, Any]:
    data = options.model_dump(mode="json", by_alias=True)
    data["ignoreTags"] = sorted(options.ignore_tags)
    return data
