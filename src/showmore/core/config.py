"""Configuration loader: YAML files + environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from showmore.core.models import AppConfig, MoreOptions, RenderConfig

_TRUE_VALUES = {"1", "true", "yes", "on"}

# Environment variable -> options key
_ENV_OPTIONS = {
    "SHOWMORE_LENGTH": ("length", int),
    "SHOWMORE_LEEWAY": ("leeway", int),
    "SHOWMORE_WORD_BREAK": ("word_break", None),
    "SHOWMORE_TOGGLE": ("toggle", None),
    "SHOWMORE_ELLIPSIS_TEXT": ("ellipsis_text", str),
    "SHOWMORE_MORE_TEXT": ("more_text", str),
    "SHOWMORE_LESS_TEXT": ("less_text", str),
}


def _find_project_root() -> Path:
    """Walk up from cwd to find a directory containing pyproject.toml."""
    cwd = Path.cwd()
    for p in [cwd, *cwd.parents]:
        if (p / "pyproject.toml").exists():
            return p
    return cwd


def _env_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load configuration from YAML + environment variables.

    Priority: env vars > .env file > YAML defaults.
    """
    root = _find_project_root()
    load_dotenv(root / ".env")

    yaml_path = Path(config_path) if config_path else root / "config" / "default.yaml"
    yaml_data: dict = {}
    if yaml_path.exists():
        with open(yaml_path) as f:
            yaml_data = yaml.safe_load(f) or {}

    # Widget defaults with env overrides
    more_data = dict(yaml_data.get("more", {}) or {})
    for var, (key, cast) in _ENV_OPTIONS.items():
        raw = os.getenv(var)
        if raw is None:
            continue
        more_data[key] = _env_bool(raw) if cast is None else cast(raw)
    more = MoreOptions().merge(more_data)

    render_data = yaml_data.get("render", {}) or {}
    sanitize = os.getenv("SHOWMORE_SANITIZE")
    render = RenderConfig(
        sanitize=_env_bool(sanitize) if sanitize is not None else bool(render_data.get("sanitize", True)),
        markdown=bool(render_data.get("markdown", False)),
    )

    return AppConfig(more=more, render=render)


def load_defaults(config_path: Optional[str] = None) -> MoreOptions:
    """Return the process-wide widget defaults."""
    return load_config(config_path).more
