"""Settings for containers built from configuration, and their loader."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import BaseModel, Field

ENV_PREFIX = "ZIT_"
_NESTING = "__"


class LoggingSettings(BaseModel):
    """Logging preferences for the application and the container."""

    level: str = Field(default="INFO", description="Root logging level")
    structured: bool = Field(
        default=False, description="Use the brace-style structured line format"
    )
    container_level: str | None = Field(
        default=None,
        description="Level for the 'zit' loggers; defaults to the root level",
    )


class AppSettings(BaseModel):
    """Aggregated application configuration."""

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    params: dict[str, Any] = Field(
        default_factory=dict,
        description="Parameters registered on containers built from settings",
    )


def _coerce(raw: str | None) -> Any:
    """Map empty strings to ``None`` and boolean words to booleans."""
    if raw is None or raw == "":
        return None
    return {"true": True, "false": False}.get(raw.lower(), raw)


def _prefixed(items: Iterable[tuple[str | None, str | None]]) -> dict[str, Any]:
    return {
        key: value for key, value in items if key and key.startswith(ENV_PREFIX)
    }


def _read_sources(
    env_file: Path | str | None, include_environment: bool
) -> dict[str, Any]:
    """Return prefixed variables, process environment taking precedence."""
    merged: dict[str, Any] = {}
    if env_file and Path(env_file).is_file():
        merged.update(_prefixed(dotenv_values(env_file).items()))
    if include_environment:
        merged.update(_prefixed(os.environ.items()))
    return merged


def _as_tree(variables: Mapping[str, Any]) -> dict[str, Any]:
    """Expand ``ZIT_A__B=value`` variables into ``{"a": {"b": value}}``."""
    tree: dict[str, Any] = {}
    for name, raw in variables.items():
        path = [
            segment.lower()
            for segment in name.removeprefix(ENV_PREFIX).split(_NESTING)
            if segment
        ]
        if not path:
            continue
        node = tree
        for segment in path[:-1]:
            node = node.setdefault(segment, {})
        node[path[-1]] = _coerce(raw)
    return tree


@lru_cache(maxsize=8)
def _settings_from_sources(
    env_file: Path | str | None, include_environment: bool
) -> AppSettings:
    return AppSettings.model_validate(
        _as_tree(_read_sources(env_file, include_environment))
    )


def load_app_settings(
    env_file: Path | str | None = None,
    *,
    include_environment: bool = True,
    **overrides: Any,
) -> AppSettings:
    """
    Load settings from an optional env file and the environment.

    Reads from the sources are memoized per ``(env_file, include_environment)``;
    call :func:`clear_settings_cache` after changing them. Keyword overrides
    replace whole top-level sections (for example ``params={...}``) and are
    applied on every call.
    """
    settings = _settings_from_sources(env_file, include_environment)
    if not overrides:
        return settings
    return AppSettings.model_validate({**settings.model_dump(), **overrides})


def clear_settings_cache() -> None:
    """Forget memoized reads so the next load sees current sources."""
    _settings_from_sources.cache_clear()


__all__ = [
    "AppSettings",
    "ENV_PREFIX",
    "LoggingSettings",
    "clear_settings_cache",
    "load_app_settings",
]
