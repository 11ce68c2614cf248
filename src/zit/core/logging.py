"""Logging setup for applications wiring their objects through a container."""

from __future__ import annotations

import logging.config
from typing import Any

from .config import LoggingSettings

CONTAINER_LOGGER = "zit"

_LINE_FORMATS: dict[bool, dict[str, str]] = {
    False: {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
    True: {"format": "{asctime} {levelname} {name} {message}", "style": "{"},
}


def build_logging_config(settings: LoggingSettings) -> dict[str, Any]:
    """
    Return the ``dictConfig`` mapping for ``settings``.

    The console handler carries no level of its own, so the ``zit`` loggers
    can trace registrations and cache hits at DEBUG while the rest of the
    application stays at the root level.
    """
    root_level = settings.level.upper()
    container_level = (settings.container_level or root_level).upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"line": dict(_LINE_FORMATS[settings.structured])},
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "line"},
        },
        "loggers": {CONTAINER_LOGGER: {"level": container_level}},
        "root": {"handlers": ["console"], "level": root_level},
    }


def configure_logging(settings: LoggingSettings) -> None:
    """Install console logging for the application and the container."""
    logging.config.dictConfig(build_logging_config(settings))


__all__ = ["CONTAINER_LOGGER", "build_logging_config", "configure_logging"]
