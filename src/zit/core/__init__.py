"""Core container, configuration, and logging utilities."""

from .bootstrap import build_container
from .config import (
    AppSettings,
    LoggingSettings,
    clear_settings_cache,
    load_app_settings,
)
from .container import Container, ContainerError, InvalidDispatchError, NotFoundError
from .logging import configure_logging
from .signature import NO_ARGUMENTS, key_for_arguments

__all__ = [
    "AppSettings",
    "Container",
    "ContainerError",
    "InvalidDispatchError",
    "LoggingSettings",
    "NO_ARGUMENTS",
    "NotFoundError",
    "build_container",
    "clear_settings_cache",
    "configure_logging",
    "key_for_arguments",
    "load_app_settings",
]
