"""Zit: a small dependency injection container."""

from .core import (
    AppSettings,
    Container,
    ContainerError,
    InvalidDispatchError,
    LoggingSettings,
    NotFoundError,
    build_container,
    configure_logging,
    load_app_settings,
)

__version__ = "0.1.0"

__all__ = [
    "AppSettings",
    "Container",
    "ContainerError",
    "InvalidDispatchError",
    "LoggingSettings",
    "NotFoundError",
    "build_container",
    "configure_logging",
    "load_app_settings",
]
