"""Build containers pre-populated from application settings."""

from __future__ import annotations

import logging

from .config import AppSettings, load_app_settings
from .container import Container

LOGGER = logging.getLogger(__name__)


def build_container(settings: AppSettings | None = None) -> Container:
    """Create a container with every configured parameter registered."""
    if settings is None:
        settings = load_app_settings()

    container = Container()
    for name, value in settings.params.items():
        container.register_param(name, value)

    LOGGER.debug("Built container with %d parameter(s)", len(settings.params))
    return container


__all__ = ["build_container"]
