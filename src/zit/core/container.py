"""Dependency container with lazy, argument-aware caching."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from typing import Any, TypeVar

from .dispatch import parse_call_name
from .signature import NO_ARGUMENTS, key_for_arguments

LOGGER = logging.getLogger(__name__)

C = TypeVar("C", bound=Callable[..., Any])
Constructor = Callable[..., Any]


class ContainerError(Exception):
    """Base class for errors raised by the container itself."""


class NotFoundError(ContainerError, KeyError):
    """Raised when resolving a name that has no registered constructor."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Callback for '{name}' does not exist")
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidDispatchError(ContainerError, AttributeError):
    """Raised when a dynamically called attribute does not map to an operation."""

    def __init__(self, attribute: str, reason: str) -> None:
        super().__init__(f"Cannot dispatch '{attribute}': {reason}")
        self.attribute = attribute


def _ensure_callable(constructor: Any) -> None:
    if not callable(constructor):
        msg = f"Constructor must be callable, got {type(constructor).__name__}"
        raise TypeError(msg)


class Container:
    """
    Registry of named, lazily constructed dependencies.

    Constructors receive the container followed by any extra arguments given
    to :meth:`get` or :meth:`fresh`. Results are cached per name and per
    argument signature unless the constructor was marked with
    :meth:`register_factory`.

    Unknown attributes dispatch by name, so ``container.get_database()`` and
    ``container.getDatabase()`` both mean ``container.get("database")`` and
    ``container.new_database()`` means ``container.fresh("database")``.

    The container is not thread safe; share one instance per thread or guard
    calls with an external lock.
    """

    def __init__(self) -> None:
        """Initialise empty registry, factory set and cache."""
        self._registry: dict[str, Constructor] = {}
        # id() -> constructor; holding the reference keeps the id stable.
        self._factories: dict[int, Constructor] = {}
        self._cache: dict[str, dict[str, Any]] = {}

    # Registration ------------------------------------------------------------
    def register_factory(self, constructor: C) -> C:
        """Mark a constructor so its results are never cached; return it."""
        _ensure_callable(constructor)
        self._factories[id(constructor)] = constructor
        LOGGER.debug("Marked %r as a factory", constructor)
        return constructor

    factory = register_factory

    def register(self, name: str, constructor: Constructor) -> None:
        """
        Register a constructor under ``name``, replacing any previous one.

        Values already cached under ``name`` are kept until :meth:`delete`.
        """
        _ensure_callable(constructor)
        key = name.lower()
        self._registry[key] = constructor
        LOGGER.debug("Registered '%s'", key)

    set = register

    def register_param(self, name: str, value: Any) -> None:
        """Register a constant value under ``name``."""

        def constant(*_args: Any, **_kwargs: Any) -> Any:
            return value

        self.register(name, constant)

    set_param = register_param

    # Lookup ------------------------------------------------------------------
    def has(self, name: str) -> bool:
        """Return ``True`` if a constructor is registered under ``name``."""
        return name.lower() in self._registry

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def names(self) -> tuple[str, ...]:
        """Return the registered names in sorted order."""
        return tuple(sorted(self._registry))

    def is_factory(self, name: str) -> bool:
        """Return ``True`` if the constructor registered under ``name`` is a factory."""
        return id(self._constructor_for(name.lower())) in self._factories

    # Resolution --------------------------------------------------------------
    def get(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Return the cached value for ``name`` or construct it.

        A call without arguments falls back to the first value cached for
        ``name`` under any argument signature before constructing anew.

        Raises:
            NotFoundError: If ``name`` is not registered.
        """
        key = name.lower()
        cached = self._cache.get(key)
        if cached:
            signature = key_for_arguments(args, kwargs)
            if signature == NO_ARGUMENTS and signature not in cached:
                signature = next(iter(cached))
            if signature in cached:
                LOGGER.debug("Cache hit for '%s'", key)
                return cached[signature]

        return self.fresh(key, *args, **kwargs)

    def try_get(self, name: str, *args: Any, **kwargs: Any) -> Any | None:
        """Resolve ``name`` if registered; return ``None`` otherwise."""
        try:
            return self.get(name, *args, **kwargs)
        except NotFoundError:
            return None

    def fresh(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """
        Construct a new value for ``name``, bypassing the cache lookup.

        The result is still cached unless the constructor is a factory.

        Raises:
            NotFoundError: If ``name`` is not registered.
        """
        key = name.lower()
        constructor = self._constructor_for(key)
        if id(constructor) in self._factories:
            LOGGER.debug("Constructing '%s' from factory", key)
            return constructor(self, *args, **kwargs)

        signature = key_for_arguments(args, kwargs)
        value = constructor(self, *args, **kwargs)
        self._cache.setdefault(key, {})[signature] = value
        LOGGER.debug("Constructed and cached '%s' (%s)", key, signature)
        return value

    # Invalidation ------------------------------------------------------------
    def delete(self, name: str) -> bool:
        """Drop every cached value for ``name``. Returns ``True`` if any existed."""
        key = name.lower()
        removed = self._cache.pop(key, None)
        if removed is None:
            return False
        LOGGER.debug("Deleted %d cached value(s) for '%s'", len(removed), key)
        return True

    def clear(self) -> int:
        """Drop all cached values and return the number of names cleared."""
        count = len(self._cache)
        self._cache.clear()
        LOGGER.debug("Cleared cached values for %d name(s)", count)
        return count

    # Dynamic dispatch --------------------------------------------------------
    def __getattr__(self, attribute: str) -> Callable[..., Any]:
        if attribute.startswith("_"):
            raise AttributeError(attribute)

        call = parse_call_name(attribute)
        if call.verb is None:
            raise InvalidDispatchError(attribute, "unknown verb")
        return partial(getattr(self, call.verb), call.key)

    def _constructor_for(self, key: str) -> Constructor:
        try:
            return self._registry[key]
        except KeyError:
            raise NotFoundError(key) from None


__all__ = ["Container", "ContainerError", "InvalidDispatchError", "NotFoundError"]
