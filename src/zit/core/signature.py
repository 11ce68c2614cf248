"""Argument signatures used as cache sub-keys."""

from __future__ import annotations

import dataclasses
import hashlib
import json
from collections.abc import Iterable, Mapping
from typing import Any

NO_ARGUMENTS = "_no_arguments"


def _qualified_name(value: Any) -> str:
    value_type = type(value)
    return f"{value_type.__module__}.{value_type.__qualname__}"


def _dump(encoded: Any) -> str:
    return json.dumps(encoded, separators=(",", ":"))


def _sorted_encodings(items: Iterable[Any]) -> list[Any]:
    return sorted(items, key=_dump)


def _slot_names(value: Any) -> list[str]:
    names: list[str] = []
    for klass in type(value).__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(
            name for name in slots if name not in ("__dict__", "__weakref__")
        )
    return names


def _attributes(value: Any) -> dict[str, Any] | None:
    """Return the attribute state of a plain object, or ``None`` if it has none."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: getattr(value, field.name)
            for field in dataclasses.fields(value)
        }
    if callable(value):
        return None

    slot_names = _slot_names(value)
    if not slot_names and not hasattr(value, "__dict__"):
        return None

    state: dict[str, Any] = dict(getattr(value, "__dict__", {}))
    for name in slot_names:
        if hasattr(value, name):
            state[name] = getattr(value, name)
    return state


def _encode(value: Any, active: set[int]) -> Any:
    """
    Encode a value into a JSON tree that preserves its type.

    Plain scalars stay as they are. Everything else becomes a single-key
    object naming its kind and qualified type, so two values of different
    types never share an encoding.
    """
    if value is None or type(value) in (bool, int, float, str):
        return value

    marker = id(value)
    if marker in active:
        raise ValueError("Circular reference detected in arguments")
    active.add(marker)
    try:
        return _encode_compound(value, active)
    finally:
        active.discard(marker)


def _encode_compound(value: Any, active: set[int]) -> Any:
    name = _qualified_name(value)
    if isinstance(value, (int, float, str)):
        return {"scalar": [name, repr(value)]}
    if isinstance(value, (list, tuple)):
        tag = "tuple" if isinstance(value, tuple) else "list"
        return {tag: [name, [_encode(item, active) for item in value]]}
    if isinstance(value, (set, frozenset)):
        items = _sorted_encodings(_encode(item, active) for item in value)
        return {"set": [name, items]}
    if isinstance(value, Mapping):
        pairs = _sorted_encodings(
            [_encode(key, active), _encode(item, active)]
            for key, item in value.items()
        )
        return {"dict": [name, pairs]}
    if isinstance(value, (bytes, bytearray)):
        return {"bytes": [name, bytes(value).hex()]}

    state = _attributes(value)
    if state is not None:
        return {"object": [name, _encode(state, active)]}
    return {"repr": [name, repr(value)]}


def key_for_arguments(
    args: tuple[Any, ...] = (), kwargs: Mapping[str, Any] | None = None
) -> str:
    """
    Create a cache key from constructor call arguments.

    Allows caching of values per argument list so that calls with different
    arguments build different values while repeated calls with structurally
    equal arguments share one. Containers keep their type, so a list, a tuple
    and a set holding the same items produce different keys, as do ``1`` and
    ``"1"`` used as mapping keys.

    Args:
        args: Positional arguments passed after the container.
        kwargs: Keyword arguments passed to the constructor.

    Returns:
        ``NO_ARGUMENTS`` when no extras were given, otherwise an MD5 hex digest
        of the encoded arguments.

    Raises:
        ValueError: If an argument contains itself.
    """
    if not args and not kwargs:
        return NO_ARGUMENTS

    active: set[int] = set()
    encoded = [_encode(tuple(args), active), _encode(dict(kwargs or {}), active)]
    return hashlib.md5(_dump(encoded).encode("utf-8")).hexdigest()


__all__ = ["NO_ARGUMENTS", "key_for_arguments"]
