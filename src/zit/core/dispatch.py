"""Parse attribute names such as ``getDatabaseConnection`` into verb and key."""

from __future__ import annotations

import re
from dataclasses import dataclass

_TOKEN_PATTERN = re.compile(r"_?([A-Z][a-z0-9]*|[a-z0-9]+)")

# Leading token (lowercased) -> container method name.
VERBS: dict[str, str] = {
    "get": "get",
    "fresh": "fresh",
    "new": "fresh",
    "has": "has",
    "delete": "delete",
    "set": "register",
    "register": "register",
}


@dataclass(frozen=True, slots=True)
class DispatchCall:
    """A parsed attribute name: the operation to run and the dependency key."""

    verb: str | None
    key: str


def tokenize(name: str) -> list[str]:
    """Split a camelCase or snake_case name into its word tokens."""
    return _TOKEN_PATTERN.findall(name)


def parse_call_name(name: str) -> DispatchCall:
    """
    Translate a dynamically requested attribute into ``(verb, key)``.

    The first token is the verb; the remaining tokens are lowercased and joined
    with underscores to form the key, so ``setParamStore`` registers
    ``param_store``. ``verb`` is ``None`` (with an empty key) when the first
    token names no operation.
    """
    tokens = tokenize(name)
    if not tokens:
        return DispatchCall(verb=None, key="")

    verb = VERBS.get(tokens[0].lower())
    if verb is None:
        return DispatchCall(verb=None, key="")
    return DispatchCall(
        verb=verb, key="_".join(token.lower() for token in tokens[1:])
    )


__all__ = ["VERBS", "DispatchCall", "parse_call_name", "tokenize"]
