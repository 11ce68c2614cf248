"""Tests for registration, resolution, caching and invalidation."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from zit.core.container import Container, ContainerError, NotFoundError


class Counter:
    """Constructor stub recording how often it ran and with what."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def __call__(self, container: Container, *args: Any, **kwargs: Any) -> object:
        self.calls.append((container, args, kwargs))
        return object()


@pytest.fixture
def container() -> Container:
    return Container()


def test_register_then_get_returns_constructed_value(container: Container) -> None:
    container.register("x", lambda c: {"built": True})

    assert container.has("x")
    assert container.get("x") == {"built": True}


def test_constructor_receives_container_first(container: Container) -> None:
    counter = Counter()
    container.register("x", counter)

    container.get("x", 1, flag=True)

    assert counter.calls == [(container, (1,), {"flag": True})]


def test_names_are_case_insensitive(container: Container) -> None:
    container.register("Foo", lambda c: "foo value")

    assert container.has("foo")
    assert "FOO" in container
    assert container.get("FOO") == "foo value"
    assert container.names() == ("foo",)


def test_get_caches_singleton(container: Container) -> None:
    counter = Counter()
    container.register("x", counter)

    first = container.get("x")
    second = container.get("x")

    assert first is second
    assert len(counter.calls) == 1


def test_factory_is_never_cached(container: Container) -> None:
    counter = Counter()
    container.register("x", container.register_factory(counter))

    first = container.get("x")
    second = container.get("x")

    assert first is not second
    assert len(counter.calls) == 2
    assert container.is_factory("x")
    assert not container.delete("x")


def test_factory_decorator_returns_constructor_unchanged(container: Container) -> None:
    @container.factory
    def build(c: Container) -> list[int]:
        return []

    container.set("items", build)

    assert container.get("items") is not container.get("items")


def test_factory_membership_follows_constructor_not_name(
    container: Container,
) -> None:
    shared = container.register_factory(Counter())
    container.register("a", shared)
    container.register("b", shared)
    container.register("c", Counter())

    assert container.is_factory("a")
    assert container.is_factory("b")
    assert not container.is_factory("c")


def test_cache_is_keyed_by_arguments(container: Container) -> None:
    counter = Counter()
    container.register("x", counter)

    one = container.get("x", 1)
    two = container.get("x", 2)

    assert one is not two
    assert container.get("x", 1) is one
    assert container.get("x", 2) is two
    assert len(counter.calls) == 2


def test_mapping_arguments_with_mixed_keys_are_cached(
    container: Container,
) -> None:
    container.register("x", lambda c, *args: args)

    built = container.get("x", {1: "a", "b": 2})

    assert built == ({1: "a", "b": 2},)
    assert container.get("x", {"b": 2, 1: "a"}) is built


def test_differently_typed_arguments_get_separate_values(
    container: Container,
) -> None:
    container.register("x", lambda c, *args: args)

    int_keyed = container.get("x", {1: "a"})
    str_keyed = container.get("x", {"1": "a"})
    as_set = container.get("x", {1, 2})
    as_list = container.get("x", [1, 2])

    assert int_keyed == ({1: "a"},)
    assert str_keyed == ({"1": "a"},)
    assert as_set == ({1, 2},)
    assert as_list == ([1, 2],)


def test_keyword_arguments_take_part_in_cache_key(container: Container) -> None:
    counter = Counter()
    container.register("x", counter)

    first = container.get("x", size=1)

    assert container.get("x", size=1) is first
    assert container.get("x", size=2) is not first
    assert len(counter.calls) == 2


def test_no_argument_get_falls_back_to_first_cached_value(
    container: Container,
) -> None:
    """A bare get() reuses a value built with arguments: surprising but kept."""
    counter = Counter()
    container.register("x", counter)

    with_one = container.get("x", 1)
    container.get("x", 2)

    assert container.get("x") is with_one
    assert len(counter.calls) == 2


def test_no_argument_entry_wins_over_fallback(container: Container) -> None:
    container.register("x", lambda c, *args: args)

    container.get("x", 1)
    bare = container.fresh("x")

    assert bare == ()
    assert container.get("x") is bare


def test_fresh_always_constructs_and_updates_cache(container: Container) -> None:
    counter = Counter()
    container.register("x", counter)

    cached = container.get("x")
    rebuilt = container.fresh("x")

    assert rebuilt is not cached
    assert container.get("x") is rebuilt
    assert len(counter.calls) == 2


def test_cached_none_is_a_hit(container: Container) -> None:
    counter = Counter()
    container.register("x", lambda c: counter.calls.append(c))

    assert container.get("x") is None
    assert container.get("x") is None
    assert len(counter.calls) == 1


def test_delete_invalidates_all_signatures(container: Container) -> None:
    counter = Counter()
    container.register("x", counter)
    container.get("x")
    container.get("x", 1)

    assert container.delete("x") is True
    assert container.delete("x") is False
    assert container.has("x")

    container.get("x", 1)
    assert len(counter.calls) == 3


def test_delete_unknown_name_returns_false(container: Container) -> None:
    assert container.delete("nothing") is False


def test_clear_drops_every_cached_value(container: Container) -> None:
    counter = Counter()
    container.register("a", counter)
    container.register("b", counter)
    container.get("a")
    container.get("b")

    assert container.clear() == 2
    container.get("a")
    assert len(counter.calls) == 3


def test_reregistration_keeps_cached_value(container: Container) -> None:
    container.register("x", lambda c: "old")
    container.get("x")

    container.register("x", lambda c: "new")

    assert container.get("x") == "old"
    assert container.fresh("x") == "new"


def test_missing_dependency_raises_not_found(container: Container) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        container.get("missing")
    assert excinfo.value.name == "missing"

    with pytest.raises(KeyError):
        container.fresh("missing")

    with pytest.raises(ContainerError):
        container.is_factory("missing")


def test_try_get_returns_none_for_missing(container: Container) -> None:
    container.register_param("present", 3)

    assert container.try_get("missing") is None
    assert container.try_get("present") == 3


def test_constructor_errors_propagate_without_caching(container: Container) -> None:
    attempts: list[int] = []

    def flaky(c: Container) -> str:
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("boom")
        return "ok"

    container.register("x", flaky)

    with pytest.raises(RuntimeError, match="boom"):
        container.get("x")
    assert container.delete("x") is False
    assert container.get("x") == "ok"


def test_register_param_returns_constant(container: Container) -> None:
    config = {"a": 1}
    container.register_param("config", config)

    assert container.get("config") is config
    assert container.get("config", "ignored") is config


def test_set_param_alias(container: Container) -> None:
    container.set_param("dsn", "sqlite://")

    assert container.get("dsn") == "sqlite://"


def test_register_rejects_non_callable(container: Container) -> None:
    with pytest.raises(TypeError):
        container.register("x", 42)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        container.register_factory("not callable")  # type: ignore[arg-type]


def test_reentrant_construction(container: Container) -> None:
    container.register_param("dsn", "sqlite://memory")
    container.register("db", lambda c: {"dsn": c.get("dsn")})
    container.register("repo", lambda c: {"db": c.get("db")})

    repo = container.get("repo")

    assert repo["db"] is container.get("db")
    assert repo["db"]["dsn"] == "sqlite://memory"


def test_construction_is_logged_at_debug(
    container: Container, caplog: pytest.LogCaptureFixture
) -> None:
    container.register("x", lambda c: 1)

    with caplog.at_level(logging.DEBUG, logger="zit.core.container"):
        container.get("x")
        container.get("x")

    messages = [record.getMessage() for record in caplog.records]
    assert any("Constructed and cached 'x'" in message for message in messages)
    assert any("Cache hit for 'x'" in message for message in messages)
