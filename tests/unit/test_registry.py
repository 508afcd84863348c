"""Tests for HandlerRegistry (ordering, idempotent registration, handler cache wiring)."""

import pytest

from pathconfig.domain.enums import Scope
from pathconfig.domain.exceptions import ValidationException
from pathconfig.infrastructure.cache import CacheGateway
from pathconfig.routing.registry import HandlerRegistry


def _read_a() -> str:
    return "a"


def _read_b() -> str:
    return "b"


def test_register_appends_in_order_with_increasing_ids() -> None:
    registry = HandlerRegistry()
    first = registry.register("/a", on_read=_read_a)
    second = registry.register("/b", on_read=_read_b)
    assert registry.list() == ["/a", "/b"]
    assert second.id > first.id
    assert len(registry) == 2


def test_reregistration_updates_in_place() -> None:
    """Same template twice: same handler object, same id and position, new callbacks/flags."""
    registry = HandlerRegistry(CacheGateway.in_memory())
    original = registry.register("/a", on_read=_read_a)
    registry.register("/b", on_read=_read_b)

    updated = registry.register(
        "/a", cache_enabled=False, scope=Scope.SESSION, on_read=_read_b, on_write=_read_a
    )

    assert updated is original
    assert updated.id == 0
    assert updated.on_read is _read_b
    assert updated.on_write is _read_a
    assert updated.scope is Scope.SESSION
    assert updated.cache_enabled is False
    assert registry.list() == ["/a", "/b"]


def test_reregistration_count_does_not_change_length() -> None:
    registry = HandlerRegistry()
    for _ in range(5):
        registry.register("/same", on_read=_read_a)
    assert registry.list() == ["/same"]


def test_ids_are_never_reused() -> None:
    registry = HandlerRegistry()
    ids = [registry.register(f"/p{i}").id for i in range(3)]
    registry.register("/p1")
    assert ids == [0, 1, 2]
    assert registry.register("/p3").id == 3


def test_find_by_exact_template() -> None:
    registry = HandlerRegistry()
    handler = registry.register("/System/${name}")
    assert registry.find("/System/${name}") is handler
    assert registry.find("/System/a") is None


def test_empty_template_rejected() -> None:
    with pytest.raises(ValidationException) as exc_info:
        HandlerRegistry().register("")
    assert exc_info.value.details == {"field": "template"}


def test_scope_string_parsed() -> None:
    registry = HandlerRegistry()
    assert registry.register("/s", scope="session").scope is Scope.SESSION
    assert registry.register("/o", scope="Org").scope is Scope.ORG
    assert registry.register("/x", scope="anything").scope is Scope.ORG


def test_handler_gets_gateway_only_when_caching_enabled() -> None:
    gateway = CacheGateway.in_memory()
    registry = HandlerRegistry(gateway)
    cached = registry.register("/cached")
    uncached = registry.register("/uncached", cache_enabled=False)
    assert cached.cache is gateway
    assert uncached.cache is None

    registry.register("/cached", cache_enabled=False)
    assert cached.cache is None


def test_registry_without_gateway_never_caches() -> None:
    handler = HandlerRegistry().register("/a")
    assert handler.cache_enabled is True
    assert handler.cache is None
