"""Unit tests for RedisCacheService and RedisCachePartition (Redis client mocked)."""

import json
from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis

from pathconfig.core.config import Settings
from pathconfig.core.session_context import set_session_id
from pathconfig.domain.enums import Scope
from pathconfig.infrastructure.cache import (
    CacheGateway,
    RedisCachePartition,
    RedisCacheService,
)
from pathconfig.routing.dispatcher import Config


def _settings() -> Settings:
    return Settings(cache_namespace="ns", cache_ttl_seconds=120, redis_enabled=True)


def _service(client: AsyncMock) -> RedisCacheService:
    return RedisCacheService(redis_client=client, settings=_settings())


@pytest.mark.asyncio
async def test_get_deserializes_json() -> None:
    client = AsyncMock()
    client.get.return_value = json.dumps({"a": 1})
    assert await _service(client).get("k") == {"a": 1}


@pytest.mark.asyncio
async def test_get_miss_returns_none() -> None:
    client = AsyncMock()
    client.get.return_value = None
    assert await _service(client).get("k") is None


@pytest.mark.asyncio
async def test_get_degrades_to_miss_on_connection_error() -> None:
    client = AsyncMock()
    client.get.side_effect = redis.ConnectionError("down")
    assert await _service(client).get("k") is None


@pytest.mark.asyncio
async def test_set_stores_plain_json_values() -> None:
    client = AsyncMock()
    value = {"a": [1, 2.5, "x", None, True]}
    assert await _service(client).set("k", value, ttl=30) is True
    client.setex.assert_awaited_once_with("k", 30, json.dumps(value))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "value",
    [
        {"amount": Decimal("1.5")},
        {"at": datetime(2024, 1, 2, tzinfo=UTC)},
        {"tags": {"a"}},
        (1, 2),
        {1: "int key"},
        Scope.ORG,
    ],
)
async def test_set_skips_values_that_change_type_through_json(value) -> None:
    client = AsyncMock()
    assert await _service(client).set("k", value, ttl=30) is False
    client.setex.assert_not_called()


@pytest.mark.asyncio
async def test_unavailable_service_is_a_no_op() -> None:
    service = RedisCacheService(settings=_settings())
    assert service.is_available() is False
    assert await service.get("k") is None
    assert await service.set("k", 1, ttl=10) is False
    assert await service.delete_pattern("ns:*") == 0


@pytest.mark.asyncio
async def test_org_partition_prefixes_keys_and_uses_ttl() -> None:
    client = AsyncMock()
    partition = RedisCachePartition(_service(client))
    await partition.put("handler:0", "v")
    client.setex.assert_awaited_once_with("ns:org:handler:0", 120, '"v"')


@pytest.mark.asyncio
async def test_session_partition_prefix_follows_session_context() -> None:
    partition = RedisCachePartition(_service(AsyncMock()), session_scoped=True)
    set_session_id("abc")
    assert partition.prefix() == "ns:session:abc:"
    set_session_id(None)
    assert partition.prefix() == "ns:session:anonymous:"


@pytest.mark.asyncio
async def test_reload_unlinks_partition_keys() -> None:
    keys = ["ns:org:handler:0", "ns:org:handler:1"]

    async def scan_iter(match: str):
        assert match == "ns:org:*"
        for key in keys:
            yield key

    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[2])
    pipeline_cm = MagicMock()
    pipeline_cm.__aenter__ = AsyncMock(return_value=pipe)
    pipeline_cm.__aexit__ = AsyncMock(return_value=False)

    client = MagicMock()
    client.scan_iter = scan_iter
    client.pipeline.return_value = pipeline_cm

    partition = RedisCachePartition(_service(client))
    await partition.reload()

    pipe.unlink.assert_called_once_with(*keys)
    client.pipeline.assert_called_once_with(transaction=False)


@pytest.mark.asyncio
async def test_set_skips_unserializable_values() -> None:
    client = AsyncMock()
    assert await _service(client).set("k", object(), ttl=30) is False
    client.setex.assert_not_called()


class _DictRedis:
    """Minimal in-memory stand-in for the redis.asyncio client (get/setex only)."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> None:
        self.store[key] = value


def _redis_config(client: _DictRedis) -> Config:
    service = _service(client)
    return Config(
        CacheGateway(
            RedisCachePartition(service),
            RedisCachePartition(service, session_scoped=True),
        )
    )


@pytest.mark.asyncio
async def test_repeated_reads_return_equal_values_through_redis() -> None:
    """Values that JSON would alter are recomputed rather than served changed."""
    client = _DictRedis()
    config = _redis_config(client)
    calls: list[int] = []

    def rich() -> dict:
        calls.append(1)
        return {"at": datetime(2024, 1, 2, tzinfo=UTC), "tags": {"a"}}

    config.register_read("/Rich", rich)

    first = await config.read("/Rich")
    second = await config.read("/Rich")

    assert first == second == {"at": datetime(2024, 1, 2, tzinfo=UTC), "tags": {"a"}}
    assert len(calls) == 2
    assert client.store == {}


@pytest.mark.asyncio
async def test_plain_json_values_are_served_from_redis() -> None:
    client = _DictRedis()
    config = _redis_config(client)
    calls: list[int] = []

    def plain() -> dict:
        calls.append(1)
        return {"limit": 5, "names": ["a", "b"]}

    config.register_read("/Plain", plain)

    assert await config.read("/Plain") == {"limit": 5, "names": ["a", "b"]}
    assert await config.read("/Plain") == {"limit": 5, "names": ["a", "b"]}
    assert len(calls) == 1
    assert list(client.store) == ["ns:org:handler:0"]
