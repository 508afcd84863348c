"""Redis-backed cache partitions.

RedisCacheService owns the async Redis connection (connect at startup,
disconnect at shutdown) and exposes JSON get/set and pattern deletion
that degrade to a miss when Redis is unavailable. RedisCachePartition
maps the Org and Session partitions onto key prefixes built by
pathconfig.infrastructure.cache.keys.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import redis.asyncio as redis

from pathconfig.core.config import Settings, get_settings
from pathconfig.core.constants import DEFAULT_SESSION_ID
from pathconfig.core.session_context import get_session_id
from pathconfig.infrastructure.cache.keys import org_prefix, session_prefix

logger = logging.getLogger(__name__)

_JSON_SCALARS = (str, int, float, bool, type(None))


def _json_exact(value: Any) -> bool:
    """True when json.loads(json.dumps(value)) gives back an equal value of the same types.

    Only plain dicts with str keys, lists and exact str/int/float/bool/None
    qualify; tuples, sets, datetimes, Decimals and subclasses (e.g. str enums)
    would come back as a different type.
    """
    if type(value) in _JSON_SCALARS:
        return not (type(value) is float and value != value)
    if type(value) is list:
        return all(_json_exact(v) for v in value)
    if type(value) is dict:
        return all(type(k) is str and _json_exact(v) for k, v in value.items())
    return False


class RedisCacheService:
    """Async Redis connection with JSON values and TTL support.

    Uses pathconfig.core.config for connection settings. Call connect() at
    startup and disconnect() at shutdown.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI; treated as connected.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is None:
            try:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_keepalive=True,
                )
                await self.redis.ping()
                self._connected = True
                logger.info(
                    "Redis cache connected: %s:%s",
                    self.settings.redis_host,
                    self.settings.redis_port,
                )
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.warning(
                    "Redis connection failed: %s. Using in-process cache partitions.",
                    e,
                )
                self._connected = False
                self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable."""
        if not self.is_available() or self.redis is None:
            return None
        try:
            value = await self.redis.get(key)
        except (redis.ConnectionError, redis.TimeoutError):
            logger.warning("Cache get unavailable for key %s (Redis disconnected)", key)
            return None
        except redis.RedisError:
            logger.exception("Cache get error for key %s", key)
            return None
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(value)

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store value (JSON-serialized) with TTL in seconds. Returns True on success.

        Values that would read back as different types (sets, tuples, dates,
        Decimals, records) are not stored, so a hit always equals the miss
        that filled it.
        """
        if not self.is_available() or self.redis is None:
            return False
        if not _json_exact(value):
            logger.warning(
                "Cache set skipped for key %s: %s does not round-trip through JSON",
                key,
                type(value).__name__,
            )
            return False
        try:
            await self.redis.setex(key, ttl, json.dumps(value))
        except (redis.ConnectionError, redis.TimeoutError):
            logger.warning("Cache set unavailable for key %s (Redis disconnected)", key)
            return False
        except redis.RedisError:
            logger.exception("Cache set error for key %s", key)
            return False
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK (non-blocking).

        Args:
            pattern: Redis SCAN match pattern (e.g. pathconfig:org:*).

        Returns:
            Number of keys deleted.
        """
        if not self.is_available() or self.redis is None:
            return 0
        chunk_size = 500
        deleted = 0
        try:
            chunk: list[str] = []
            async for key in self.redis.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= chunk_size:
                    deleted += await self._unlink(chunk)
                    chunk = []
            if chunk:
                deleted += await self._unlink(chunk)
        except (redis.ConnectionError, redis.TimeoutError):
            logger.warning(
                "Cache delete_pattern unavailable for %s (Redis disconnected)", pattern
            )
            return deleted
        except redis.RedisError:
            logger.exception("Cache delete_pattern error for %s", pattern)
            return deleted
        logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
        return deleted

    async def _unlink(self, keys: list[str]) -> int:
        assert self.redis is not None
        async with self.redis.pipeline(transaction=False) as pipe:
            pipe.unlink(*keys)
            results = await pipe.execute()
        return sum(int(r or 0) for r in results)


class RedisCachePartition:
    """Org or Session partition stored under its own key prefix in Redis."""

    def __init__(
        self,
        service: RedisCacheService,
        *,
        session_scoped: bool = False,
        ttl: int | None = None,
    ) -> None:
        self.service = service
        self.session_scoped = session_scoped
        self.ttl = ttl or service.settings.cache_ttl_seconds

    def prefix(self) -> str:
        """Key prefix for the current context (session id applies to Session only)."""
        namespace = self.service.settings.cache_namespace
        if self.session_scoped:
            return session_prefix(namespace, get_session_id() or DEFAULT_SESSION_ID)
        return org_prefix(namespace)

    async def get(self, key: str) -> Any | None:
        return await self.service.get(self.prefix() + key)

    async def put(self, key: str, value: Any) -> None:
        await self.service.set(self.prefix() + key, value, ttl=self.ttl)

    async def reload(self) -> None:
        """Delete every key under this partition's prefix."""
        await self.service.delete_pattern(f"{self.prefix()}*")
