"""Cache policy between handlers and the two cache partitions.

A handler's result is cached only when its cache flag is set; the Org
partition is used unless the handler's scope is Session. Keys come from
pathconfig.infrastructure.cache.keys.handler_key.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pathconfig.domain.enums import Scope
from pathconfig.infrastructure.cache.cache_protocol import CachePartition
from pathconfig.infrastructure.cache.keys import handler_key
from pathconfig.infrastructure.cache.memory_cache import InMemoryCachePartition

if TYPE_CHECKING:
    from pathconfig.routing.registry import Handler

logger = logging.getLogger(__name__)


class CacheGateway:
    """Selects a partition per handler and reads, writes or reloads it."""

    def __init__(self, org: CachePartition, session: CachePartition) -> None:
        self.partitions: dict[Scope, CachePartition] = {
            Scope.ORG: org,
            Scope.SESSION: session,
        }

    @classmethod
    def in_memory(cls, ttl: int | None = None) -> CacheGateway:
        """Gateway over two in-process partitions (tests, Redis disabled)."""
        return cls(
            InMemoryCachePartition(ttl=ttl),
            InMemoryCachePartition(session_scoped=True, ttl=ttl),
        )

    def partition_for(self, handler: Handler) -> CachePartition | None:
        """Return the handler's partition, or None when its caching is off."""
        if not handler.cache_enabled:
            return None
        if handler.scope is Scope.SESSION:
            return self.partitions[Scope.SESSION]
        return self.partitions[Scope.ORG]

    async def get(self, handler: Handler, params: Mapping[str, str | None]) -> Any | None:
        """Return the cached result for (handler, params), or None."""
        partition = self.partition_for(handler)
        if partition is None:
            return None
        return await partition.get(handler_key(handler.id, params))

    async def put(
        self, handler: Handler, params: Mapping[str, str | None], value: Any
    ) -> None:
        """Cache value for (handler, params). None is never stored."""
        partition = self.partition_for(handler)
        if partition is None or value is None:
            return
        await partition.put(handler_key(handler.id, params), value)

    async def invalidate(self, handler: Handler) -> None:
        """Reload (empty) the handler's whole partition."""
        partition = self.partition_for(handler)
        if partition is None:
            return
        logger.debug(
            "Invalidating %s partition after write to %s",
            handler.scope.value,
            handler.template,
        )
        await partition.reload()
