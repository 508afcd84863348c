"""Cache: partition protocol, Redis and in-process partitions, key builders, gateway.

CacheGateway applies the per-handler policy; partitions only store values.
Key format lives in keys.py.
"""

from pathconfig.infrastructure.cache.cache_protocol import CachePartition
from pathconfig.infrastructure.cache.gateway import CacheGateway
from pathconfig.infrastructure.cache.keys import handler_key, org_prefix, session_prefix
from pathconfig.infrastructure.cache.memory_cache import InMemoryCachePartition
from pathconfig.infrastructure.cache.redis_cache import (
    RedisCachePartition,
    RedisCacheService,
)

__all__ = [
    "CacheGateway",
    "CachePartition",
    "InMemoryCachePartition",
    "RedisCachePartition",
    "RedisCacheService",
    "handler_key",
    "org_prefix",
    "session_prefix",
]
