"""Cache partition protocol used by the CacheGateway."""

from typing import Any, Protocol


class CachePartition(Protocol):
    """One scope-qualified cache (Org or Session). Implemented for Redis and in-process."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def put(self, key: str, value: Any) -> None:
        """Store value under key."""
        ...

    async def reload(self) -> None:
        """Drop every entry of this partition (coarse invalidation)."""
        ...
