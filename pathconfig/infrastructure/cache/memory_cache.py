"""In-process cache partitions.

Used when Redis is disabled or unreachable, and in tests. Entries expire
after ttl seconds. The session-scoped variant keeps one slice per session
id from pathconfig.core.session_context; reload() drops only the current
session's slice.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from pathconfig.core.constants import DEFAULT_SESSION_ID
from pathconfig.core.session_context import get_session_id
from pathconfig.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class InMemoryCachePartition:
    """Dict-backed cache partition with per-entry TTL."""

    def __init__(self, *, session_scoped: bool = False, ttl: int | None = None) -> None:
        """Initialize an empty partition.

        Args:
            session_scoped: Keep a separate slice per current session id.
            ttl: Optional time-to-live in seconds; None keeps entries until reload.
        """
        self.session_scoped = session_scoped
        self.ttl = ttl
        self._slices: dict[str, dict[str, tuple[Any, datetime | None]]] = {}

    def _slice_id(self) -> str:
        if not self.session_scoped:
            return ""
        return get_session_id() or DEFAULT_SESSION_ID

    async def get(self, key: str) -> Any | None:
        """Return the live value for key, or None if missing or expired."""
        slice_id = self._slice_id()
        entries = self._slices.get(slice_id)
        entry = entries.get(key) if entries else None
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= utc_now():
            del entries[key]
            if not entries:
                del self._slices[slice_id]
            logger.debug("Cache EXPIRED: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    async def put(self, key: str, value: Any) -> None:
        """Store value; an existing entry is replaced and its TTL restarted.

        Expired entries of every slice are swept first and emptied slices dropped.
        """
        now = utc_now()
        if self.ttl:
            self._prune(now)
        expires_at = now + timedelta(seconds=self.ttl) if self.ttl else None
        self._slices.setdefault(self._slice_id(), {})[key] = (value, expires_at)
        logger.debug("Cache SET: %s (TTL: %ss)", key, self.ttl)

    def _prune(self, now: datetime) -> None:
        for slice_id in list(self._slices):
            entries = self._slices[slice_id]
            for key in [k for k, (_, exp) in entries.items() if exp is not None and exp <= now]:
                del entries[key]
            if not entries:
                del self._slices[slice_id]

    async def reload(self) -> None:
        """Drop every entry of this partition (current session slice when session-scoped)."""
        dropped = self._slices.pop(self._slice_id(), {})
        logger.info("Cache RELOAD: %s entries dropped", len(dropped))

    def __len__(self) -> int:
        return len(self._slices.get(self._slice_id(), {}))
