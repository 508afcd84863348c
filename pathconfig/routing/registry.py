"""Handler registry: templates bound to read/write callbacks and a cache policy."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from itertools import count
from typing import Any

from pathconfig._internal.invoke import invoke_callback
from pathconfig.domain.enums import Scope
from pathconfig.domain.exceptions import ValidationException
from pathconfig.infrastructure.cache.gateway import CacheGateway

logger = logging.getLogger(__name__)

ReadCallback = Callable[..., Any]
WriteCallback = Callable[..., Any]


class Handler:
    """One registered template.

    Owned by the HandlerRegistry that created it. ``cache`` is the gateway
    used for cache-aside reads and invalidation, or None when caching is off.
    """

    __slots__ = ("id", "template", "cache_enabled", "scope", "on_read", "on_write", "cache")

    def __init__(
        self,
        handler_id: int,
        template: str,
        *,
        cache_enabled: bool,
        scope: Scope,
        on_read: ReadCallback | None,
        on_write: WriteCallback | None,
        cache: CacheGateway | None,
    ) -> None:
        self.id = handler_id
        self.template = template
        self.cache_enabled = cache_enabled
        self.scope = scope
        self.on_read = on_read
        self.on_write = on_write
        self.cache = cache if cache_enabled else None

    def configure(
        self,
        *,
        cache_enabled: bool,
        scope: Scope,
        on_read: ReadCallback | None,
        on_write: WriteCallback | None,
        cache: CacheGateway | None,
    ) -> None:
        """Replace flags and callbacks in place (identity and id are kept)."""
        self.cache_enabled = cache_enabled
        self.scope = scope
        self.on_read = on_read
        self.on_write = on_write
        self.cache = cache if cache_enabled else None

    async def read(self, params: Mapping[str, str | None]) -> Any:
        """Cache-aside read: cached value, else on_read(params) stored then returned.

        A None result is not cached, so it is recomputed on every call.
        """
        if self.cache is not None:
            cached = await self.cache.get(self, params)
            if cached is not None:
                return cached
        if self.on_read is None:
            return None
        value = await invoke_callback(self.on_read, dict(params))
        if self.cache is not None:
            await self.cache.put(self, params, value)
        return value

    async def write(self, params: Mapping[str, str | None], data: Mapping[str, Any]) -> bool:
        """Run on_write(params, data) then invalidate the cache partition.

        Returns False without doing anything when no write callback is bound.
        """
        if self.on_write is None:
            return False
        await invoke_callback(self.on_write, dict(params), data)
        if self.cache is not None:
            await self.cache.invalidate(self)
        return True

    def __repr__(self) -> str:
        return (
            f"Handler(id={self.id}, template={self.template!r}, "
            f"cache_enabled={self.cache_enabled}, scope={self.scope.value})"
        )


class HandlerRegistry:
    """Ordered handlers keyed by their exact template string."""

    def __init__(self, cache: CacheGateway | None = None) -> None:
        """Initialize an empty registry.

        Args:
            cache: Gateway handed to every cache-enabled handler; None disables caching.
        """
        self.cache = cache
        self._handlers: list[Handler] = []
        self._by_template: dict[str, Handler] = {}
        self._ids = count()

    def register(
        self,
        template: str,
        cache_enabled: bool = True,
        scope: Scope | str = Scope.ORG,
        on_read: ReadCallback | None = None,
        on_write: WriteCallback | None = None,
    ) -> Handler:
        """Register a template, or update the existing handler for it in place.

        Raises:
            ValidationException: If template is empty.
        """
        if not template:
            raise ValidationException("Path template must be a non-empty string", field="template")
        resolved_scope = Scope.parse(scope)
        handler = self._by_template.get(template)
        if handler is not None:
            handler.configure(
                cache_enabled=cache_enabled,
                scope=resolved_scope,
                on_read=on_read,
                on_write=on_write,
                cache=self.cache,
            )
            logger.debug("Re-registered %r", handler)
            return handler
        handler = Handler(
            next(self._ids),
            template,
            cache_enabled=cache_enabled,
            scope=resolved_scope,
            on_read=on_read,
            on_write=on_write,
            cache=self.cache,
        )
        self._handlers.append(handler)
        self._by_template[template] = handler
        logger.debug("Registered %r", handler)
        return handler

    def find(self, template: str) -> Handler | None:
        """Return the handler registered for exactly this template, or None."""
        return self._by_template.get(template)

    def list(self) -> list[str]:
        """Return registered templates in registration order."""
        return [h.template for h in self._handlers]

    def __iter__(self):
        return iter(list(self._handlers))

    def __len__(self) -> int:
        return len(self._handlers)
