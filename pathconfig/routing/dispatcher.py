"""Config: the public façade over registry, cache gateway and type coercion.

Reads go to the first matching handler in registration order; writes fan
out to every matching handler. Nothing matching is not an error: a read
returns None and a write does nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pathconfig.core.constants import TYPE_PARAM
from pathconfig.domain.enums import Scope
from pathconfig.infrastructure.cache.gateway import CacheGateway
from pathconfig.routing.coercion import coerce
from pathconfig.routing.path_matcher import match
from pathconfig.routing.registry import (
    Handler,
    HandlerRegistry,
    ReadCallback,
    WriteCallback,
)
from pathconfig.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class Config:
    """Path-addressed values backed by registered handlers.

    Example:
        config = Config(CacheGateway.in_memory())
        config.register_read("/System/version", lambda: "1.0.0")
        await config.read("/System/version")  # "1.0.0"
    """

    def __init__(
        self,
        cache: CacheGateway | None = None,
        registry: HandlerRegistry | None = None,
    ) -> None:
        """Initialize with a cache gateway (None disables caching for every handler)."""
        self.registry = registry if registry is not None else HandlerRegistry(cache)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        template: str,
        on_read: ReadCallback | None = None,
        on_write: WriteCallback | None = None,
        *,
        cache_enabled: bool = True,
        scope: Scope | str = Scope.ORG,
    ) -> Handler:
        """Register (or re-register) a template with optional read and write callbacks."""
        return self.registry.register(
            template,
            cache_enabled=cache_enabled,
            scope=scope,
            on_read=on_read,
            on_write=on_write,
        )

    def register_read(
        self,
        template: str,
        on_read: ReadCallback,
        *,
        cache_enabled: bool = True,
        scope: Scope | str = Scope.ORG,
    ) -> Handler:
        return self.register(template, on_read, None, cache_enabled=cache_enabled, scope=scope)

    def register_write(
        self,
        template: str,
        on_write: WriteCallback,
        *,
        cache_enabled: bool = True,
        scope: Scope | str = Scope.ORG,
    ) -> Handler:
        return self.register(template, None, on_write, cache_enabled=cache_enabled, scope=scope)

    def register_read_write(
        self,
        template: str,
        on_read: ReadCallback,
        on_write: WriteCallback,
        *,
        cache_enabled: bool = True,
        scope: Scope | str = Scope.ORG,
    ) -> Handler:
        return self.register(
            template, on_read, on_write, cache_enabled=cache_enabled, scope=scope
        )

    def list_paths(self) -> list[str]:
        """Registered templates in registration order."""
        return self.registry.list()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    @traced("pathconfig.read")
    async def read(self, path: str) -> Any:
        """Return the value at path from the first matching handler, or None.

        The result is converted according to the ``type`` query parameter
        (e.g. ``/System/limit?type=Integer``); unknown tags pass it through.
        """
        for handler in self.registry:
            params = match(handler.template, path)
            if params is None:
                continue
            add_span_attributes(template=handler.template, handler_id=handler.id)
            logger.debug("Read %s -> %r", path, handler)
            value = await handler.read(params)
            return coerce(value, params.get(TYPE_PARAM))
        logger.debug("Read %s: no handler matched", path)
        return None

    @traced("pathconfig.write")
    async def write(self, path: str, data: Mapping[str, Any] | None = None) -> None:
        """Send data to every handler whose template matches path, in registration order."""
        payload = data if data is not None else {}
        written = 0
        for handler in self.registry:
            params = match(handler.template, path)
            if params is None:
                continue
            if await handler.write(params, payload):
                written += 1
        add_span_attributes(count=written)
        logger.debug("Write %s: %s handler(s) invoked", path, written)

    get = read
    put = write
