"""Application lifespan: startup and shutdown.

Wiring only: cache partitions, the Config dispatcher with its built-in
paths, and the optional SQL record store. The dispatcher is stored on
app.state.config.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from pathconfig.core.config import Settings, get_settings
from pathconfig.infrastructure.cache import (
    CacheGateway,
    RedisCachePartition,
    RedisCacheService,
)
from pathconfig.routing.dispatcher import Config
from pathconfig.routing.system_handlers import register_system_handlers

logger = logging.getLogger(__name__)


async def _build_gateway(app: FastAPI, settings: Settings) -> CacheGateway:
    """Redis partitions when enabled and reachable, in-process partitions otherwise."""
    app.state.redis_cache = None
    if settings.redis_enabled:
        service = RedisCacheService(settings=settings)
        await service.connect()
        if service.is_available():
            app.state.redis_cache = service
            return CacheGateway(
                RedisCachePartition(service),
                RedisCachePartition(service, session_scoped=True),
            )
    logger.info("Using in-process cache partitions")
    return CacheGateway.in_memory(ttl=settings.cache_ttl_seconds)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: cache partitions, Config with system paths, record store
    tables and /Settings/${key} (when DATABASE_URL is set). Shutdown order:
    Redis disconnect, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    config = Config(await _build_gateway(app, settings))
    register_system_handlers(config, settings)

    from pathconfig.infrastructure.persistence import database

    if database.is_configured():
        from pathconfig.infrastructure.persistence.record_handlers import (
            register_entry_handlers,
        )
        from pathconfig.infrastructure.persistence.record_store import SqlRecordStore

        await database.create_tables()
        register_entry_handlers(config, SqlRecordStore())
        logger.info("Record store paths registered")

    app.state.config = config
    logger.info("Config ready with %s path(s)", len(config.list_paths()))

    yield

    # ---- Shutdown ----
    if getattr(app.state, "redis_cache", None) is not None:
        await app.state.redis_cache.disconnect()
        app.state.redis_cache = None
        logger.info("Cache disconnected")

    await database.dispose_engine()
