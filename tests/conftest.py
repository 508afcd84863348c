"""Pytest configuration and fixtures for pathconfig.

Redis and the SQL record store are disabled for the whole suite: the app
runs on in-process cache partitions and registers only the system paths.
Env is set before any pathconfig import so that get_settings() sees it.
"""

import os

os.environ["REDIS_ENABLED"] = "false"
os.environ["DATABASE_URL"] = ""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from pathconfig.core.config import get_settings

get_settings.cache_clear()

from pathconfig.core.lifespan import create_lifespan
from pathconfig.core.session_context import set_session_id
from pathconfig.infrastructure.cache import CacheGateway
from pathconfig.main import create_app
from pathconfig.routing.dispatcher import Config


@pytest.fixture
def gateway() -> CacheGateway:
    """Gateway over two fresh in-process partitions."""
    return CacheGateway.in_memory()


@pytest.fixture
def config(gateway: CacheGateway) -> Config:
    """Empty Config dispatcher with caching through the in-process gateway."""
    return Config(gateway)


@pytest.fixture(autouse=True)
def _reset_session() -> None:
    """Each test starts without a session id in context."""
    set_session_id(None)
    yield
    set_session_id(None)


@pytest.fixture
async def app() -> FastAPI:
    """Freshly built app with its lifespan running (app.state.config is ready)."""
    application = create_app()
    async with create_lifespan(application):
        yield application


@pytest.fixture
async def client(app: FastAPI) -> AsyncClient:
    """Async HTTP client against the app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
