"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See pathconfig.core.lifespan and
pathconfig.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI

from pathconfig.api.v1 import api_router
from pathconfig.core.config import get_settings
from pathconfig.core.exception_handlers import register_exception_handlers
from pathconfig.core.lifespan import create_lifespan
from pathconfig.middleware import SessionContextMiddleware
from pathconfig.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    register_exception_handlers(app)

    app.add_middleware(SessionContextMiddleware)

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
