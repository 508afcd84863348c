"""Session context middleware for the Session cache partition.

Copies the session header (settings.session_header_name, default
X-Session-ID) into the session context so that Session-scoped handlers
read and reload only the caller's slice of the cache.
"""

from __future__ import annotations

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from pathconfig.core.config import get_settings
from pathconfig.core.session_context import set_session_id


def SessionContextMiddleware(app: Callable) -> Callable:
    """Set session context from the session header before the route runs."""

    class _Middleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next: Callable) -> Response:
            session_id = request.headers.get(get_settings().session_header_name)
            set_session_id(session_id or None)
            try:
                return await call_next(request)
            finally:
                set_session_id(None)

    return _Middleware(app)
