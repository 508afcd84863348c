"""HTTP middleware. Import and use from pathconfig.main."""

from pathconfig.middleware.session_context import SessionContextMiddleware

__all__ = ["SessionContextMiddleware"]
