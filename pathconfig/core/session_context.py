"""Session context for the Session cache partition.

Middleware (or the host process) sets the current session id in this
context variable; the Session partition namespaces its keys with it so
that a reload only drops the calling session's entries.
"""

from contextvars import ContextVar

# Current session ID for the request (set by middleware, read by cache partitions).
current_session_id: ContextVar[str | None] = ContextVar(
    "current_session_id", default=None
)


def set_session_id(session_id: str | None) -> None:
    """Set the current session ID for this context (e.g. request)."""
    current_session_id.set(session_id)


def get_session_id() -> str | None:
    """Return the current session ID if set."""
    return current_session_id.get()
