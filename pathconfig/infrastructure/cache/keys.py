"""Cache key builders. Single place for key format.

Components are percent-encoded so that user-supplied path segments and
query values can never contain CACHE_KEY_SEP or "=" and collide with
another key.
"""

from collections.abc import Mapping
from urllib.parse import quote

from pathconfig.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PARTITION_ORG,
    CACHE_PARTITION_SESSION,
    CACHE_PREFIX_HANDLER,
)


def _encode(value: str) -> str:
    return quote(value, safe="")


def handler_key(handler_id: int, params: Mapping[str, str | None]) -> str:
    """Cache key for a handler's result under the given parameters.

    Names are sorted so that semantically identical parameter maps always
    produce the same key; a None value is encoded as the bare name.

    Example:
        >>> handler_key(3, {"value": "b", "name": "a:1", "flag": None})
        'handler:3:flag:name=a%3A1:value=b'
    """
    parts = [CACHE_PREFIX_HANDLER, str(handler_id)]
    for name in sorted(params):
        value = params[name]
        if value is None:
            parts.append(_encode(name))
        else:
            parts.append(f"{_encode(name)}={_encode(value)}")
    return CACHE_KEY_SEP.join(parts)


def org_prefix(namespace: str) -> str:
    """Key prefix of the Org partition (trailing separator included)."""
    return f"{namespace}{CACHE_KEY_SEP}{CACHE_PARTITION_ORG}{CACHE_KEY_SEP}"


def session_prefix(namespace: str, session_id: str) -> str:
    """Key prefix of one session's slice of the Session partition."""
    return (
        f"{namespace}{CACHE_KEY_SEP}{CACHE_PARTITION_SESSION}{CACHE_KEY_SEP}"
        f"{_encode(session_id)}{CACHE_KEY_SEP}"
    )
