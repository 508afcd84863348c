"""Invoke helpers: call sync or async handler callbacks uniformly.

Read and write callbacks can be ``def`` or ``async def`` and may accept
zero, one or two positional arguments. The dispatcher always offers
``(params)`` for reads and ``(params, data)`` for writes; this module
trims the offer to what the callable accepts and awaits the result when
needed, so the arity and sync/async checks live in exactly one place.

Usage::

    from pathconfig._internal.invoke import invoke_callback

    result = await invoke_callback(on_write, params, data)
"""

import inspect
from typing import Any


def _positional_capacity(func: Any) -> int | None:
    """Return how many positional args *func* accepts, or None for unlimited/unknown."""
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


async def invoke_callback(func: Any, *args: Any) -> Any:
    """Call *func* with as many of *args* as it accepts; await if it returns an awaitable.

    Works with plain functions, lambdas, bound methods and ``functools.partial``::

        await invoke_callback(lambda: 1, params)            # -> 1
        await invoke_callback(lambda p: p["name"], params)  # -> params["name"]
        await invoke_callback(save, params, data)           # async def save(p, d)
    """
    capacity = _positional_capacity(func)
    if capacity is not None:
        args = args[:capacity]
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
