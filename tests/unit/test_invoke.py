"""Tests for invoke_callback (arity trimming, sync and async callables)."""

from functools import partial

import pytest

from pathconfig._internal.invoke import invoke_callback


@pytest.mark.asyncio
async def test_zero_arg_callable_ignores_offered_args() -> None:
    assert await invoke_callback(lambda: 1, {"a": "1"}, {"d": 2}) == 1


@pytest.mark.asyncio
async def test_one_arg_callable_gets_params() -> None:
    assert await invoke_callback(lambda p: p["a"], {"a": "1"}, {"d": 2}) == "1"


@pytest.mark.asyncio
async def test_two_arg_async_callable_gets_params_and_data() -> None:
    async def on_write(params, data):
        return params["a"], data["d"]

    assert await invoke_callback(on_write, {"a": "1"}, {"d": 2}) == ("1", 2)


@pytest.mark.asyncio
async def test_varargs_callable_gets_everything() -> None:
    assert await invoke_callback(lambda *args: args, 1, 2) == (1, 2)


@pytest.mark.asyncio
async def test_bound_method_and_partial() -> None:
    class Source:
        def read(self, params):
            return params["a"]

    assert await invoke_callback(Source().read, {"a": "x"}) == "x"

    def add(base, params):
        return base + len(params)

    assert await invoke_callback(partial(add, 10), {"a": "1", "b": "2"}) == 12

