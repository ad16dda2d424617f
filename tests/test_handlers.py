"""Tests for errwire.handlers — the async-boundary adapter."""

from __future__ import annotations

import asyncio
import inspect
from unittest.mock import MagicMock

import pytest

from errwire.handlers import wrap


def _run(coro):
    return asyncio.run(coro)


class TestWrap:
    def test_sync_success(self):
        forward = MagicMock()
        adapted = wrap(lambda x: x * 2)
        assert _run(adapted(21, forward=forward)) == 42
        forward.assert_not_called()

    def test_async_success(self):
        async def handler(x):
            return x + 1

        forward = MagicMock()
        assert _run(wrap(handler)(1, forward=forward)) == 2
        forward.assert_not_called()

    def test_sync_raise_forwarded_once(self):
        error = ValueError("sync")

        def handler():
            raise error

        forward = MagicMock(return_value="handled")
        assert _run(wrap(handler)(forward=forward)) == "handled"
        forward.assert_called_once_with(error)

    def test_async_failure_forwarded_once(self):
        error = RuntimeError("async")

        async def handler():
            await asyncio.sleep(0)
            raise error

        forward = MagicMock()
        _run(wrap(handler)(forward=forward))
        forward.assert_called_once_with(error)

    def test_awaitable_result_failure(self):
        error = KeyError("later")

        async def later():
            raise error

        def handler():
            # Returns an awaitable rather than being a coroutine function
            return later()

        forward = MagicMock()
        _run(wrap(handler)(forward=forward))
        forward.assert_called_once_with(error)

    def test_async_forward_awaited(self):
        seen = []

        async def forward(exc):
            seen.append(exc)
            return "responded"

        def handler():
            raise TypeError("t")

        assert _run(wrap(handler)(forward=forward)) == "responded"
        assert len(seen) == 1

    def test_error_not_transformed(self):
        error = OSError(2, "gone")
        forward = MagicMock()

        def handler():
            raise error

        _run(wrap(handler)(forward=forward))
        assert forward.call_args.args[0] is error

    def test_kwargs_passed_through(self):
        adapted = wrap(lambda a, b=0: a - b)
        assert _run(adapted(5, b=2, forward=MagicMock())) == 3

    def test_keeps_handler_name(self):
        def get_user():
            pass

        assert wrap(get_user).__name__ == "get_user"

    def test_reraises_without_forward(self):
        error = LookupError("no forward")

        async def handler():
            raise error

        with pytest.raises(LookupError) as info:
            _run(wrap(handler)())
        assert info.value is error

    def test_success_without_forward(self):
        assert _run(wrap(lambda: "ok")()) == "ok"

    def test_signature_follows_handler(self):
        async def get_item(item_id: int, verbose: bool = False):
            pass

        params = inspect.signature(wrap(get_item)).parameters
        assert list(params) == ["item_id", "verbose"]
