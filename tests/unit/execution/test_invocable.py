"""Unit tests for calling-convention dispatch."""

import asyncio
from concurrent.futures import Future
from functools import partial
from unittest.mock import Mock

from offline_scheduler.core.execution.invocable import (
    CallbackStyle,
    Deferred,
    DirectStyle,
    Immediate,
    Invocable,
    Thrown,
    positional_arity,
)


def direct_handler(event, context):
    return {"event": event}


def callback_handler(event, context, callback):
    callback(None, "done")


class Handlers:
    def method(self, event, context, callback):
        callback(None, "method")


class TestWrap:
    """Convention is chosen from the declared positional parameters."""

    def test_three_parameters_is_callback_style(self):
        assert isinstance(Invocable.wrap(callback_handler), CallbackStyle)

    def test_two_parameters_is_direct_style(self):
        assert isinstance(Invocable.wrap(direct_handler), DirectStyle)

    def test_bound_method_ignores_self(self):
        assert isinstance(Invocable.wrap(Handlers().method), CallbackStyle)

    def test_varargs_do_not_count(self):
        def handler(event, *args):
            return args

        invocable = Invocable.wrap(handler)
        assert isinstance(invocable, DirectStyle)
        assert positional_arity(handler) == (1, True)

    def test_partial(self):
        def handler(prefix, event, context, callback):
            callback(None, prefix)

        assert isinstance(Invocable.wrap(partial(handler, "x")), CallbackStyle)

    def test_keyword_only_do_not_count(self):
        def handler(event, context, *, callback=None):
            return None

        assert isinstance(Invocable.wrap(handler), DirectStyle)


class TestDirectStyle:
    def test_immediate(self):
        result = Invocable.wrap(direct_handler).call({"a": 1}, Mock())
        assert result == Immediate({"event": {"a": 1}})
        assert not result.is_error

    def test_returned_exception_is_error(self):
        error = ValueError("returned")
        result = Invocable.wrap(lambda event, context: error).call({}, Mock())
        assert isinstance(result, Immediate)
        assert result.is_error

    def test_thrown(self):
        def handler(event, context):
            raise RuntimeError("boom")

        result = Invocable.wrap(handler).call({}, Mock())
        assert isinstance(result, Thrown)
        assert str(result.error) == "boom"

    def test_coroutine_is_deferred(self):
        async def handler(event, context):
            return 1

        result = Invocable.wrap(handler).call({}, Mock())
        assert isinstance(result, Deferred)
        assert asyncio.iscoroutine(result.awaitable)
        result.awaitable.close()

    def test_future_is_deferred(self):
        future = Future()
        result = Invocable.wrap(lambda event, context: future).call({}, Mock())
        assert result == Deferred(future)

    def test_single_parameter_handler_receives_event_only(self):
        def handler(event):
            return event

        assert Invocable.wrap(handler).call("payload", Mock()) == Immediate("payload")

    def test_no_parameter_handler(self):
        assert Invocable.wrap(lambda: 42).call({}, Mock()) == Immediate(42)


class TestCallbackStyle:
    def test_passes_context_done(self):
        context = Mock()

        result = Invocable.wrap(callback_handler).call({}, context)

        assert result is None
        context.done.assert_called_once_with(None, "done")

    def test_thrown(self):
        def handler(event, context, callback):
            raise KeyError("missing")

        result = Invocable.wrap(handler).call({}, Mock())
        assert isinstance(result, Thrown)
        assert isinstance(result.error, KeyError)

    def test_coroutine_handler_is_deferred_to_callback(self):
        async def handler(event, context, callback):
            callback(None, "done")

        result = Invocable.wrap(handler).call({}, Mock())

        assert isinstance(result, Deferred)
        assert result.settles_via_callback
        assert asyncio.iscoroutine(result.awaitable)
        result.awaitable.close()

    def test_non_awaitable_return_is_ignored(self):
        def handler(event, context, callback):
            return "ignored"

        assert Invocable.wrap(handler).call({}, Mock()) is None
