"""Handler calling conventions and invocation results."""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, ClassVar

# Handlers declaring this many positional parameters receive the callback
CALLBACK_ARITY = 3


@dataclass(frozen=True)
class Immediate:
    """Handler returned a plain value."""

    value: Any

    @property
    def is_error(self) -> bool:
        return isinstance(self.value, BaseException)


@dataclass(frozen=True)
class Deferred:
    """
    Handler returned an awaitable or a concurrent future.

    With ``settles_via_callback`` the resolved value is ignored and only a
    raised exception completes the firing; success comes from ``done``.
    """

    awaitable: Any
    settles_via_callback: bool = False


@dataclass(frozen=True)
class Thrown:
    """Handler raised synchronously."""

    error: BaseException


InvocationResult = Immediate | Deferred | Thrown


def is_deferred(value: Any) -> bool:
    return inspect.isawaitable(value) or isinstance(value, Future)


def positional_arity(func: Callable) -> tuple[int, bool]:
    """
    Count declared positional parameters.

    Returns:
        (count, has ``*args``); ``*args`` is not counted
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return 2, True

    count = 0
    variadic = False
    for param in signature.parameters.values():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            count += 1
        elif param.kind is param.VAR_POSITIONAL:
            variadic = True
    return count, variadic


class Invocable(ABC):
    """
    A resolved handler bound to its calling convention.

    The convention is picked once, when the handler is wrapped.
    """

    convention: ClassVar[str]

    def __init__(self, func: Callable, arity: int, variadic: bool = False) -> None:
        self.func = func
        self.arity = arity
        self.variadic = variadic

    @classmethod
    def wrap(cls, func: Callable) -> "Invocable":
        """
        Pick the calling convention for ``func``.

        Args:
            func: Handler returned by the resolver

        Returns:
            CallbackStyle for 3+ positional parameters, else DirectStyle
        """
        arity, variadic = positional_arity(func)
        if arity >= CALLBACK_ARITY:
            return CallbackStyle(func, arity, variadic)
        return DirectStyle(func, arity, variadic)

    @abstractmethod
    def call(self, event: Any, context: Any) -> InvocationResult | None:
        """
        Invoke the handler.

        Returns:
            The outcome, or None when completion is left to the callback
        """

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"<{self.__class__.__name__} {name}>"


class CallbackStyle(Invocable):
    """``handler(event, context, done)``; completion arrives through ``done``."""

    convention = "callback"

    def call(self, event: Any, context: Any) -> Deferred | Thrown | None:
        try:
            value = self.func(event, context, context.done)
        except Exception as e:
            return Thrown(e)

        # Coroutine handlers only run once awaited
        if is_deferred(value):
            return Deferred(value, settles_via_callback=True)
        return None


class DirectStyle(Invocable):
    """``handler(event, context)`` returning a value or an awaitable."""

    convention = "direct"

    def call(self, event: Any, context: Any) -> InvocationResult:
        args = (event, context) if self.variadic else (event, context)[: self.arity]
        try:
            value = self.func(*args)
        except Exception as e:
            return Thrown(e)

        if is_deferred(value):
            return Deferred(value)
        return Immediate(value)
