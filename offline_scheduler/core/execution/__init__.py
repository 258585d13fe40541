"""Invocation pipeline components."""

from offline_scheduler.core.execution.async_loop import AsyncExecutor
from offline_scheduler.core.execution.callbacks import OnFailureCallback, OnSuccessCallback
from offline_scheduler.core.execution.completion import CompletionReporter
from offline_scheduler.core.execution.context import InvocationContext
from offline_scheduler.core.execution.environment import (
    LOCAL_FLAGS,
    apply_environment,
    build_environment,
)
from offline_scheduler.core.execution.events import build_event
from offline_scheduler.core.execution.invocable import (
    CallbackStyle,
    Deferred,
    DirectStyle,
    Immediate,
    Invocable,
    InvocationResult,
    Thrown,
)
from offline_scheduler.core.execution.pipeline import Firing, InvocationPipeline
from offline_scheduler.core.execution.resolver import HandlerResolver, ModuleHandlerResolver

__all__ = [
    "AsyncExecutor",
    "OnFailureCallback",
    "OnSuccessCallback",
    "CompletionReporter",
    "InvocationContext",
    "LOCAL_FLAGS",
    "apply_environment",
    "build_environment",
    "build_event",
    "Invocable",
    "CallbackStyle",
    "DirectStyle",
    "InvocationResult",
    "Immediate",
    "Deferred",
    "Thrown",
    "Firing",
    "InvocationPipeline",
    "HandlerResolver",
    "ModuleHandlerResolver",
]
