"""Per-firing invocation pipeline."""

import threading
from collections.abc import Mapping
from concurrent.futures import Future
from functools import partial
from typing import Any

from offline_scheduler.core.common.exceptions import (
    HandlerResolutionError,
    InvocationError,
    InvocationTimeoutError,
)
from offline_scheduler.core.common.types import FiringState
from offline_scheduler.core.config import SCHEDULER_PLUGIN, FunctionDeclaration, ServiceConfig
from offline_scheduler.core.execution.async_loop import AsyncExecutor
from offline_scheduler.core.execution.callbacks import OnFailureCallback, OnSuccessCallback
from offline_scheduler.core.execution.completion import CompletionReporter
from offline_scheduler.core.execution.context import InvocationContext
from offline_scheduler.core.execution.environment import apply_environment, build_environment
from offline_scheduler.core.execution.events import build_event
from offline_scheduler.core.execution.invocable import (
    Deferred,
    Immediate,
    Invocable,
    InvocationResult,
    Thrown,
)
from offline_scheduler.core.execution.resolver import HandlerResolver, ModuleHandlerResolver
from offline_scheduler.core.jobs.definition import ScheduleRecord
from offline_scheduler.utils.logging import ContextLogger, _default_logger


class Firing:
    """
    State of one firing: PENDING -> RESOLVING -> INVOKING -> COMPLETED.

    Completion is recorded once; ``wait`` blocks until it happens.
    """

    def __init__(self, record: ScheduleRecord) -> None:
        self.record = record
        self.state = FiringState.PENDING
        self.error: BaseException | None = None
        self.result: Any = None
        self.context: InvocationContext | None = None

        self._lock = threading.Lock()
        self._completed = threading.Event()
        self.watchdog: threading.Timer | None = None
        self.future: Future | None = None

    def transition(self, state: FiringState) -> None:
        with self._lock:
            if not self.state.is_terminal():
                self.state = state

    def complete(self, error: BaseException | None, result: Any) -> bool:
        """
        Record completion.

        Returns:
            False if the firing had already completed
        """
        with self._lock:
            if self.state.is_terminal():
                return False
            self.state = FiringState.COMPLETED
            self.error = error
            self.result = result
            watchdog = self.watchdog

        if watchdog is not None:
            watchdog.cancel()
        self._completed.set()
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until completed; returns False on timeout."""
        return self._completed.wait(timeout)

    @property
    def succeeded(self) -> bool:
        return self.state.is_terminal() and self.error is None

    def __repr__(self) -> str:
        return f"<Firing {self.record.label} state={self.state}>"


class InvocationPipeline:
    """
    Turns a timer firing into a handler invocation.

    Steps per firing: build the environment snapshot, the event and the
    context; resolve the handler; call it; route every outcome (return
    value, awaitable, callback, exception, timeout) into a single
    completion report.

    Usage:
        >>> pipeline = InvocationPipeline(service)
        >>> firing = pipeline.invoke(record)
        >>> firing.wait(timeout=10)
    """

    def __init__(
        self,
        service: ServiceConfig,
        resolver: HandlerResolver | None = None,
        async_executor: AsyncExecutor | None = None,
        logger: ContextLogger | None = None,
        options: Mapping[str, Any] | None = None,
        isolate_environment: bool = True,
        enforce_timeout: bool = True,
        on_success: OnSuccessCallback | None = None,
        on_failure: OnFailureCallback | None = None,
    ) -> None:
        """
        Initialize invocation pipeline.

        Args:
            service: Parsed service configuration
            resolver: Handler resolver (ModuleHandlerResolver if None)
            async_executor: Loop for awaitable results (created lazily if None)
            logger: Context logger
            options: Scheduler options passed to the resolver
            isolate_environment: Keep the environment per invocation instead of
                replacing ``os.environ``
            enforce_timeout: Report a timeout failure at the context deadline
            on_success: Hook called with (record, result) after a success
            on_failure: Hook called with (record, error) after a failure
        """
        self.service = service
        self.resolver = resolver or ModuleHandlerResolver()
        self.async_executor = async_executor or AsyncExecutor()
        self.logger = logger or ContextLogger(_default_logger, {"component": "InvocationPipeline"})
        self.options = dict(options or {})
        self.isolate_environment = isolate_environment
        self.enforce_timeout = enforce_timeout
        self.reporter = CompletionReporter(self.logger, on_success=on_success, on_failure=on_failure)

    def invoke(self, record: ScheduleRecord) -> Firing:
        """
        Run one firing of ``record``.

        Never raises: every failure is reported through the completion
        callback. Returns before an awaitable result has settled.

        Args:
            record: Schedule record being fired

        Returns:
            Firing tracking the invocation
        """
        firing = Firing(record)
        done = partial(self._complete, firing)

        try:
            declaration = self.service.get_function(record.function_id)
        except KeyError as e:
            done(HandlerResolutionError(str(e.args[0])), None)
            return firing

        environment = build_environment(self.service.provider.environment, declaration.environment)
        if not self.isolate_environment:
            apply_environment(environment)

        event = build_event(record, self.service.stage_variables)
        context = InvocationContext(
            function_name=record.function_id,
            timeout=record.timeout,
            done=done,
            environment=environment,
        )
        firing.context = context

        self.logger.debug(
            "Running scheduled function",
            function_id=record.function_id,
            rule=record.rule_name,
            request_id=context.aws_request_id,
        )

        firing.transition(FiringState.RESOLVING)
        try:
            invocable = self.resolve(record.function_id, declaration, environment)
        except HandlerResolutionError as e:
            done(e, None)
            return firing
        except Exception as e:
            error = HandlerResolutionError(f"Resolver failed for '{record.function_id}': {e}")
            error.__cause__ = e
            done(error, None)
            return firing

        firing.transition(FiringState.INVOKING)
        if self.enforce_timeout:
            self._start_watchdog(firing, context)

        self._settle(firing, invocable.call(event, context))
        return firing

    def resolve(
        self, function_id: str, declaration: FunctionDeclaration, environment: dict[str, str]
    ) -> Invocable:
        """
        Resolve the handler and bind its calling convention.

        Raises:
            HandlerResolutionError: Resolver could not produce a callable
        """
        options = {
            **self.options,
            **self.service.plugin_config(SCHEDULER_PLUGIN),
            "environment": environment,
        }
        runtime = declaration.runtime or self.service.provider.runtime
        handler = self.resolver(
            declaration,
            function_id,
            self.service.resolved_service_path(),
            runtime,
            options,
        )
        return Invocable.wrap(handler)

    # ------------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------------

    def _settle(self, firing: Firing, result: InvocationResult | None) -> None:
        if result is None:
            # Callback convention: the handler calls done() itself
            return

        if isinstance(result, Thrown):
            self._complete(firing, result.error, None)
        elif isinstance(result, Immediate):
            if result.is_error:
                self._complete(firing, result.value, None)
            else:
                self._complete(firing, None, result.value)
        elif isinstance(result, Deferred):
            self._await_deferred(firing, result)

    def _await_deferred(self, firing: Firing, result: Deferred) -> None:
        if isinstance(result.awaitable, Future):
            future = result.awaitable
        else:
            try:
                self.async_executor.ensure_started()
                future = self.async_executor.submit(result.awaitable)
            except Exception as e:
                self._complete(firing, e, None)
                return

        firing.future = future
        future.add_done_callback(
            partial(self._on_future_done, firing, settles_via_callback=result.settles_via_callback)
        )

    def _on_future_done(
        self, firing: Firing, future: Future, settles_via_callback: bool = False
    ) -> None:
        if future.cancelled():
            self._complete(firing, InvocationError("Handler awaitable was cancelled"), None)
            return

        error = future.exception()
        if error is not None:
            self._complete(firing, error, None)
        elif not settles_via_callback:
            self._complete(firing, None, future.result())

    def _start_watchdog(self, firing: Firing, context: InvocationContext) -> None:
        delay = max(0, context.get_remaining_time_in_millis()) / 1000
        watchdog = threading.Timer(delay, self._on_timeout, args=(firing,))
        watchdog.daemon = True
        watchdog.name = f"offline-scheduler-timeout-{firing.record.function_id}"
        firing.watchdog = watchdog
        watchdog.start()

    def _on_timeout(self, firing: Firing) -> None:
        record = firing.record
        if not self._complete(firing, InvocationTimeoutError(record.function_id, record.timeout), None):
            return

        self.logger.warning(
            "Handler timed out - it keeps running in the background",
            function_id=record.function_id,
            rule=record.rule_name,
            timeout_seconds=record.timeout,
        )
        if firing.future is not None:
            firing.future.cancel()

    def _complete(self, firing: Firing, error: Any, result: Any) -> bool:
        """Completion callback behind ``context.done``; reports the first call only."""
        if error and not isinstance(error, BaseException):
            error = InvocationError(str(error))
        elif not error:
            error = None

        if not firing.complete(error, result):
            self.logger.debug(
                "Ignoring completion of an already completed firing",
                function_id=firing.record.function_id,
                rule=firing.record.rule_name,
            )
            return False

        if error is None:
            self.reporter.report_success(firing.record, result)
        else:
            self.reporter.report_failure(firing.record, error)
        return True

    def shutdown(self) -> None:
        """Stop the async loop used for awaitable results."""
        self.async_executor.stop()
