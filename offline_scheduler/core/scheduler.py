"""Offline scheduler facade wiring registry, timer engine and pipeline."""

import logging
from collections.abc import Mapping
from typing import Any

from offline_scheduler.core.config import ServiceConfig
from offline_scheduler.core.engine import TimerEngine
from offline_scheduler.core.execution.async_loop import AsyncExecutor
from offline_scheduler.core.execution.callbacks import OnFailureCallback, OnSuccessCallback
from offline_scheduler.core.execution.pipeline import Firing, InvocationPipeline
from offline_scheduler.core.execution.resolver import HandlerResolver
from offline_scheduler.core.jobs.definition import FunctionSchedule, ScheduleRecord
from offline_scheduler.core.registry import ScheduleRegistryBuilder, iter_records
from offline_scheduler.utils.logging import ContextLogger, _default_logger


class OfflineScheduler:
    """
    Runs the schedule triggers of a service locally.

    Reads every ``schedule`` trigger from the service configuration,
    registers one cron timer per enabled trigger and invokes the function's
    handler with a synthesized scheduled event on each firing.

    Usage:
        >>> service = ServiceConfig.model_validate(parsed_serverless_yml)
        >>> scheduler = OfflineScheduler(service)
        >>> scheduler.start()  # non-blocking
        >>> scheduler.stop_rule("nightly-report")
        >>> scheduler.shutdown()
    """

    def __init__(
        self,
        service: ServiceConfig | Mapping[str, Any],
        resolver: HandlerResolver | None = None,
        options: Mapping[str, Any] | None = None,
        max_workers: int | None = None,
        timezone: str = "UTC",
        isolate_environment: bool = True,
        enforce_timeout: bool = True,
        logger: logging.Logger | None = None,
        on_success: OnSuccessCallback | None = None,
        on_failure: OnFailureCallback | None = None,
    ) -> None:
        """
        Initialize offline scheduler.

        Args:
            service: ServiceConfig or the raw mapping to validate into one
            resolver: Handler resolver (ModuleHandlerResolver if None)
            options: Scheduler options merged into the resolver options
            max_workers: Worker threads running firings (default: 20)
            timezone: IANA timezone cron expressions are evaluated in
            isolate_environment: Keep per-invocation environments out of
                ``os.environ`` (False replaces ``os.environ`` on every firing)
            enforce_timeout: Report a timeout failure at each firing's deadline
            logger: Custom logger (uses default if None)
            on_success: Hook called with (record, result) after a success
            on_failure: Hook called with (record, error) after a failure

        Raises:
            pydantic.ValidationError: If ``service`` is an invalid mapping
            ValueError: If max_workers is less than 1
        """
        if not isinstance(service, ServiceConfig):
            service = ServiceConfig.model_validate(service)

        self.service = service
        base_logger = logger or _default_logger
        self.logger = ContextLogger(base_logger, {"component": "OfflineScheduler"})

        self._registry_builder = ScheduleRegistryBuilder(
            provider=service.provider,
            logger=self.logger.with_context(stage="registry"),
        )
        self._async_executor = AsyncExecutor(logger=base_logger)
        self.pipeline = InvocationPipeline(
            service=service,
            resolver=resolver,
            async_executor=self._async_executor,
            logger=self.logger.with_context(stage="invoke"),
            options=options,
            isolate_environment=isolate_environment,
            enforce_timeout=enforce_timeout,
            on_success=on_success,
            on_failure=on_failure,
        )
        self.engine = TimerEngine(
            dispatch=self.pipeline.invoke,
            logger=self.logger.with_context(stage="timer"),
            max_workers=max_workers,
            timezone=timezone,
        )
        self._entries: list[FunctionSchedule] | None = None

    @property
    def entries(self) -> list[FunctionSchedule]:
        """Registry entries, built on first access."""
        if self._entries is None:
            self._entries = self._registry_builder.build(self.service.functions)
        return self._entries

    @property
    def records(self) -> list[ScheduleRecord]:
        return list(iter_records(self.entries))

    def start(self) -> int:
        """
        Register all timers and start the scheduler (non-blocking).

        Returns:
            Number of timers registered

        Raises:
            RuntimeError: If the scheduler is already running
        """
        if self.engine.is_running():
            raise RuntimeError("Scheduler is already running")

        self.logger.info("Starting scheduler", functions=len(self.entries))
        return self.engine.start(self.records)

    def run_now(self, rule_name: str) -> list[Firing]:
        """
        Invoke every record of ``rule_name`` in the calling thread.

        Disabled records are invoked too; this bypasses the timers.
        """
        return [self.pipeline.invoke(r) for r in self.records if r.rule_name == rule_name]

    def fire(self, rule_name: str) -> int:
        """Make the timers of ``rule_name`` fire now; see TimerEngine.fire."""
        return self.engine.fire(rule_name)

    def stop_rule(self, rule_name: str) -> int:
        """Remove the timers of ``rule_name``; returns the number removed."""
        return self.engine.stop(rule_name)

    def stop_all(self) -> int:
        """Remove every timer; returns the number removed."""
        return self.engine.stop_all()

    def shutdown(self, wait: bool = True) -> None:
        """Stop the timer thread and the async loop."""
        self.engine.shutdown(wait=wait)
        self.pipeline.shutdown()

    def is_running(self) -> bool:
        """Check if scheduler is running."""
        return self.engine.is_running()
