"""Timer engine: one recurring APScheduler job per schedule record."""

import itertools
import threading
from collections.abc import Callable, Iterable
from typing import Any

from apscheduler.executors.pool import ThreadPoolExecutor  # type: ignore[import-untyped]
from apscheduler.schedulers.background import BackgroundScheduler  # type: ignore[import-untyped]

from offline_scheduler.core.common.exceptions import InvalidExpressionError, SchedulerStateError
from offline_scheduler.core.jobs.definition import ScheduleRecord
from offline_scheduler.core.triggers.cron import CronExpressionTrigger
from offline_scheduler.utils.logging import ContextLogger, _default_logger
from offline_scheduler.utils.time import utc_now

Dispatch = Callable[[ScheduleRecord], Any]


class TimerEngine:
    """
    Registers independent cron timers and dispatches their firings.

    Every enabled record gets its own job, even when several records share
    a function or a cron expression. Jobs never coalesce and allow
    overlapping instances, so a slow handler does not hold back the next
    firing of its rule.

    Usage:
        >>> engine = TimerEngine(dispatch=pipeline.invoke)
        >>> engine.start(records)  # returns once timers are registered
        >>> engine.stop("nightly-report")
        >>> engine.shutdown()
    """

    DEFAULT_MAX_WORKERS = 20
    MAX_OVERLAPPING_FIRINGS = 1000

    def __init__(
        self,
        dispatch: Dispatch,
        logger: ContextLogger | None = None,
        max_workers: int | None = None,
        timezone: str = "UTC",
    ) -> None:
        """
        Initialize timer engine.

        Args:
            dispatch: Called with the record on every firing
            logger: Context logger
            max_workers: Worker threads running firings (default: 20)
            timezone: IANA timezone cron expressions are evaluated in

        Raises:
            ValueError: If max_workers is less than 1
        """
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be >= 1")

        self.dispatch = dispatch
        self.logger = logger or ContextLogger(_default_logger, {"component": "TimerEngine"})
        self.max_workers = max_workers or self.DEFAULT_MAX_WORKERS
        self.timezone = timezone

        self._apscheduler = BackgroundScheduler(
            timezone=timezone,
            daemon=True,
            executors={"default": ThreadPoolExecutor(max_workers=self.max_workers)},
            job_defaults={
                "coalesce": False,
                "max_instances": self.MAX_OVERLAPPING_FIRINGS,
            },
        )
        self._job_ids: dict[str, list[str]] = {}
        self._records: dict[str, ScheduleRecord] = {}
        self._lock = threading.RLock()
        self._sequence = itertools.count(1)

    def start(self, records: Iterable[ScheduleRecord]) -> int:
        """
        Register a timer for every enabled record and start the scheduler.

        Disabled records are logged and skipped. Returns without waiting
        for any firing.

        Args:
            records: Schedule records, in logging order

        Returns:
            Number of timers registered by this call
        """
        registered = 0
        for record in records:
            if self._register(record):
                registered += 1

        if not self._apscheduler.running:
            self._apscheduler.start()

        return registered

    def _register(self, record: ScheduleRecord) -> bool:
        if record.cron_expression is None:
            self.logger.debug("scheduler: record has no cron expression", rule=record.rule_name)
            return False

        if not record.enabled:
            self.logger.info(
                f"scheduler: not scheduling {record.label} with {record.cron_expression}, "
                "since it's disabled"
            )
            return False

        try:
            trigger = CronExpressionTrigger(record.cron_expression, timezone=self.timezone)
        except InvalidExpressionError as e:
            self.logger.error(f"scheduler: cannot schedule {record.label}: {e}")
            return False

        self.logger.info(f"scheduler: scheduling {record.label} with {record.cron_expression}")

        with self._lock:
            job_id = f"{record.function_id}:{record.rule_name}:{next(self._sequence)}"
            self._apscheduler.add_job(
                func=self._fire,
                trigger=trigger,
                args=(record,),
                id=job_id,
                name=record.label,
            )
            self._job_ids.setdefault(record.rule_name, []).append(job_id)
            self._records[job_id] = record
        return True

    def _fire(self, record: ScheduleRecord) -> None:
        """Timer callback; firings never propagate errors into the scheduler."""
        try:
            self.dispatch(record)
        except Exception as e:
            self.logger.error(
                "Dispatch raised exception",
                error=str(e),
                function_id=record.function_id,
                rule=record.rule_name,
                exc_info=True,
            )

    def fire(self, rule_name: str) -> int:
        """
        Make every timer of ``rule_name`` fire now.

        Returns:
            Number of timers moved

        Raises:
            SchedulerStateError: If the engine is not running
        """
        if not self.is_running():
            raise SchedulerStateError("TimerEngine is not running. Call start() first.")

        with self._lock:
            job_ids = list(self._job_ids.get(rule_name, []))
            for job_id in job_ids:
                self._apscheduler.modify_job(job_id, next_run_time=utc_now())
        return len(job_ids)

    def stop(self, rule_name: str) -> int:
        """
        Remove every timer registered for ``rule_name``.

        In-flight invocations are not interrupted.

        Returns:
            Number of timers removed
        """
        with self._lock:
            job_ids = self._job_ids.pop(rule_name, [])
            for job_id in job_ids:
                self._apscheduler.remove_job(job_id)
                self._records.pop(job_id, None)

        if job_ids:
            self.logger.info(f"scheduler: stopped {len(job_ids)} timer(s) for rule {rule_name}")
        return len(job_ids)

    def stop_all(self) -> int:
        """Remove every timer; returns the number removed."""
        with self._lock:
            rule_names = list(self._job_ids)
        return sum(self.stop(rule_name) for rule_name in rule_names)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the scheduler thread, optionally waiting for running firings."""
        if self._apscheduler.running:
            self._apscheduler.shutdown(wait=wait)

    def is_running(self) -> bool:
        """Check if the scheduler thread is running."""
        return bool(self._apscheduler.running)

    def scheduled_records(self) -> list[ScheduleRecord]:
        """Records with a registered timer, in registration order."""
        with self._lock:
            return list(self._records.values())

    def get_jobs(self) -> list:
        """APScheduler jobs backing the registered timers."""
        return self._apscheduler.get_jobs()
