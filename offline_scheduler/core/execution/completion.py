"""Completion reporting for firings."""

import json
from typing import Any

from offline_scheduler.core.execution.callbacks import OnFailureCallback, OnSuccessCallback
from offline_scheduler.core.jobs.definition import ScheduleRecord
from offline_scheduler.utils.logging import ContextLogger

TICK = "✔"
CROSS = "✖"


def serialize_result(result: Any) -> str:
    """JSON form of a handler result; empty for None."""
    if result is None:
        return ""
    try:
        return json.dumps(result, default=str)
    except (TypeError, ValueError):
        return repr(result)


class CompletionReporter:
    """
    Logs firing outcomes and invokes success/failure hooks.

    Reporting is terminal: hook exceptions are logged, never raised.
    """

    def __init__(
        self,
        logger: ContextLogger,
        on_success: OnSuccessCallback | None = None,
        on_failure: OnFailureCallback | None = None,
    ) -> None:
        """
        Initialize completion reporter.

        Args:
            logger: Context logger
            on_success: Hook called with (record, result) after a success
            on_failure: Hook called with (record, error) after a failure
        """
        self.logger = logger
        self.on_success = on_success
        self.on_failure = on_failure

    def report_success(self, record: ScheduleRecord, result: Any) -> None:
        self.logger.info(
            f"[{TICK}] {serialize_result(result)}".rstrip(),
            function_id=record.function_id,
            rule=record.rule_name,
        )

        if self.on_success:
            try:
                self.on_success(record, result)
            except Exception as handler_error:
                self.logger.error(
                    "Success handler raised exception",
                    error=str(handler_error),
                    function_id=record.function_id,
                    exc_info=True,
                )

    def report_failure(self, record: ScheduleRecord, error: BaseException) -> None:
        self.logger.error(
            f"[{CROSS}] {type(error).__name__}: {error}",
            function_id=record.function_id,
            rule=record.rule_name,
        )

        if self.on_failure:
            try:
                self.on_failure(record, error)
            except Exception as handler_error:
                self.logger.error(
                    "Failure handler raised exception",
                    error=str(handler_error),
                    function_id=record.function_id,
                    exc_info=True,
                )
