"""Callback protocols for firing completion."""

from typing import Any, Protocol

from offline_scheduler.core.jobs.definition import ScheduleRecord


class OnFailureCallback(Protocol):
    """
    Protocol for firing failure callbacks.

    Args:
        record: Schedule record whose firing failed
        error: Exception that caused the failure
    """

    def __call__(self, record: ScheduleRecord, error: BaseException) -> None: ...


class OnSuccessCallback(Protocol):
    """
    Protocol for firing success callbacks.

    Args:
        record: Schedule record whose firing succeeded
        result: Value the handler completed with
    """

    def __call__(self, record: ScheduleRecord, result: Any) -> None: ...
