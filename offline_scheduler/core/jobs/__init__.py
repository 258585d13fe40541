"""Schedule record models."""

from offline_scheduler.core.jobs.definition import DEFAULT_TIMEOUT, FunctionSchedule, ScheduleRecord

__all__ = [
    "DEFAULT_TIMEOUT",
    "FunctionSchedule",
    "ScheduleRecord",
]
