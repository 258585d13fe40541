"""Cron trigger backed by croniter."""

from datetime import datetime

from apscheduler.triggers.base import BaseTrigger  # type: ignore[import-untyped]
from croniter import croniter

from offline_scheduler.core.common.exceptions import InvalidExpressionError
from offline_scheduler.core.triggers.expression import normalize_cron
from offline_scheduler.utils.time import get_timezone


class CronExpressionTrigger(BaseTrigger):
    """
    APScheduler trigger firing on a canonical cron expression.

    APScheduler's own ``CronTrigger.from_crontab`` rejects the ``?``
    placeholder and numbers weekdays from Monday, so next fire times are
    computed with croniter instead.

    Usage:
        >>> trigger = CronExpressionTrigger("*/5 * * * *")
        >>> scheduler.add_job(func, trigger=trigger)
    """

    def __init__(self, expression: str, timezone: str = "UTC") -> None:
        """
        Initialize cron trigger.

        Args:
            expression: Canonical cron string (``?`` allowed)
            timezone: IANA timezone the expression is evaluated in

        Raises:
            InvalidExpressionError: If croniter rejects the expression
        """
        self.expression = expression
        self.timezone = get_timezone(timezone)
        self._cron_expr = normalize_cron(expression)

        if not croniter.is_valid(self._cron_expr):
            raise InvalidExpressionError(f"Invalid cron expression '{expression}'")

    def get_next_fire_time(
        self, previous_fire_time: datetime | None, now: datetime
    ) -> datetime | None:
        """
        Calculate next fire time.

        Args:
            previous_fire_time: Previous fire time (None on first call)
            now: Current time (timezone-aware)

        Returns:
            Next fire time in the trigger's timezone
        """
        base = (previous_fire_time or now).astimezone(self.timezone)
        return croniter(self._cron_expr, base).get_next(datetime)

    def __str__(self) -> str:
        return f"cron[{self.expression}]"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} (expression='{self.expression}', timezone='{self.timezone}')>"
