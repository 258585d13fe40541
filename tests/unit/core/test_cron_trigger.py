"""Unit tests for CronExpressionTrigger."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from offline_scheduler.core.common.exceptions import InvalidExpressionError
from offline_scheduler.core.triggers.cron import CronExpressionTrigger

UTC = ZoneInfo("UTC")


def dt(year, month, day, hour=0, minute=0, second=0, tz=UTC):
    return datetime(year, month, day, hour, minute, second, tzinfo=tz)


class TestCronExpressionTrigger:
    """Next fire time calculation."""

    def test_every_five_minutes(self):
        trigger = CronExpressionTrigger("*/5 * * * *")
        assert trigger.get_next_fire_time(None, dt(2025, 6, 15, 10, 32)) == dt(2025, 6, 15, 10, 35)

    def test_uses_previous_fire_time(self):
        trigger = CronExpressionTrigger("*/5 * * * *")
        next_time = trigger.get_next_fire_time(dt(2025, 6, 15, 10, 35), dt(2025, 6, 15, 10, 35, 1))
        assert next_time == dt(2025, 6, 15, 10, 40)

    def test_hourly_rate(self):
        trigger = CronExpressionTrigger("0 */2 * * *")
        assert trigger.get_next_fire_time(None, dt(2025, 6, 15, 10, 30)) == dt(2025, 6, 15, 12, 0)

    def test_question_mark_placeholder(self):
        trigger = CronExpressionTrigger("0 10 * * ?")
        assert trigger.get_next_fire_time(None, dt(2025, 6, 15, 10, 30)) == dt(2025, 6, 16, 10, 0)

    def test_sunday_is_day_zero(self):
        trigger = CronExpressionTrigger("0 9 * * 0")
        # 2025-06-15 is a Sunday
        assert trigger.get_next_fire_time(None, dt(2025, 6, 14, 12, 0)) == dt(2025, 6, 15, 9, 0)

    def test_timezone(self):
        trigger = CronExpressionTrigger("0 9 * * *", timezone="Asia/Seoul")
        next_time = trigger.get_next_fire_time(None, dt(2025, 6, 15, 0, 30))
        assert next_time == dt(2025, 6, 16, 0, 0)

    def test_invalid_expression(self):
        with pytest.raises(InvalidExpressionError):
            CronExpressionTrigger("61 * * * *")

    def test_invalid_timezone(self):
        with pytest.raises(ValueError, match="Invalid timezone"):
            CronExpressionTrigger("* * * * *", timezone="Invalid/Zone")

    def test_str(self):
        assert str(CronExpressionTrigger("*/5 * * * *")) == "cron[*/5 * * * *]"
