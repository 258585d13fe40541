"""Schedule expression translation and cron triggers."""

from offline_scheduler.core.triggers.cron import CronExpressionTrigger
from offline_scheduler.core.triggers.expression import (
    convert_cron_syntax,
    normalize_cron,
    rate_to_cron,
    translate,
    translate_or_raise,
)

__all__ = [
    "CronExpressionTrigger",
    "convert_cron_syntax",
    "normalize_cron",
    "rate_to_cron",
    "translate",
    "translate_or_raise",
]
