"""Translation of rate/cron schedule expressions into canonical cron strings."""

from croniter import croniter

from offline_scheduler.core.common.exceptions import TranslationError
from offline_scheduler.core.common.types import ExpressionKind
from offline_scheduler.utils.logging import ContextLogger, _default_logger

# cron(...) bodies with this many fields carry a trailing year field
CRON_LENGTH_WITH_YEAR = 6

# Unit prefix -> cron template; "minute" also matches "minutes"
RATE_TEMPLATES: dict[str, str] = {
    "minute": "*/{value} * * * *",
    "hour": "0 */{value} * * *",
    "day": "0 0 */{value} * *",
}

_logger = ContextLogger(_default_logger, {"component": "ExpressionTranslator"})


def _unwrap(expression: str, kind: ExpressionKind) -> str:
    body = expression[len(kind.prefix) :]
    if body.endswith(")"):
        body = body[:-1]
    return body.strip()


def rate_to_cron(rate: str) -> str:
    """
    Convert the body of a rate expression into a cron string.

    Args:
        rate: Rate body such as ``"5 minutes"``

    Returns:
        Canonical 5-field cron string

    Raises:
        TranslationError: Missing or unsupported unit, or a non-positive value
    """
    parts = rate.split()
    if len(parts) < 2:
        raise TranslationError(rate, "missing rate unit")

    value, unit = parts[0], parts[1]
    if not value.isdigit() or int(value) == 0:
        raise TranslationError(rate, f"rate value must be a positive integer, got '{value}'")

    for prefix, template in RATE_TEMPLATES.items():
        if unit.startswith(prefix):
            return template.format(value=int(value))

    raise TranslationError(rate, f"unsupported rate unit '{unit}'")


def convert_cron_syntax(cron_string: str) -> str:
    """
    Drop the trailing year field of a 6+ field cron body.

    Shorter expressions are returned unchanged.

    Raises:
        TranslationError: Result is not a valid cron expression
    """
    fields = cron_string.split()
    if len(fields) >= CRON_LENGTH_WITH_YEAR:
        cron_string = " ".join(fields[:-1])

    if not croniter.is_valid(normalize_cron(cron_string)):
        raise TranslationError(cron_string, "not a valid cron expression")

    return cron_string


def normalize_cron(cron_string: str) -> str:
    """Replace the ``?`` placeholder, which croniter reads as ``*``."""
    return " ".join("*" if field == "?" else field for field in cron_string.split())


def translate_or_raise(expression: str) -> str:
    """
    Translate a ``rate(...)`` or ``cron(...)`` expression.

    Raises:
        TranslationError: Expression cannot be translated
    """
    if not isinstance(expression, str):
        raise TranslationError(expression, "expression must be a string")

    expression = expression.strip()
    if expression.startswith(ExpressionKind.CRON.prefix):
        return convert_cron_syntax(_unwrap(expression, ExpressionKind.CRON))
    if expression.startswith(ExpressionKind.RATE.prefix):
        return rate_to_cron(_unwrap(expression, ExpressionKind.RATE))

    raise TranslationError(expression, "expected rate(...) or cron(...)")


def translate(expression: str, logger: ContextLogger | None = None) -> str | None:
    """
    Translate a schedule expression, logging a warning instead of raising.

    Args:
        expression: ``rate(...)`` or ``cron(...)`` expression
        logger: Logger for the failure warning (module logger if None)

    Returns:
        Canonical cron string, or None if the expression will not be scheduled

    Example:
        >>> translate("rate(5 minutes)")
        '*/5 * * * *'
        >>> translate("cron(0 10 * * ? *)")
        '0 10 * * ?'
    """
    try:
        return translate_or_raise(expression)
    except TranslationError as e:
        (logger or _logger).warning(
            f"scheduler: Invalid schedule syntax '{expression}', will not schedule",
            reason=e.reason,
        )
        return None
