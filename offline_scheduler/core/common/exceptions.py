"""Custom exceptions for the offline scheduler."""


class SchedulerError(Exception):
    """Base exception for scheduler errors."""

    pass


# ------------------------------------------------------------------------
# Configuration errors
# ------------------------------------------------------------------------


class SchedulerConfigurationError(SchedulerError):
    """Invalid schedule or service configuration."""

    pass


class TranslationError(SchedulerConfigurationError):
    """Rate or cron expression cannot be translated to a cron string."""

    def __init__(self, expression: object, reason: str) -> None:
        self.expression = expression
        self.reason = reason
        super().__init__(f"Invalid schedule expression '{expression}': {reason}")


class InvalidExpressionError(SchedulerConfigurationError):
    """Canonical cron expression rejected by the cron trigger."""

    pass


# ------------------------------------------------------------------------
# Per-firing errors (reported through the completion callback)
# ------------------------------------------------------------------------


class InvocationFailure(SchedulerError):
    """Base class for errors that terminate a single firing."""

    pass


class HandlerResolutionError(InvocationFailure):
    """Handler resolver could not produce a callable."""

    pass


class InvocationError(InvocationFailure):
    """Handler raised or rejected during invocation."""

    pass


class InvocationTimeoutError(InvocationFailure):
    """Handler did not signal completion before its deadline."""

    def __init__(self, function_id: str, timeout_seconds: float) -> None:
        self.function_id = function_id
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Function '{function_id}' did not complete within {timeout_seconds}s. "
            "The handler cannot be forcefully stopped and may continue running."
        )


# ------------------------------------------------------------------------
# State errors
# ------------------------------------------------------------------------


class SchedulerStateError(SchedulerError):
    """Operation not allowed in the current engine state."""

    pass
