"""Unit tests for the exception hierarchy."""

from offline_scheduler.core.common.exceptions import (
    HandlerResolutionError,
    InvalidExpressionError,
    InvocationError,
    InvocationFailure,
    InvocationTimeoutError,
    SchedulerConfigurationError,
    SchedulerError,
    SchedulerStateError,
    TranslationError,
)


class TestSchedulerError:
    def test_base_class_hierarchy(self):
        assert issubclass(TranslationError, SchedulerConfigurationError)
        assert issubclass(InvalidExpressionError, SchedulerConfigurationError)
        assert issubclass(SchedulerConfigurationError, SchedulerError)

        assert issubclass(HandlerResolutionError, InvocationFailure)
        assert issubclass(InvocationError, InvocationFailure)
        assert issubclass(InvocationTimeoutError, InvocationFailure)
        assert issubclass(InvocationFailure, SchedulerError)

        assert issubclass(SchedulerStateError, SchedulerError)

    def test_translation_error_message(self):
        error = TranslationError("rate(2 fortnights)", "unsupported rate unit 'fortnights'")

        assert error.expression == "rate(2 fortnights)"
        assert error.reason == "unsupported rate unit 'fortnights'"
        assert str(error) == (
            "Invalid schedule expression 'rate(2 fortnights)': unsupported rate unit 'fortnights'"
        )

    def test_timeout_error_message(self):
        error = InvocationTimeoutError("report", 6)

        assert error.function_id == "report"
        assert error.timeout_seconds == 6
        assert "did not complete within 6s" in str(error)
