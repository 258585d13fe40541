"""Common components shared across core modules."""

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
from offline_scheduler.core.common.types import ExpressionKind, FiringState

__all__ = [
    # Types
    "ExpressionKind",
    "FiringState",
    # Exceptions
    "SchedulerError",
    "SchedulerConfigurationError",
    "TranslationError",
    "InvalidExpressionError",
    "InvocationFailure",
    "HandlerResolutionError",
    "InvocationError",
    "InvocationTimeoutError",
    "SchedulerStateError",
]
