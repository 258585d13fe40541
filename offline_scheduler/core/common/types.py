"""Common type definitions for the offline scheduler."""

from enum import Enum


class ExpressionKind(Enum):
    """Schedule expression syntax."""

    RATE = "rate"  # rate(5 minutes)
    CRON = "cron"  # cron(0 10 * * ? *)

    @property
    def prefix(self) -> str:
        return f"{self.value}("


class FiringState(str, Enum):
    """Lifecycle of a single firing."""

    PENDING = "pending"  # Timer fired, nothing resolved yet
    RESOLVING = "resolving"  # Asking the resolver for a handler
    INVOKING = "invoking"  # Handler called, waiting for completion
    COMPLETED = "completed"  # Completion reported (success or failure)

    def __str__(self) -> str:
        return self.value

    def is_terminal(self) -> bool:
        return self is FiringState.COMPLETED
