"""Core scheduler components."""

from offline_scheduler.core.common import (
    ExpressionKind,
    FiringState,
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
from offline_scheduler.core.config import (
    FunctionDeclaration,
    ProviderConfig,
    ScheduleEvent,
    ServiceConfig,
)
from offline_scheduler.core.engine import TimerEngine
from offline_scheduler.core.execution import (
    AsyncExecutor,
    Firing,
    HandlerResolver,
    InvocationContext,
    InvocationPipeline,
    ModuleHandlerResolver,
)
from offline_scheduler.core.jobs import FunctionSchedule, ScheduleRecord
from offline_scheduler.core.registry import ScheduleRegistryBuilder, build_registry, iter_records
from offline_scheduler.core.scheduler import OfflineScheduler
from offline_scheduler.core.triggers import CronExpressionTrigger, translate

__all__ = [
    # Common Types
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
    # Configuration
    "ServiceConfig",
    "ProviderConfig",
    "FunctionDeclaration",
    "ScheduleEvent",
    # Records
    "ScheduleRecord",
    "FunctionSchedule",
    "ScheduleRegistryBuilder",
    "build_registry",
    "iter_records",
    # Triggers
    "translate",
    "CronExpressionTrigger",
    # Execution
    "AsyncExecutor",
    "Firing",
    "HandlerResolver",
    "InvocationContext",
    "InvocationPipeline",
    "ModuleHandlerResolver",
    # Scheduler
    "TimerEngine",
    "OfflineScheduler",
]
