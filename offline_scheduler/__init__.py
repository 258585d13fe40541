"""
offline-scheduler - run serverless schedule triggers locally

Usage:
    from offline_scheduler import OfflineScheduler, ServiceConfig

    service = ServiceConfig.model_validate({
        "service_path": "/srv/app",
        "provider": {"timeout": 10, "environment": {"STAGE": "dev"}},
        "functions": {
            "report": {
                "handler": "jobs/report.handler",
                "events": [
                    # Every 5 minutes
                    {"schedule": "rate(5 minutes)"},
                    # Daily at 10:00 UTC with a fixed payload
                    {"schedule": {"rate": "cron(0 10 * * ? *)", "name": "daily", "input": {"full": True}}},
                ],
            },
        },
    })

    scheduler = OfflineScheduler(service)
    scheduler.start()

    # Manage timers
    scheduler.fire("daily")
    scheduler.stop_rule("daily")
    scheduler.shutdown()
"""

from offline_scheduler.core import (
    FiringState,
    FunctionDeclaration,
    HandlerResolutionError,
    InvocationContext,
    InvocationError,
    InvocationTimeoutError,
    ModuleHandlerResolver,
    OfflineScheduler,
    ProviderConfig,
    ScheduleRecord,
    SchedulerError,
    ServiceConfig,
    TimerEngine,
    TranslationError,
    build_registry,
    translate,
)

__all__ = [
    # Core
    "OfflineScheduler",
    "TimerEngine",
    "ScheduleRecord",
    "FiringState",
    "InvocationContext",
    "ModuleHandlerResolver",
    "build_registry",
    "translate",
    # Configuration
    "ServiceConfig",
    "ProviderConfig",
    "FunctionDeclaration",
    # Exceptions
    "SchedulerError",
    "TranslationError",
    "HandlerResolutionError",
    "InvocationError",
    "InvocationTimeoutError",
]
