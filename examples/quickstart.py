"""Offline scheduler quick start."""

import time
from pathlib import Path

from offline_scheduler import OfflineScheduler

SERVICE = {
    "service": "reports",
    "service_path": str(Path(__file__).parent / "service"),
    "provider": {
        "runtime": "python3.12",
        "timeout": 10,
        "environment": {"STAGE": "dev"},
    },
    "functions": {
        "report": {
            "handler": "jobs/report.handler",
            "events": [
                # Every minute
                {"schedule": "rate(1 minute)"},
                # Daily at 10:00 UTC with a fixed payload (year field is dropped)
                {"schedule": {"rate": "cron(0 10 * * ? *)", "name": "daily-report", "input": {"full": True}}},
            ],
        },
        "refresh": {
            "handler": "jobs/report.refresh",
            "events": [{"schedule": {"rate": "rate(2 minutes)", "name": "refresh"}}],
        },
        "cleanup": {
            "handler": "jobs/report.cleanup",
            "timeout": 3,
            "events": [{"schedule": {"rate": "rate(1 hour)", "enabled": False, "name": "cleanup"}}],
        },
    },
    "custom": {"stageVariables": {"tier": "free"}},
}


def main():
    """Run every schedule of the example service for two minutes."""
    print("=== Offline Scheduler Quick Start ===\n")

    scheduler = OfflineScheduler(
        SERVICE,
        on_failure=lambda record, error: print(f"   ✗ {record.label} failed: {error}"),
    )

    for record in scheduler.records:
        state = "enabled" if record.enabled else "disabled"
        print(f"   {record.label}: {record.expression} -> {record.cron_expression} ({state})")

    registered = scheduler.start()
    print(f"\n{registered} timer(s) registered\n")

    # Run the daily rule right away instead of waiting for 10:00 UTC
    scheduler.fire("daily-report")

    try:
        time.sleep(120)
    except KeyboardInterrupt:
        pass
    finally:
        scheduler.shutdown()
        print("\nScheduler stopped")


if __name__ == "__main__":
    main()
