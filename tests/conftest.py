"""Common test fixtures and utilities."""

import textwrap
import time
from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest

from offline_scheduler import ServiceConfig
from offline_scheduler.core.jobs.definition import ScheduleRecord


def wait_for(
    condition: Callable[[], bool],
    timeout: float = 10.0,
    interval: float = 0.05,
    error_message: str | None = None,
) -> bool:
    """
    Wait until condition is True, polling at interval (eventually pattern).

    Args:
        condition: Function that returns bool
        timeout: Maximum wait time in seconds
        interval: Polling interval in seconds
        error_message: Custom error message if timeout

    Returns:
        True if condition met

    Raises:
        AssertionError: If timeout exceeded

    Example:
        wait_for(lambda: len(calls) >= 2, timeout=10)
    """
    start = time.time()
    last_exception = None

    while time.time() - start < timeout:
        try:
            if condition():
                return True
        except Exception as e:
            last_exception = e
        time.sleep(interval)

    elapsed = time.time() - start
    if error_message is None:
        error_message = f"Condition not met within {timeout}s (elapsed: {elapsed:.2f}s)"

    if last_exception:
        error_message += f"\nLast exception: {last_exception}"

    raise AssertionError(error_message)


def eventually(
    assertion_fn: Callable[[], None],
    timeout: float = 10.0,
    interval: float = 0.05,
) -> None:
    """
    Repeatedly call assertion_fn until it passes (no exception) or timeout.

    Example:
        def check():
            assert len(calls) == 2

        eventually(check, timeout=5)
    """
    start = time.time()
    last_error = None

    while time.time() - start < timeout:
        try:
            assertion_fn()
            return
        except AssertionError as e:
            last_error = e
            time.sleep(interval)

    elapsed = time.time() - start
    if last_error:
        raise AssertionError(
            f"Assertions never passed within {timeout}s (elapsed: {elapsed:.2f}s)\n"
            f"Last assertion error: {last_error}"
        )
    raise AssertionError(f"No assertions passed within {timeout}s")


def write_handler(root: Path, relative: str, source: str) -> Path:
    """Write a handler module under ``root`` and return its path."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(source))
    return path


@pytest.fixture
def service_dict(tmp_path):
    """Raw service configuration with two scheduled functions and one http function."""
    return {
        "service": "reports",
        "service_path": str(tmp_path),
        "provider": {
            "runtime": "python3.12",
            "timeout": 10,
            "environment": {"STAGE": "dev", "SHARED": "provider"},
        },
        "functions": {
            "report": {
                "handler": "jobs/report.handler",
                "environment": {"SHARED": "function"},
                "events": [
                    {"schedule": "rate(5 minutes)"},
                    {
                        "schedule": {
                            "rate": "cron(0 10 * * ? *)",
                            "name": "daily-report",
                            "input": {"full": True},
                        }
                    },
                ],
            },
            "cleanup": {
                "handler": "jobs/cleanup.handler",
                "timeout": 3,
                "events": [
                    {"schedule": {"rate": "rate(1 hour)", "enabled": False, "name": "hourly-cleanup"}},
                ],
            },
            "api": {
                "handler": "api.handler",
                "events": [{"http": {"path": "/", "method": "get"}}],
            },
        },
        "custom": {"stageVariables": {"tier": "free"}},
    }


@pytest.fixture
def service(service_dict):
    return ServiceConfig.model_validate(service_dict)


@pytest.fixture
def mock_logger():
    """Create a mock context logger."""
    logger = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.debug = Mock()
    logger.with_context = Mock(return_value=logger)
    return logger


@pytest.fixture
def mock_async_executor():
    """Create a mock async executor."""
    executor = Mock()
    executor.submit = Mock()
    executor.ensure_started = Mock()
    executor.stop = Mock()
    return executor


@pytest.fixture
def record():
    """Enabled record for the ``report`` function."""
    return ScheduleRecord(
        function_id="report",
        rule_name="report",
        cron_expression="*/5 * * * *",
        expression="rate(5 minutes)",
        timeout=10,
    )


def logged_messages(mock_method) -> list[str]:
    """First positional argument of every call to a mocked log method."""
    return [c.args[0] for c in mock_method.call_args_list]
