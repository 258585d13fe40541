"""Invocation context handed to handlers."""

import uuid
from collections.abc import Callable
from typing import Any

from offline_scheduler.core.execution.events import ACCOUNT_ID, REGION
from offline_scheduler.utils.time import now_millis, utc_now

MS_PER_SEC = 1000

CompletionCallback = Callable[[Any, Any], None]


class InvocationContext:
    """
    Lambda-style context object, created fresh for every firing.

    ``done(error, result)`` is the completion callback: handlers using the
    callback convention receive it as their third argument, and the
    pipeline routes every other outcome through it as well.

    Usage:
        >>> def handler(event, context):
        ...     if context.get_remaining_time_in_millis() < 1000:
        ...         return {"skipped": True}
        ...     return {"ok": True}
    """

    function_version = "$LATEST"
    is_default_function_version = True
    memory_limit_in_mb = "1024"

    def __init__(
        self,
        function_name: str,
        timeout: float,
        done: CompletionCallback,
        environment: dict[str, str] | None = None,
        clock: Callable[[], int] = now_millis,
    ) -> None:
        """
        Initialize invocation context.

        Args:
            function_name: Declared function id
            timeout: Effective timeout in seconds
            done: Completion callback receiving ``(error, result)``
            environment: Environment snapshot for this invocation
            clock: Epoch-milliseconds clock
        """
        self.function_name = function_name
        self.aws_request_id = str(uuid.uuid4())
        self.invoke_id = str(uuid.uuid4())
        self.log_group_name = f"/aws/lambda/{function_name}"
        self.log_stream_name = f"{utc_now():%Y/%m/%d}/[{self.function_version}]{uuid.uuid4().hex}"
        self.invoked_function_arn = (
            f"arn:aws:lambda:{REGION}:{ACCOUNT_ID}:function:{function_name}"
        )
        self.environment = dict(environment or {})
        self.identity = None
        self.client_context = None
        self.timeout = timeout

        self._clock = clock
        self._done = done
        self.deadline_ms = max(0, clock() + int(timeout * MS_PER_SEC))

    def get_remaining_time_in_millis(self) -> int:
        """Milliseconds left before the deadline; negative once it has passed."""
        return self.deadline_ms - self._clock()

    def done(self, error: Any = None, result: Any = None) -> None:
        """Signal completion. Only the first call is reported."""
        self._done(error, result)

    def succeed(self, result: Any = None) -> None:
        self.done(None, result)

    def fail(self, error: Any) -> None:
        self.done(error, None)

    def __repr__(self) -> str:
        return (
            f"<InvocationContext function_name={self.function_name!r} "
            f"aws_request_id={self.aws_request_id!r}>"
        )
