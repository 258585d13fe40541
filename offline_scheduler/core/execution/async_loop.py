"""Async event loop management for deferred handler results."""

import asyncio
import logging
import threading
from collections.abc import Awaitable
from concurrent.futures import Future
from typing import Any


class AsyncExecutor:
    """
    Manages dedicated event loop for awaitables returned by handlers.

    Runs a persistent event loop in a background thread, so a handler
    returning a coroutine does not block the timer thread that fired it.

    Usage:
        >>> executor = AsyncExecutor()
        >>> executor.start()
        >>> future = executor.submit(my_async_handler(event, context))
        >>> executor.stop()
    """

    def __init__(self, logger: logging.Logger | None = None):
        """
        Initialize AsyncExecutor.

        Args:
            logger: Optional logger for debugging
        """
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._logger = logger
        self._start_lock = threading.Lock()

    def start(self) -> None:
        """
        Start dedicated event loop in background thread.

        Raises:
            RuntimeError: If event loop is already running
        """
        if self._loop is not None:
            if self._logger:
                self._logger.warning("Async loop already running")
            raise RuntimeError("AsyncExecutor is already running")

        self._loop = asyncio.new_event_loop()

        self._thread = threading.Thread(
            target=self._run_event_loop, daemon=True, name="offline-scheduler-async-loop"
        )
        self._thread.start()

        if self._logger:
            self._logger.debug("Started dedicated event loop for async handlers")

    def ensure_started(self) -> None:
        """Start the loop unless it is already running (thread-safe)."""
        if self._loop is not None:
            return
        with self._start_lock:
            if self._loop is None:
                self.start()

    def _run_event_loop(self) -> None:
        """Run event loop forever (called in dedicated thread)."""
        if self._loop is None:
            return

        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            self._loop.close()

    def submit(self, awaitable: Awaitable[Any]) -> Future:
        """
        Schedule an awaitable on the dedicated loop (non-blocking).

        Args:
            awaitable: Coroutine or any other awaitable

        Returns:
            concurrent.futures.Future resolving to the awaited value

        Raises:
            RuntimeError: If event loop is not running
        """
        if self._loop is None:
            raise RuntimeError("AsyncExecutor is not running. Call start() first.")

        if asyncio.iscoroutine(awaitable):
            coro = awaitable
        else:
            coro = _await(awaitable)
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def stop(self) -> None:
        """
        Stop dedicated event loop.

        Waits for the loop thread to finish (with timeout).
        """
        if self._loop is None:
            return

        self._loop.call_soon_threadsafe(self._loop.stop)

        if self._thread is not None:
            self._thread.join(timeout=5.0)

        self._loop = None
        self._thread = None

        if self._logger:
            self._logger.debug("Stopped dedicated event loop")

    def is_running(self) -> bool:
        """Check if event loop is running."""
        return self._loop is not None and not self._loop.is_closed()


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable
