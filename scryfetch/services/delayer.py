"""
Dispatch throttle for outbound API calls.

Operations submitted to a Delayer start in submission order, at least
`delay` seconds apart. Only start times are spaced: an operation that runs
longer than the delay overlaps with the ones started after it.
"""

import asyncio
import logging
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Operation = Callable[[], Awaitable[Any]]


class Delayer:
    """
    FIFO queue of pending operations plus a dispatcher task.

    The dispatcher is started on the first submit and exits when the queue
    drains; the next submit starts a new one. The spacing carries over, so
    a submit right after a drain still waits out the remaining interval.
    """

    def __init__(self, delay: float) -> None:
        """
        Initialize the delayer.

        Args:
            delay: Minimum interval between operation starts, in seconds.
        """
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")

        self.delay = delay
        self._pending: deque[tuple[Operation, asyncio.Future[Any]]] = deque()
        self._dispatcher: asyncio.Task[None] | None = None
        self._last_start: float | None = None
        self._running: set[asyncio.Task[None]] = set()

    def submit(self, operation: Callable[[], Awaitable[T]]) -> "asyncio.Future[T]":
        """
        Queue an operation for throttled execution.

        Args:
            operation: Zero-argument callable returning an awaitable

        Returns:
            Future resolved with the operation's result, or failed with its
            exception. A failing operation does not affect the others.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[T] = loop.create_future()
        self._pending.append((operation, future))

        if self._dispatcher is None or self._dispatcher.done():
            self._dispatcher = loop.create_task(self._dispatch_pending())

        return future

    async def _dispatch_pending(self) -> None:
        loop = asyncio.get_running_loop()

        while self._pending:
            if self._last_start is not None:
                # Timers may fire marginally early, so re-check after waking
                while (wait := self._last_start + self.delay - loop.time()) > 0:
                    await asyncio.sleep(wait)

            operation, future = self._pending.popleft()
            logger.debug("Dispatching operation, %d still queued", len(self._pending))
            self._last_start = loop.time()

            task = loop.create_task(self._run(operation, future))
            self._running.add(task)
            task.add_done_callback(self._running.discard)

    @staticmethod
    async def _run(operation: Operation, future: asyncio.Future[Any]) -> None:
        try:
            result = await operation()
        except Exception as e:
            if not future.done():
                future.set_exception(e)
            return

        if not future.done():
            future.set_result(result)
