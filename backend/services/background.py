"""
Best-effort background tasks.

Work submitted here is not awaited by the request that schedules it and its
failures never reach the caller: they are logged and dropped.
"""

import asyncio
import logging
from typing import Any, Coroutine, Set

logger = logging.getLogger(__name__)


class BackgroundTaskRunner:
    """
    Schedules fire-and-forget coroutines on the running event loop.

    Keeps a strong reference to each task until it finishes so it cannot be
    garbage collected mid-flight.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(self, coro: Coroutine[Any, Any, Any], description: str) -> asyncio.Task:
        """Schedule `coro`; `description` identifies it in failure logs."""
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._on_done(t, description))
        return task

    def _on_done(self, task: asyncio.Task, description: str) -> None:
        self._tasks.discard(task)

        if task.cancelled():
            logger.warning(f"Background task cancelled: {description}")
            return

        error = task.exception()
        if error is not None:
            logger.warning(f"Background task failed: {description}: {error!r}")

    async def drain(self) -> None:
        """Wait for every pending task. Failures stay logged-and-dropped."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
