"""Cancellable task scheduling on the asyncio event loop.

Every delayed callback, periodic callback, and background coroutine owned by a
dashboard session is created here so that teardown can revoke all of them in
one synchronous call.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

logger = logging.getLogger(__name__)

ScheduledHandle = asyncio.TimerHandle | asyncio.Task[Any]


class TaskScheduler:
    """Tracks scheduled work so it can be cancelled as a group.

    Handles are forgotten once they have run or been cancelled, so
    ``pending_count`` reflects only outstanding work.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize the scheduler.

        Args:
            loop: Event loop to schedule on. Defaults to the running loop at
                first use.
        """
        self._loop = loop
        self._handles: set[ScheduledHandle] = set()

    @property
    def pending_count(self) -> int:
        """Return the number of outstanding handles."""
        return len(self._handles)

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        """Run ``callback`` once after ``delay`` seconds.

        Args:
            delay: Seconds to wait.
            callback: Zero-argument function to call.

        Returns:
            The timer handle.
        """
        handle: asyncio.TimerHandle | None = None

        def fire() -> None:
            self._handles.discard(handle)  # type: ignore[arg-type]
            callback()

        handle = self._get_loop().call_later(delay, fire)
        self._handles.add(handle)
        return handle

    def every(self, interval: float, callback: Callable[[], None]) -> asyncio.Task[None]:
        """Run ``callback`` every ``interval`` seconds until cancelled.

        The first call happens one interval after scheduling. An exception
        raised by the callback is logged and the repetition continues.

        Args:
            interval: Seconds between calls.
            callback: Zero-argument function to call.

        Returns:
            The task driving the repetition.
        """

        async def repeat() -> None:
            while True:
                await asyncio.sleep(interval)
                try:
                    callback()
                except Exception:
                    logger.exception("Periodic callback %r failed", callback)

        return self.spawn(repeat())

    def spawn(self, coroutine: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        """Run a coroutine as a tracked task.

        Args:
            coroutine: Coroutine to run.

        Returns:
            The created task.
        """
        task = self._get_loop().create_task(coroutine)
        self._handles.add(task)
        task.add_done_callback(self._handles.discard)
        return task

    def cancel(self, handle: ScheduledHandle | None) -> None:
        """Cancel one handle. Unknown or finished handles are ignored.

        Args:
            handle: Handle returned by one of the scheduling methods.
        """
        if handle is None:
            return
        handle.cancel()
        self._handles.discard(handle)

    def cancel_all(self) -> int:
        """Cancel every outstanding handle.

        Returns:
            Number of handles cancelled.
        """
        handles = list(self._handles)
        for handle in handles:
            handle.cancel()
        self._handles.clear()
        if handles:
            logger.debug("Cancelled %d scheduled handles", len(handles))
        return len(handles)

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop
