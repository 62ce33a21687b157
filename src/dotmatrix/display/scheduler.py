"""Periodic scheduling.

The display never runs its own thread; it hands the repaint callback to a
scheduler and keeps the returned handle so teardown can cancel it.
:class:`AsyncioScheduler` runs callbacks on an asyncio event loop, i.e. on
the same execution context as the code drawing on the display.
"""

import asyncio
import logging
from typing import Any, Callable, Protocol, runtime_checkable

from ..core.errors import DotMatrixError

logger = logging.getLogger(__name__)


@runtime_checkable
class TaskHandle(Protocol):
    """Handle of a recurring callback."""

    @property
    def cancelled(self) -> bool: ...

    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Runs a callback every ``period_ms`` milliseconds until cancelled."""

    def schedule(self, callback: Callable[[], Any], period_ms: int) -> TaskHandle: ...


class AsyncioTask:
    """Recurring callback on an asyncio event loop.

    Deadlines advance by a fixed period from the first one, so a slow
    callback does not make the schedule drift.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        callback: Callable[[], Any],
        period_ms: int,
    ) -> None:
        self._loop = loop
        self._callback = callback
        self._period = period_ms / 1000
        self._cancelled = False
        self._deadline = loop.time() + self._period
        self._handle = loop.call_at(self._deadline, self._run)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop further invocations."""
        if self._cancelled:
            return
        self._cancelled = True
        self._handle.cancel()
        logger.debug("Cancelled recurring callback %r", self._callback)

    def _run(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception as e:
            logger.exception("Scheduled callback error: %s", e)
        if self._cancelled:
            return
        now = self._loop.time()
        self._deadline += self._period
        if self._deadline < now:
            # Skip missed ticks instead of firing them back to back
            self._deadline = now + self._period
        self._handle = self._loop.call_at(self._deadline, self._run)


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    Usage:
        async def main():
            with DotMatrixDisplay(surface, AsyncioScheduler()) as display:
                display.set(0, 0, "red")
                await asyncio.sleep(1)
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize the scheduler.

        Args:
            loop: Event loop to use (None = the loop running at schedule time)
        """
        self._loop = loop

    def schedule(self, callback: Callable[[], Any], period_ms: int) -> AsyncioTask:
        """Run ``callback`` every ``period_ms`` milliseconds.

        Raises:
            DotMatrixError: If no loop was given and none is running
        """
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise DotMatrixError(
                    "AsyncioScheduler needs a running event loop",
                    cause=e,
                ) from e
        logger.debug("Scheduling %r every %d ms", callback, period_ms)
        return AsyncioTask(loop, callback, period_ms)
