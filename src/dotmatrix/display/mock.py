"""Mock collaborators for development and testing.

Provides a surface that records drawing calls instead of rasterizing them
and a scheduler driven by explicit time steps.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SurfaceCall:
    """One recorded surface operation."""

    op: str
    args: tuple[float, ...]
    style: str


class RecordingSurface:
    """Surface that records every call.

    Usage:
        surface = RecordingSurface(80, 80)
        engine.paint()
        assert surface.calls[0].op == "fill_rect"
    """

    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self.calls: list[SurfaceCall] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def fill_rect(self, x: float, y: float, w: float, h: float, style: str) -> None:
        self.calls.append(SurfaceCall("fill_rect", (x, y, w, h), style))

    def fill_arc(
        self,
        cx: float,
        cy: float,
        r: float,
        start: float,
        end: float,
        style: str,
    ) -> None:
        self.calls.append(SurfaceCall("fill_arc", (cx, cy, r, start, end), style))

    def ops(self, op: str) -> list[SurfaceCall]:
        """Get recorded calls of one kind."""
        return [call for call in self.calls if call.op == op]

    def reset(self) -> None:
        """Forget recorded calls."""
        self.calls.clear()


class ManualTask:
    """Recurring callback fired by :meth:`ManualScheduler.advance`."""

    def __init__(self, callback: Callable[[], Any], period_ms: int, due: int) -> None:
        self.callback = callback
        self.period_ms = period_ms
        self.due = due
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class ManualScheduler:
    """Deterministic scheduler for tests.

    Time only moves when :meth:`advance` is called; every task due within
    the step fires once per elapsed period, in deadline order.
    """

    def __init__(self) -> None:
        self.now = 0
        self.tasks: list[ManualTask] = []

    def schedule(self, callback: Callable[[], Any], period_ms: int) -> ManualTask:
        task = ManualTask(callback, period_ms, self.now + period_ms)
        self.tasks.append(task)
        return task

    @property
    def active(self) -> list[ManualTask]:
        """Tasks that have not been cancelled."""
        return [task for task in self.tasks if not task.cancelled]

    def advance(self, ms: int) -> int:
        """Move time forward and fire due callbacks.

        Returns:
            Number of callbacks fired
        """
        target = self.now + ms
        fired = 0
        while True:
            due = [task for task in self.active if task.due <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.due)
            self.now = task.due
            task.due += task.period_ms
            task.callback()
            fired += 1
        self.now = target
        logger.debug("ManualScheduler advanced to %d ms, fired %d", self.now, fired)
        return fired
