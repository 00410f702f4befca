"""Deterministic clock for tests and offline replays.

Time only moves when :meth:`VirtualClock.advance` is called. Due callbacks
run in due-time order, ties in scheduling order, and callbacks scheduled
while advancing run in the same call once they fall due.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable


@dataclass(order=True)
class VirtualTimer:
    """Callback scheduled on a :class:`VirtualClock`."""

    due: float
    sequence: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class VirtualClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[VirtualTimer] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> VirtualTimer:
        timer = VirtualTimer(self._now + max(0.0, delay_ms), next(self._sequence), callback)
        heapq.heappush(self._queue, timer)
        return timer

    def advance(self, ms: float = 0.0) -> int:
        """Move time forward by ``ms`` and run everything that falls due.

        Returns:
            Number of callbacks that ran
        """
        target = self._now + max(0.0, ms)
        ran = 0
        while self._queue and self._queue[0].due <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = max(self._now, timer.due)
            timer.callback()
            ran += 1
        self._now = target
        return ran

    def run_pending(self) -> int:
        """Run callbacks that are due now without moving time."""
        return self.advance(0.0)

    def run_all(self, limit: int = 10_000) -> int:
        """Advance until no timers are left.

        Raises:
            RuntimeError: If more than ``limit`` callbacks run, which means
                something keeps rescheduling itself
        """
        ran = 0
        while self.pending:
            next_due = min(t.due for t in self._queue if not t.cancelled)
            ran += self.advance(next_due - self._now)
            if ran > limit:
                raise RuntimeError(f"VirtualClock.run_all exceeded {limit} callbacks")
        return ran

    @property
    def pending(self) -> int:
        """Number of scheduled, not cancelled callbacks."""
        return sum(1 for timer in self._queue if not timer.cancelled)
