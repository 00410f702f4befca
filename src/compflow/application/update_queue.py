"""
Source update queue.

Sources finish asynchronous production out-of-band. Instead of calling back
into the display pipeline directly they post a message here; messages are
delivered in FIFO order at the next scheduling point through the EventBus.
"""

from __future__ import annotations

import itertools
from collections import deque

from compflow.domain.events import EventBus, SourceUpdated
from compflow.domain.protocols import AsyncUpdateCallback
from compflow.logger import get_logger

from .scheduler import TimerScheduler

logger = get_logger("update_queue")

DRAIN_KEY = "updates:drain"


class SourceUpdateQueue:
    """FIFO of :class:`SourceUpdated` messages with a bounded delivery log."""

    def __init__(self, scheduler: TimerScheduler, event_bus: EventBus, *, log_size: int = 256) -> None:
        self._scheduler = scheduler
        self._event_bus = event_bus
        self._pending: deque[SourceUpdated] = deque()
        self._delivered: deque[SourceUpdated] = deque(maxlen=log_size)
        self._sequence = itertools.count(1)

    def callback_for(self, source_id: int) -> AsyncUpdateCallback:
        """Callback handed to a source's ``trigger``."""
        return lambda: self.post(source_id)

    def post(self, source_id: int) -> None:
        event = SourceUpdated(source_id=source_id, sequence=next(self._sequence))
        self._pending.append(event)
        logger.debug(f"Queued update #{event.sequence} from source {source_id}")
        self._scheduler.debounce(DRAIN_KEY, 0, self.drain)

    def drain(self) -> int:
        """Deliver every pending message; returns how many were delivered."""
        delivered = 0
        while self._pending:
            event = self._pending.popleft()
            self._delivered.append(event)
            self._event_bus.publish(event)
            delivered += 1
        return delivered

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def delivered(self) -> tuple[SourceUpdated, ...]:
        return tuple(self._delivered)
