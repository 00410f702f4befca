"""Clock backed by an asyncio event loop."""

import asyncio
from typing import Callable, Optional


class AsyncioClock:
    """Schedules callbacks with ``loop.call_later``.

    The loop is resolved lazily so the clock can be created before the host
    starts its loop, as long as it is first used from inside it.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time() * 1000.0

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay_ms) / 1000.0, callback)
