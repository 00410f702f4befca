"""Clock implementations."""

from compflow.infrastructure.clock.asyncio_clock import AsyncioClock
from compflow.infrastructure.clock.virtual import VirtualClock

__all__ = ["AsyncioClock", "VirtualClock"]
