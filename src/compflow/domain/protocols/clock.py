"""Clock protocol used by the timer scheduler."""

from typing import Callable, Protocol

__all__ = ["Clock", "TimerHandle"]


class TimerHandle(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None:
        ...


class Clock(Protocol):
    """Time source with millisecond resolution.

    Implementations decide when callbacks actually run: an event loop for
    real hosts, explicit ``advance`` calls for tests.
    """

    def now(self) -> float:
        """Current time in milliseconds."""
        ...

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms`` milliseconds."""
        ...
