"""
Named debounce and throttle timers.

Every timer lives in a slot keyed by a string. Scheduling under a key that
already has pending work replaces that work, which is how the engine
supersedes stale cycles without an explicit cancellation API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from compflow.domain.protocols import Clock, TimerHandle
from compflow.logger import get_logger

logger = get_logger("scheduler")


def noop() -> None:
    """Placeholder callback used to flush a timer slot."""


@dataclass
class _ThrottleSlot:
    last_fired: float
    handle: TimerHandle | None = None


class TimerScheduler:
    """Debounce/throttle primitives on top of an injectable :class:`Clock`."""

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._debounces: dict[str, TimerHandle] = {}
        self._throttles: dict[str, _ThrottleSlot] = {}

    @property
    def clock(self) -> Clock:
        return self._clock

    def debounce(self, key: str, delay_ms: float, fn: Callable[[], None]) -> None:
        """Cancel pending work under ``key`` and run ``fn`` after ``delay_ms``."""
        pending = self._debounces.pop(key, None)
        if pending is not None:
            pending.cancel()

        handle: TimerHandle | None = None

        def fire() -> None:
            if self._debounces.get(key) is handle:
                del self._debounces[key]
            self._invoke(key, fn)

        handle = self._clock.call_later(delay_ms, fire)
        self._debounces[key] = handle

    def throttle(self, key: str, delay_ms: float, fn: Callable[[], None]) -> None:
        """Run ``fn`` at most once per ``delay_ms`` window under ``key``.

        A call replaces the pending one, so the callback that finally runs is
        always the most recent. The window is measured from the last firing
        (or from the first call for a fresh key).
        """
        now = self._clock.now()
        slot = self._throttles.get(key)
        if slot is None:
            slot = _ThrottleSlot(last_fired=now)
            self._throttles[key] = slot

        if slot.handle is not None:
            slot.handle.cancel()
            slot.handle = None

        wait = max(0.0, delay_ms - (now - slot.last_fired))

        def fire() -> None:
            slot.handle = None
            slot.last_fired = self._clock.now()
            self._invoke(key, fn)

        slot.handle = self._clock.call_later(wait, fire)

    def call_soon(self, fn: Callable[[], None]) -> None:
        """Run ``fn`` at the next scheduling point, never synchronously."""
        self._clock.call_later(0, lambda: self._invoke("soon", fn))

    def is_pending(self, key: str) -> bool:
        if key in self._debounces:
            return True
        slot = self._throttles.get(key)
        return slot is not None and slot.handle is not None

    def pending_keys(self) -> list[str]:
        keys = list(self._debounces)
        keys.extend(key for key, slot in self._throttles.items() if slot.handle is not None)
        return keys

    def _invoke(self, key: str, fn: Callable[[], None]) -> None:
        try:
            fn()
        except Exception:
            logger.exception(f"Timer callback under '{key}' failed")
