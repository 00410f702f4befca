"""Tests for VirtualClock."""

import asyncio

import pytest

from compflow.infrastructure.clock import AsyncioClock, VirtualClock


def test_advance_runs_due_callbacks_in_order():
    clock = VirtualClock()
    calls = []
    clock.call_later(20, lambda: calls.append("b"))
    clock.call_later(10, lambda: calls.append("a"))
    clock.call_later(10, lambda: calls.append("a2"))
    clock.call_later(30, lambda: calls.append("c"))

    ran = clock.advance(20)

    assert calls == ["a", "a2", "b"]
    assert ran == 3
    assert clock.now() == 20
    assert clock.pending == 1


def test_callbacks_scheduled_while_advancing_run_when_due():
    clock = VirtualClock()
    calls = []

    def first():
        calls.append(("first", clock.now()))
        clock.call_later(5, lambda: calls.append(("second", clock.now())))

    clock.call_later(10, first)
    clock.advance(15)

    assert calls == [("first", 10), ("second", 15)]


def test_cancelled_timer_does_not_run():
    clock = VirtualClock()
    calls = []
    timer = clock.call_later(5, lambda: calls.append("x"))
    timer.cancel()

    clock.advance(10)

    assert calls == []
    assert clock.pending == 0


def test_run_all_drains_queue():
    clock = VirtualClock(start=100)
    calls = []
    clock.call_later(50, lambda: calls.append(clock.now()))
    clock.call_later(500, lambda: calls.append(clock.now()))

    clock.run_all()

    assert calls == [150, 600]


def test_run_all_detects_runaway_rescheduling():
    clock = VirtualClock()

    def again():
        clock.call_later(1, again)

    clock.call_later(1, again)
    with pytest.raises(RuntimeError):
        clock.run_all(limit=50)


@pytest.mark.asyncio
async def test_asyncio_clock_runs_callbacks_on_loop():
    clock = AsyncioClock()
    fired = asyncio.Event()
    start = clock.now()

    clock.call_later(5, fired.set)
    await asyncio.wait_for(fired.wait(), timeout=1.0)

    assert clock.now() - start >= 4
