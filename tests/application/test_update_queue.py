"""Tests for the source update queue."""

from compflow.application.scheduler import TimerScheduler
from compflow.application.update_queue import DRAIN_KEY, SourceUpdateQueue
from compflow.domain.events import EventBus, SourceUpdated
from compflow.infrastructure.clock import VirtualClock


def make_queue(log_size=256):
    clock = VirtualClock()
    bus = EventBus()
    received = []
    bus.subscribe(SourceUpdated, received.append)
    queue = SourceUpdateQueue(TimerScheduler(clock), bus, log_size=log_size)
    return clock, queue, received


def test_post_is_delivered_on_next_tick():
    clock, queue, received = make_queue()

    queue.post(7)

    assert received == []
    assert queue.pending_count == 1
    assert queue._scheduler.is_pending(DRAIN_KEY)

    clock.run_pending()

    assert [event.source_id for event in received] == [7]
    assert queue.pending_count == 0


def test_fifo_order_and_sequence_numbers():
    clock, queue, received = make_queue()

    queue.post(3)
    queue.post(1)
    queue.callback_for(2)()
    clock.run_pending()

    assert [(event.source_id, event.sequence) for event in received] == [(3, 1), (1, 2), (2, 3)]


def test_drain_reports_count():
    _, queue, _ = make_queue()
    queue.post(1)
    queue.post(1)

    assert queue.drain() == 2
    assert queue.drain() == 0


def test_delivered_log_is_bounded():
    clock, queue, _ = make_queue(log_size=2)

    for source_id in range(5):
        queue.post(source_id)
    clock.run_pending()

    assert [event.source_id for event in queue.delivered] == [3, 4]


def test_posts_during_delivery_run_in_same_drain():
    clock, queue, received = make_queue()

    def repost(event):
        if event.source_id == 1:
            queue.post(2)

    queue._event_bus.subscribe(SourceUpdated, repost)
    queue.post(1)
    clock.run_pending()

    assert [event.source_id for event in received] == [1, 2]
