"""Event system for decoupled component communication.

Sources report finished work as ``SourceUpdated`` messages, and the engine
publishes lifecycle events (shown, closed, confirmed) that hosts and tools
can observe without hooking into the engine.

Example:
    ```python
    from compflow.domain.events import EventBus, CandidateConfirmed

    event_bus = EventBus()

    def on_confirm(event: CandidateConfirmed):
        print(f"{event.label} confirmed {event.count} time(s)")

    event_bus.subscribe(CandidateConfirmed, on_confirm)
    ```
"""

from .bus import EventBus
from .types import (
    CandidateConfirmed,
    CompletionClosed,
    CompletionShown,
    Event,
    SourceTriggerFailed,
    SourceUpdated,
)

__all__ = [
    "EventBus",
    "Event",
    "CandidateConfirmed",
    "CompletionClosed",
    "CompletionShown",
    "SourceTriggerFailed",
    "SourceUpdated",
]
