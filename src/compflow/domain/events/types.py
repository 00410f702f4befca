"""Event types for the event bus system.

This module defines the events the engine publishes and consumes. Sources
never call back into the display pipeline directly: their asynchronous
completions travel as ``SourceUpdated`` messages.
"""

import time
from dataclasses import dataclass, field


@dataclass
class Event:
    """Base class for all events.

    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass
class SourceUpdated(Event):
    """A source finished asynchronous production and has new items.

    Attributes:
        source_id: Identifier of the source that produced the update
        sequence: Position of the message in the update queue (1-based)
    """

    source_id: int
    sequence: int = 0


@dataclass
class SourceTriggerFailed(Event):
    """A source raised while being triggered; other sources kept running."""

    source_id: int
    source_name: str
    error: str


@dataclass
class CompletionShown(Event):
    """The popup was rendered with ``count`` candidates."""

    start_offset: int
    count: int
    preselected: bool = False


@dataclass
class CompletionClosed(Event):
    """The popup was closed (empty result or explicit close)."""


@dataclass
class CandidateConfirmed(Event):
    """The user confirmed a candidate.

    Attributes:
        label: History label of the confirmed candidate
        source_id: Owning source
        count: Confirmation count for ``label`` after this confirmation
    """

    label: str
    source_id: int
    count: int
