"""Domain value types."""

from .candidate import Candidate
from .context import Context, LineState
from .source import SourceMetadata, SourceStatus
from .state import CompletionState

__all__ = [
    "Candidate",
    "CompletionState",
    "Context",
    "LineState",
    "SourceMetadata",
    "SourceStatus",
]
