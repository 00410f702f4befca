"""Application layer: the completion engine and its collaborators."""

from .display import DisplayPipeline
from .engine import CompletionEngine
from .history import HistoryStore
from .ranking import compare_candidates, rank_candidates
from .scheduler import TimerScheduler
from .selection import SelectionManager
from .source_registry import SourceRegistry
from .update_queue import SourceUpdateQueue

__all__ = [
    "CompletionEngine",
    "DisplayPipeline",
    "HistoryStore",
    "SelectionManager",
    "SourceRegistry",
    "SourceUpdateQueue",
    "TimerScheduler",
    "compare_candidates",
    "rank_candidates",
]
