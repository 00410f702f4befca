"""
Selection and confirmation of candidates from the current list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from compflow.domain.events import CandidateConfirmed
from compflow.domain.types import Candidate
from compflow.logger import get_logger

if TYPE_CHECKING:
    from .engine import CompletionEngine

logger = get_logger("selection")

# Hosts report "nothing selected yet, first item implied" with this index.
IMPLIED_FIRST_INDEX = -2


class SelectionManager:
    """Tracks the selected candidate and drives confirmation."""

    def __init__(self, engine: CompletionEngine) -> None:
        self._engine = engine

    @property
    def selected(self) -> Candidate | None:
        return self._engine.state.selected_item

    def resolve(self, index: int) -> Candidate | None:
        """Map a 0-based host index to a candidate of the current list."""
        if index == IMPLIED_FIRST_INDEX:
            index = 0
        items = self._engine.state.current_items
        if 0 <= index < len(items):
            return items[index]
        return None

    def select(self, index: int, documentation: bool = False) -> Candidate | None:
        engine = self._engine
        item = self.resolve(index)
        if item is None:
            return None

        engine.state.selected_item = item
        if documentation and engine.config.documentation:
            source = engine.registry.find(item.source_id)
            if source is not None:
                try:
                    source.documentation(item)
                except Exception:
                    logger.exception(f"Source {source.name!r} failed to render documentation")
        return item

    def confirm(self) -> None:
        engine = self._engine
        item = engine.state.selected_item
        if item is not None:
            count = engine.history.record(item.label)
            source = engine.registry.find(item.source_id)
            if source is not None:
                try:
                    source.confirm(item)
                except Exception:
                    logger.exception(f"Source {source.name!r} failed to confirm {item.label!r}")
            engine.events.publish(CandidateConfirmed(label=item.label, source_id=item.source_id, count=count))
            logger.debug(f"Confirmed {item.label!r} (history={count})")
        engine.close()
