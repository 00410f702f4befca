"""
Display pipeline: wait for slow sources, merge, rank, hand off to the host.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from compflow.domain.events import CompletionClosed, CompletionShown
from compflow.domain.protocols import CompletionSource, RenderMode
from compflow.domain.types import Candidate, Context, SourceStatus
from compflow.logger import get_logger

from .merge import merge_candidates
from .ranking import rank_candidates
from .scheduler import noop

if TYPE_CHECKING:
    from .engine import CompletionEngine

logger = get_logger("display")

PROCESSING_KEY = "display:processing"
FILTER_KEY = "display:filter"


class DisplayPipeline:
    """Two-phase display cycle.

    Phase A postpones the cycle while an enabled source is still processing
    and within its timeout. Phase B throttles the merge; the merge callback
    drops itself when the start offset moved since it was scheduled.
    """

    def __init__(self, engine: CompletionEngine) -> None:
        self._engine = engine

    def display(self, context: Context) -> None:
        engine = self._engine
        scheduler = engine.scheduler
        if engine.should_ignore():
            scheduler.throttle(FILTER_KEY, 0, noop)
            return

        scheduler.debounce(PROCESSING_KEY, 0, noop)

        config = engine.config
        completed: list[CompletionSource] = []
        for source in engine.registry.get_sources():
            if source.status == SourceStatus.PROCESSING:
                remaining = config.source_timeout - source.get_processing_time()
                if remaining > 0:
                    logger.debug(f"Waiting {remaining:.0f}ms for source {source.name!r}")
                    scheduler.debounce(PROCESSING_KEY, remaining + 1, lambda: self.display(context))
                    return
            elif source.status == SourceStatus.COMPLETED:
                completed.append(source)

        start_offset = self.start_offset(context)
        delay = config.throttle_time if self.is_completing(context) else 1
        scheduler.throttle(FILTER_KEY, delay, lambda: self._filter(context, start_offset, completed))

    def _filter(self, context: Context, start_offset: int, sources: Sequence[CompletionSource]) -> None:
        engine = self._engine
        if engine.should_ignore():
            return
        if start_offset != self.start_offset(context):
            logger.debug(f"Dropping stale display cycle (offset {start_offset} moved)")
            return

        items = merge_candidates(context, start_offset, sources, engine.config)
        items = rank_candidates(items, engine.history, engine.comparator)

        if not items:
            self.show(0, [])
        else:
            self.show(start_offset, items)

    def show(self, start_offset: int, items: Sequence[Candidate]) -> None:
        """Hand ``items`` to the host at the next safe scheduling point."""
        items = tuple(items)
        self._engine.scheduler.call_soon(lambda: self._show_now(start_offset, items))

    def _show_now(self, start_offset: int, items: tuple[Candidate, ...]) -> None:
        engine = self._engine
        if engine.should_ignore():
            return

        host = engine.host
        state = engine.state
        state.current_offset = start_offset
        state.current_items = items

        popup_visible = host.is_popup_visible()
        if popup_visible or items:
            preselect = False
            if items:
                policy = engine.config.preselect
                preselect = (policy == "enable" and items[0].preselect) or policy == "always"

            prior_mode = host.get_render_mode()
            host.set_render_mode(RenderMode.PREVIEW_INSERT.value if preselect else RenderMode.NO_AUTO_SELECT.value)
            try:
                host.render(max(1, start_offset), items)
            finally:
                host.set_render_mode(prior_mode)

            if items:
                engine.events.publish(CompletionShown(start_offset=start_offset, count=len(items), preselected=preselect))
            else:
                engine.events.publish(CompletionClosed())

            if not popup_visible and preselect:
                engine.selection.select(0, documentation=True)

        if start_offset == 0 or not items:
            host.close_documentation_panel()

    def clear_presenter(self) -> None:
        """Close the popup and documentation panel right away.

        Not gated by the ignore-predicate: leaving insert mode must still
        take the popup down.
        """
        host = self._engine.host
        host.close_documentation_panel()
        if host.is_popup_visible():
            host.render(1, ())
            self._engine.events.publish(CompletionClosed())

    def start_offset(self, context: Context) -> int:
        """Leftmost start column among completed sources, capped at the cursor."""
        offset = context.col
        for source in self._engine.registry.get_sources():
            if source.status == SourceStatus.COMPLETED:
                offset = min(offset, source.get_start_offset())
        return offset

    def is_completing(self, context: Context) -> bool:
        """True when a completed source has candidates for ``context``."""
        for source in self._engine.registry.get_sources():
            if source.status == SourceStatus.COMPLETED and source.get_filtered_items(context):
                return True
        return False
