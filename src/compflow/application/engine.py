"""
Completion engine.

One :class:`CompletionEngine` is created per host integration. It owns the
source registry, timers, history and the current popup state, and exposes
the entry points the host calls on editor events.
"""

from __future__ import annotations

import asyncio
import functools
from typing import Callable, Optional, TypeVar

from compflow.core.config import CompletionConfig
from compflow.domain.events import EventBus, SourceTriggerFailed, SourceUpdated
from compflow.domain.protocols import Clock, Comparator, CompletionSource, HostBridge
from compflow.domain.types import Candidate, CompletionState, Context
from compflow.infrastructure.clock import AsyncioClock
from compflow.logger import get_logger

from .display import FILTER_KEY, DisplayPipeline
from .history import HistoryStore
from .ranking import compare_candidates
from .scheduler import TimerScheduler, noop
from .selection import SelectionManager
from .source_registry import SourceRegistry
from .update_queue import SourceUpdateQueue

logger = get_logger("engine")

F = TypeVar("F", bound=Callable)

RESTRICTED_BUFFER_TYPES = frozenset({"prompt"})


def best_effort(method: F) -> F:
    """Log and swallow errors raised by a public entry point."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except Exception:
            logger.exception(f"CompletionEngine.{method.__name__} failed")
            return None

    return wrapper  # type: ignore[return-value]


def _default_clock() -> Clock:
    try:
        return AsyncioClock(asyncio.get_running_loop())
    except RuntimeError:
        logger.warning(
            "CompletionEngine created outside a running asyncio loop without a clock; "
            "entry points will fail until they are called from inside the loop"
        )
        return AsyncioClock()


class CompletionEngine:
    """Coordinates sources, timers and the host popup."""

    def __init__(
        self,
        host: HostBridge,
        config: Optional[CompletionConfig] = None,
        clock: Optional[Clock] = None,
        comparator: Comparator = compare_candidates,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.host = host
        self.comparator = comparator
        self._config = config or CompletionConfig()
        self.events = event_bus or EventBus()
        self.scheduler = TimerScheduler(clock or _default_clock())
        self.registry = SourceRegistry(self._is_source_enabled, self._priority_of)
        self.history = HistoryStore()
        self.state = CompletionState()
        self.updates = SourceUpdateQueue(self.scheduler, self.events)
        self.display_pipeline = DisplayPipeline(self)
        self.selection = SelectionManager(self)

        self.events.subscribe(SourceUpdated, self._on_source_updated)

    @property
    def config(self) -> CompletionConfig:
        return self._config

    @property
    def clock(self) -> Clock:
        return self.scheduler.clock

    def update_config(self, config: CompletionConfig) -> None:
        """Swap the configuration snapshot; the source view is rebuilt lazily."""
        self._config = config
        self.registry.invalidate()
        logger.info("Completion configuration updated")

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    @best_effort
    def register_source(self, source: CompletionSource) -> None:
        self.registry.register(source)

    @best_effort
    def unregister_source(self, source_id: int) -> None:
        self.registry.unregister(source_id)

    @best_effort
    def enter_insert(self) -> None:
        self.close()
        self.registry.invalidate()

    @best_effort
    def leave_insert(self) -> None:
        self.close()
        self.registry.invalidate()

    @best_effort
    def complete(self, manual: bool = False) -> None:
        """React to a keystroke (or an explicit request when ``manual``)."""
        if self.should_ignore():
            self.scheduler.throttle(FILTER_KEY, 0, noop)
            return

        context = self._new_context(manual)
        previous = self.state.context

        was_completing = self.display_pipeline.is_completing(previous)
        if was_completing and not self.host.is_popup_visible():
            # The host closed the popup on its own; put it back.
            self.display_pipeline.show(self.state.current_offset, self.state.current_items)

        effective_manual = manual or (was_completing and not self.config.autocomplete)
        if effective_manual or previous.should_auto_complete(context):
            if not self._trigger(context):
                self._display(context)
        else:
            self.host.close_documentation_panel()

        self.state.context = context

    @best_effort
    def select(self, index: int, documentation: bool = False) -> Optional[Candidate]:
        return self.selection.select(index, documentation)

    @best_effort
    def confirm(self) -> None:
        self.selection.confirm()

    @best_effort
    def close(self) -> None:
        """Reset everything to the idle state. Safe to call repeatedly."""
        for source in self.registry.get_sources():
            try:
                source.clear()
            except Exception:
                logger.exception(f"Source {source.name!r} failed to clear")

        self.state.reset()
        self.display_pipeline.clear_presenter()
        self.display_pipeline.show(0, [])

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def should_ignore(self) -> bool:
        host = self.host
        return (
            host.is_manual_selection_active()
            or not host.current_mode().startswith("i")
            or host.current_buffer_type() in RESTRICTED_BUFFER_TYPES
        )

    def start_offset(self, context: Context) -> int:
        return self.display_pipeline.start_offset(context)

    def is_completing(self, context: Context) -> bool:
        return self.display_pipeline.is_completing(context)

    def _trigger(self, context: Context) -> bool:
        if self.should_ignore():
            return False

        started = False
        for source in self.registry.get_sources():
            try:
                started = source.trigger(context, self.updates.callback_for(source.id)) or started
            except Exception as e:
                logger.exception(f"Source {source.name!r} failed to trigger")
                self.events.publish(SourceTriggerFailed(source_id=source.id, source_name=source.name, error=str(e)))
        return started

    def _display(self, context: Context) -> None:
        self.display_pipeline.display(context)

    def _on_source_updated(self, event: SourceUpdated) -> None:
        self._display(self._new_context(manual=False))

    def _new_context(self, manual: bool) -> Context:
        return Context.from_line_state(self.host.line_state(), manual=manual, time=self.clock.now())

    def _is_source_enabled(self, name: str) -> bool:
        return self._config.is_source_enabled(name)

    def _priority_of(self, source: CompletionSource) -> int:
        override = self._config.source_config(source.name)
        if override is not None and override.priority is not None:
            return override.priority
        return source.get_metadata().priority
