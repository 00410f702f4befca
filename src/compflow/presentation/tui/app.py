"""
CompletionDemoApp - interactive playground for the completion engine.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Input, OptionList, Static

from compflow.application import CompletionEngine
from compflow.application.sources import BufferWordsSource, WordListSource
from compflow.core.config import CompletionConfig
from compflow.domain.events import CandidateConfirmed, SourceTriggerFailed
from compflow.infrastructure.clock import AsyncioClock
from compflow.logger import get_logger

from .host import TextualHost

logger = get_logger("tui.app")


class CompletionDemoApp(App):
    """
    Single-line editor with an engine-driven completion popup.

    Layout:
    ┌──────────────────────────────┐
    │           Header             │
    ├──────────────────────────────┤
    │  Input                       │
    │  Popup (OptionList)          │
    │  Documentation               │
    │  History                     │
    ├──────────────────────────────┤
    │           Footer             │
    └──────────────────────────────┘
    """

    TITLE = "compflow"
    SUB_TITLE = "Completion engine playground"

    CSS = """
    #popup {
        height: auto;
        max-height: 12;
        border: round $accent;
    }
    #docs {
        border: round $secondary;
        padding: 0 1;
    }
    #history {
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("ctrl+n", "next_candidate", "Next", priority=True),
        Binding("ctrl+p", "previous_candidate", "Previous", priority=True),
        Binding("ctrl+y", "confirm", "Confirm", priority=True),
        Binding("ctrl+space,ctrl+@", "manual_complete", "Complete", priority=True),
        Binding("escape", "close", "Close", priority=True),
    ]

    def __init__(self, words: Sequence[str] = (), config: CompletionConfig | None = None) -> None:
        super().__init__()
        self._words = list(words)
        self._config = config or CompletionConfig(source={"buffer": True, "words": True})
        self._suppress_change = False
        self.engine: CompletionEngine | None = None
        self.host: TextualHost | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical():
            yield Input(placeholder="Start typing…", id="editor")
            yield OptionList(id="popup")
            yield Static(id="docs")
            yield Static(id="history")
        yield Footer()

    def on_mount(self) -> None:
        editor = self.query_one("#editor", Input)
        popup = self.query_one("#popup", OptionList)
        docs = self.query_one("#docs", Static)
        popup.display = False
        docs.display = False

        self.host = TextualHost(editor, popup, docs)
        clock = AsyncioClock(asyncio.get_running_loop())
        self.engine = CompletionEngine(self.host, config=self._config, clock=clock)
        self.engine.events.subscribe(CandidateConfirmed, self._on_confirmed)
        self.engine.events.subscribe(SourceTriggerFailed, self._on_trigger_failed)

        self.engine.register_source(
            BufferWordsSource(
                "buffer",
                clock,
                lambda: editor.value,
                priority=10,
                menu="[B]",
                min_length=self._config.min_length,
                documentation_handler=self.host.show_documentation,
            )
        )
        if self._words:
            self.engine.register_source(
                WordListSource(
                    "words",
                    clock,
                    self._words,
                    priority=5,
                    menu="[W]",
                    min_length=self._config.min_length,
                    documentation_handler=self.host.show_documentation,
                )
            )

        editor.focus()
        self.engine.enter_insert()
        logger.info("Completion playground ready")

    def on_input_changed(self, event: Input.Changed) -> None:
        if self.engine is None or self.host is None:
            return
        self.host.bump_changedtick()
        if self._suppress_change:
            self._suppress_change = False
            return
        self.engine.complete()

    def action_manual_complete(self) -> None:
        if self.engine is not None:
            self.engine.complete(manual=True)

    def action_next_candidate(self) -> None:
        self._move_highlight(1)

    def action_previous_candidate(self) -> None:
        self._move_highlight(-1)

    def action_confirm(self) -> None:
        if self.engine is None or self.host is None:
            return
        item = self.engine.selection.selected
        if item is None:
            self.engine.close()
            return
        self._suppress_change = True
        self.host.insert(item)
        self.engine.confirm()

    def action_close(self) -> None:
        if self.engine is not None:
            self.engine.close()

    def _move_highlight(self, step: int) -> None:
        if self.engine is None:
            return
        popup = self.query_one("#popup", OptionList)
        if not popup.display or popup.option_count == 0:
            return
        current = popup.highlighted
        index = 0 if current is None else (current + step) % popup.option_count
        popup.highlighted = index
        self.engine.select(index, documentation=True)

    def _on_confirmed(self, event: CandidateConfirmed) -> None:
        history = self.engine.history.snapshot() if self.engine else {}
        summary = ", ".join(f"{label}×{count}" for label, count in sorted(history.items()))
        self.query_one("#history", Static).update(f"History: {summary}")

    def _on_trigger_failed(self, event: SourceTriggerFailed) -> None:
        self.notify(f"Source {event.source_name} failed: {event.error}", severity="error")
