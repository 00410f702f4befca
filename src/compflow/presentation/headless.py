"""
In-memory host bridge.

Keeps a single editable line and records everything the engine asks the
host to do. Used by the ``replay`` command and by tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from compflow.domain.protocols import RenderMode
from compflow.domain.types import Candidate, LineState


@dataclass
class RenderCall:
    """One ``render`` request as the host received it."""

    start_offset: int
    items: tuple[Candidate, ...]
    mode: str


@dataclass
class ScriptedHost:
    """Single-line editor double implementing :class:`HostBridge`."""

    line: str = ""
    col: int = 1
    lnum: int = 1
    mode: str = "i"
    buffer_type: str = ""
    manual_selection: bool = False
    render_mode: str = "menu"
    changedtick: int = 0

    popup_visible: bool = False
    popup_offset: int = 0
    popup_items: tuple[Candidate, ...] = ()
    renders: list[RenderCall] = field(default_factory=list)
    documentation_closes: int = 0

    # Editing helpers

    def type_text(self, text: str) -> None:
        """Insert ``text`` at the cursor, one buffer change per character."""
        for char in text:
            before, after = self.line[: self.col - 1], self.line[self.col - 1 :]
            self.line = before + char + after
            self.col += 1
            self.changedtick += 1

    def backspace(self, count: int = 1) -> None:
        for _ in range(count):
            if self.col <= 1:
                return
            self.line = self.line[: self.col - 2] + self.line[self.col - 1 :]
            self.col -= 1
            self.changedtick += 1

    def set_line(self, line: str, col: int | None = None) -> None:
        self.line = line
        self.col = len(line) + 1 if col is None else col
        self.changedtick += 1

    def insert_candidate(self, item: Candidate) -> None:
        """Replace the completed span with ``item.word`` like a popup confirm."""
        start = max(1, self.popup_offset)
        self.line = self.line[: start - 1] + item.word + self.line[self.col - 1 :]
        self.col = start + len(item.word)
        self.changedtick += 1

    def hide_popup(self) -> None:
        """Simulate the editor closing the popup on its own."""
        self.popup_visible = False

    # HostBridge

    def is_popup_visible(self) -> bool:
        return self.popup_visible

    def render(self, start_offset: int, items: Sequence[Candidate]) -> None:
        items = tuple(items)
        self.renders.append(RenderCall(start_offset, items, self.render_mode))
        self.popup_offset = start_offset
        self.popup_items = items
        self.popup_visible = bool(items)

    def get_render_mode(self) -> str:
        return self.render_mode

    def set_render_mode(self, mode: str) -> None:
        self.render_mode = mode

    def close_documentation_panel(self) -> None:
        self.documentation_closes += 1

    def current_mode(self) -> str:
        return self.mode

    def current_buffer_type(self) -> str:
        return self.buffer_type

    def is_manual_selection_active(self) -> bool:
        return self.manual_selection

    def line_state(self) -> LineState:
        return LineState(lnum=self.lnum, col=self.col, line=self.line, changedtick=self.changedtick)

    @property
    def last_render(self) -> RenderCall | None:
        return self.renders[-1] if self.renders else None

    @property
    def preselected(self) -> bool:
        """Whether the last render highlighted the first item."""
        last = self.last_render
        return last is not None and last.mode == RenderMode.PREVIEW_INSERT.value
