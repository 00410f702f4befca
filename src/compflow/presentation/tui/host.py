"""
TextualHost - HostBridge over a Textual ``Input`` and ``OptionList``.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from compflow.domain.types import Candidate, LineState
from compflow.logger import get_logger

logger = get_logger("tui.host")


def format_candidate(item: Candidate) -> Text:
    """Popup row: label, then dimmed kind and menu."""
    row = Text(item.abbr or item.original_abbr)
    if item.kind:
        row.append(f"  {item.kind}", style="italic cyan")
    if item.menu:
        row.append(f"  {item.menu}", style="dim")
    return row


class TextualHost:
    """Bridges the engine to a single-line Textual editor."""

    def __init__(self, editor: Input, popup: OptionList, docs: Static) -> None:
        self._editor = editor
        self._popup = popup
        self._docs = docs
        self._render_mode = "menuone"
        self._changedtick = 0
        self.manual_selection = False
        self.popup_offset = 0
        self.popup_items: tuple[Candidate, ...] = ()

    def bump_changedtick(self) -> None:
        self._changedtick += 1

    def show_documentation(self, item: Candidate, text: str) -> None:
        self._docs.update(Text(text))
        self._docs.display = True

    def is_popup_visible(self) -> bool:
        return bool(self._popup.display) and self._popup.option_count > 0

    def render(self, start_offset: int, items: Sequence[Candidate]) -> None:
        self.popup_offset = start_offset
        self.popup_items = tuple(items)
        self._popup.clear_options()
        if not items:
            self._popup.display = False
            return

        self._popup.add_options([Option(format_candidate(item)) for item in items])
        self._popup.display = True
        self._popup.highlighted = 0 if self._render_mode.endswith("noinsert") else None
        logger.debug(f"Rendered {len(items)} candidate(s) from column {start_offset}")

    def get_render_mode(self) -> str:
        return self._render_mode

    def set_render_mode(self, mode: str) -> None:
        self._render_mode = mode

    def close_documentation_panel(self) -> None:
        self._docs.update("")
        self._docs.display = False

    def current_mode(self) -> str:
        return "i" if self._editor.has_focus else "n"

    def current_buffer_type(self) -> str:
        return ""

    def is_manual_selection_active(self) -> bool:
        return self.manual_selection

    def line_state(self) -> LineState:
        return LineState(
            lnum=1,
            col=self._editor.cursor_position + 1,
            line=self._editor.value,
            changedtick=self._changedtick,
        )

    def insert(self, item: Candidate) -> None:
        """Replace the completed span of the editor with ``item.word``."""
        value = self._editor.value
        cursor = self._editor.cursor_position
        start = max(0, self.popup_offset - 1)
        self._editor.value = value[:start] + item.word + value[cursor:]
        self._editor.cursor_position = start + len(item.word)
