"""Mutable per-engine completion state."""

from __future__ import annotations

from dataclasses import dataclass, field

from .candidate import Candidate
from .context import Context


@dataclass
class CompletionState:
    """What the engine currently shows and what the user picked.

    Each display cycle overwrites ``current_offset``/``current_items``
    wholesale; the tuple itself is never modified.
    """

    context: Context = field(default_factory=Context.empty)
    current_offset: int = 0
    current_items: tuple[Candidate, ...] = ()
    selected_item: Candidate | None = None

    def reset(self) -> None:
        self.context = Context.empty()
        self.current_offset = 0
        self.current_items = ()
        self.selected_item = None
