"""Cursor snapshots used to detect stale completion requests."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LineState:
    """Raw cursor/line information reported by the host editor.

    ``col`` is the 1-based column of the cursor, so the text before the
    cursor is ``line[: col - 1]``.
    """

    lnum: int
    col: int
    line: str
    changedtick: int = 0


@dataclass(frozen=True, slots=True)
class Context:
    """Immutable snapshot of the cursor state for one completion request."""

    lnum: int = 0
    col: int = 0
    before_line: str = ""
    changedtick: int = -1
    manual: bool = False
    time: float = 0.0

    @classmethod
    def empty(cls) -> Context:
        """Context that matches no real cursor position."""
        return cls()

    @classmethod
    def from_line_state(cls, state: LineState, *, manual: bool = False, time: float = 0.0) -> Context:
        return cls(
            lnum=state.lnum,
            col=state.col,
            before_line=state.line[: max(0, state.col - 1)],
            changedtick=state.changedtick,
            manual=manual,
            time=time,
        )

    @property
    def is_empty(self) -> bool:
        return self.col == 0

    @property
    def before_char(self) -> str:
        """Character immediately left of the cursor, or ``""``."""
        return self.before_line[-1:] if self.before_line else ""

    def should_auto_complete(self, context: Context) -> bool:
        """Return ``True`` when ``context`` is a new edit worth completing.

        ``self`` is the previous request; nothing happens unless the buffer
        changed since then and the cursor or the text before it moved.
        """
        if self.changedtick == context.changedtick:
            return False
        return (
            self.lnum != context.lnum
            or self.col != context.col
            or self.before_line != context.before_line
        )
