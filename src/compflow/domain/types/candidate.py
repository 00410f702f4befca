"""Completion candidate model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Candidate:
    """One completion suggestion.

    The ``original_*`` fields are produced by a source. The rendered
    ``word``/``abbr``/``kind``/``menu`` fields are filled by the merge step,
    which always works on a copy so source-owned candidates stay untouched.
    """

    original_word: str
    original_abbr: str = ""
    original_kind: str = ""
    original_menu: str = ""
    original_dup: bool = False
    source_id: int = 0
    preselect: bool = False

    # Ranking inputs
    exact: bool = False
    score: float = 0.0
    priority: int = 0
    sort_text: str | None = None
    index: int = 0

    documentation: str | None = None

    # Rendered by the merge step
    word: str = ""
    abbr: str = ""
    kind: str = ""
    menu: str = ""

    def __post_init__(self) -> None:
        if not self.original_abbr:
            self.original_abbr = self.original_word

    @property
    def label(self) -> str:
        """Key used by the confirmation history."""
        return self.original_abbr
