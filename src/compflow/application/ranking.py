"""
Candidate ranking.

The comparator itself is pluggable; the engine only adds the confirmation
history as a tie-break and keeps the sort stable.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import cmp_to_key

from compflow.domain.protocols import Comparator
from compflow.domain.types import Candidate

from .history import HistoryStore


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_candidates(a: Candidate, b: Candidate) -> int:
    """Default comparator: exact matches, then score, then source priority, then sort text."""
    if a.exact != b.exact:
        return -1 if a.exact else 1
    if a.score != b.score:
        return -_cmp(a.score, b.score)
    if a.priority != b.priority:
        return -_cmp(a.priority, b.priority)
    if a.sort_text is not None and b.sort_text is not None and a.sort_text != b.sort_text:
        return _cmp(a.sort_text, b.sort_text)
    return 0


def rank_candidates(
    items: Iterable[Candidate],
    history: HistoryStore,
    comparator: Comparator = compare_candidates,
) -> list[Candidate]:
    """Stable-sort ``items``; comparator ties go to the label confirmed more often."""

    def compare(a: Candidate, b: Candidate) -> int:
        result = comparator(a, b)
        if result:
            return result
        return history.count(b.label) - history.count(a.label)

    return sorted(items, key=cmp_to_key(compare))
