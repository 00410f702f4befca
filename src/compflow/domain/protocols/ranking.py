"""Ranking comparator protocol."""

from typing import Protocol

from compflow.domain.types import Candidate

__all__ = ["Comparator"]


class Comparator(Protocol):
    """Orders two candidates.

    Returns a negative number when ``a`` ranks before ``b``, positive when
    after, and 0 when the comparator has no preference.
    """

    def __call__(self, a: Candidate, b: Candidate) -> int:
        ...
