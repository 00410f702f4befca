"""Confirmation history used as a ranking signal."""

from __future__ import annotations

from collections.abc import Iterator, Mapping


class HistoryStore(Mapping[str, int]):
    """Label -> confirmation count. Counts only ever go up."""

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}

    def record(self, label: str) -> int:
        """Count one more confirmation of ``label`` and return the new total."""
        self._counts[label] = self._counts.get(label, 0) + 1
        return self._counts[label]

    def count(self, label: str) -> int:
        return self._counts.get(label, 0)

    def snapshot(self) -> dict[str, int]:
        return dict(self._counts)

    def __getitem__(self, label: str) -> int:
        return self._counts[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)
