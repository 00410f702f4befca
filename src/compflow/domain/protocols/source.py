"""Completion source protocol."""

from typing import Callable, Protocol, runtime_checkable

from compflow.domain.types import Candidate, Context, SourceMetadata, SourceStatus

__all__ = ["AsyncUpdateCallback", "CompletionSource"]

AsyncUpdateCallback = Callable[[], None]


@runtime_checkable
class CompletionSource(Protocol):
    """Contract every candidate producer implements.

    The engine only drives sources through this interface; how a source
    finds candidates is its own business.

    Attributes:
        id: Unique identifier within one engine
        name: Configuration lookup key
        status: Current production state
        is_triggered_by_character: Whether the last trigger was a trigger
            character, which makes this source's items exclusive for a cycle
    """

    id: int
    name: str
    status: SourceStatus
    is_triggered_by_character: bool

    def trigger(self, context: Context, on_async_update: AsyncUpdateCallback) -> bool:
        """Start production for ``context`` if needed.

        Returns:
            True when new production started; ``on_async_update`` is invoked
            once it finishes
        """
        ...

    def get_filtered_items(self, context: Context) -> list[Candidate]:
        """Return the candidates matching ``context`` from the last production."""
        ...

    def get_start_offset(self) -> int:
        """1-based column where this source's completion starts."""
        ...

    def get_processing_time(self) -> float:
        """Milliseconds spent in the current ``processing`` state."""
        ...

    def confirm(self, item: Candidate) -> None:
        ...

    def clear(self) -> None:
        """Discard in-flight production and cached items."""
        ...

    def documentation(self, item: Candidate) -> None:
        ...

    def get_metadata(self) -> SourceMetadata:
        ...
