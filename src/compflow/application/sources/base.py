"""
Base implementation of the completion source contract.

Concrete sources only implement :meth:`BaseSource.complete`; status
tracking, start offsets, stale-delivery protection and filtering live here.
"""

from __future__ import annotations

import dataclasses
import itertools
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Callable, Optional, Union

from compflow.domain.protocols import AsyncUpdateCallback, Clock
from compflow.domain.types import Candidate, Context, SourceMetadata, SourceStatus
from compflow.logger import get_logger

logger = get_logger("sources.base")

RawItem = Union[str, Candidate]
DeliverCallback = Callable[[Iterable[RawItem]], None]
DocumentationHandler = Callable[[Candidate, str], None]

KEYWORD_PATTERN = re.compile(r"\w+$")

_source_ids = itertools.count(1)


def match_score(word: str, query: str) -> Optional[float]:
    """Score how well ``word`` matches the typed ``query``.

    Returns None when it does not match at all. Prefix matches beat
    subsequence matches; case-exact prefixes beat case-insensitive ones.
    """
    if not query:
        return 0.0
    if word.startswith(query):
        return 3.0
    lowered = word.lower()
    wanted = query.lower()
    if lowered.startswith(wanted):
        return 2.0

    position = 0
    for char in wanted:
        position = lowered.find(char, position)
        if position < 0:
            return None
        position += 1
    return 1.0


class BaseSource(ABC):
    """Shared behaviour of the bundled sources.

    Args:
        name: Configuration key of the source
        clock: Clock used to measure processing time
        priority: Merge priority, higher first
        menu: Menu text attached to produced candidates
        dup: Keep candidates other sources already produced
        trigger_characters: Characters that start production right away and
            make this source exclusive for the cycle
        min_length: Keyword length required before completing automatically
        documentation_handler: Receives ``(item, text)`` when documentation
            is requested for an item that has some
    """

    def __init__(
        self,
        name: str,
        clock: Clock,
        *,
        priority: int = 0,
        menu: Optional[str] = None,
        dup: bool = False,
        trigger_characters: Sequence[str] = (),
        min_length: int = 1,
        documentation_handler: Optional[DocumentationHandler] = None,
    ) -> None:
        self.id = next(_source_ids)
        self.name = name
        self.status = SourceStatus.IDLE
        self.is_triggered_by_character = False

        self._clock = clock
        self._metadata = SourceMetadata(priority=priority, menu=menu, dup=dup)
        self._trigger_characters = frozenset(trigger_characters)
        self._min_length = min_length
        self._documentation_handler = documentation_handler

        self._items: list[Candidate] = []
        self._start_offset = 0
        self._processing_started = 0.0
        self._request_id = 0

    @abstractmethod
    def complete(self, context: Context, deliver: DeliverCallback) -> None:
        """Produce candidates for ``context`` and pass them to ``deliver``.

        ``deliver`` may be called synchronously or later from the host loop;
        deliveries for superseded requests are dropped.
        """

    def get_metadata(self) -> SourceMetadata:
        return self._metadata

    def get_start_offset(self) -> int:
        return self._start_offset

    def get_processing_time(self) -> float:
        if self.status != SourceStatus.PROCESSING:
            return 0.0
        return self._clock.now() - self._processing_started

    def keyword_offset(self, context: Context) -> Optional[int]:
        """1-based column where the word under the cursor starts."""
        match = KEYWORD_PATTERN.search(context.before_line)
        if match is None:
            return None
        return match.start() + 1

    def trigger(self, context: Context, on_async_update: AsyncUpdateCallback) -> bool:
        by_character = context.before_char in self._trigger_characters
        keyword_offset = self.keyword_offset(context)

        if by_character:
            offset = context.col
        elif keyword_offset is not None:
            offset = keyword_offset
        elif context.manual:
            offset = context.col
        else:
            self.clear()
            return False

        keyword_length = context.col - offset
        if not (by_character or context.manual) and keyword_length < self._min_length:
            return False

        # Same word as last time: the cached items are refined by filtering.
        if (
            not by_character
            and not context.manual
            and offset == self._start_offset
            and self.status in (SourceStatus.PROCESSING, SourceStatus.COMPLETED)
        ):
            return False

        self._request_id += 1
        request_id = self._request_id
        self._start_offset = offset
        self._processing_started = self._clock.now()
        self.is_triggered_by_character = by_character
        self.status = SourceStatus.PROCESSING
        logger.debug(f"Source {self.name!r} started request {request_id} at column {offset}")

        def deliver(items: Iterable[RawItem]) -> None:
            if request_id != self._request_id:
                logger.debug(f"Source {self.name!r} dropped stale delivery for request {request_id}")
                return
            self._items = [self._normalize(item, index) for index, item in enumerate(items)]
            self.status = SourceStatus.COMPLETED
            on_async_update()

        try:
            self.complete(context, deliver)
        except Exception:
            self.status = SourceStatus.ERROR
            raise
        return True

    def get_filtered_items(self, context: Context) -> list[Candidate]:
        if self.status != SourceStatus.COMPLETED or self._start_offset <= 0:
            return []
        query = context.before_line[self._start_offset - 1 :]

        matches: list[Candidate] = []
        for item in self._items:
            score = match_score(item.original_word, query)
            if score is None:
                continue
            matches.append(dataclasses.replace(item, score=score, exact=bool(query) and item.original_word == query))
        return matches

    def confirm(self, item: Candidate) -> None:
        logger.debug(f"Source {self.name!r} confirmed {item.label!r}")

    def documentation(self, item: Candidate) -> None:
        if item.documentation and self._documentation_handler is not None:
            self._documentation_handler(item, item.documentation)

    def clear(self) -> None:
        self._request_id += 1
        self._items = []
        self._start_offset = 0
        self.is_triggered_by_character = False
        self.status = SourceStatus.IDLE

    def _normalize(self, item: RawItem, index: int) -> Candidate:
        if isinstance(item, str):
            item = Candidate(original_word=item)
        return dataclasses.replace(
            item,
            original_menu=item.original_menu or self._metadata.menu or "",
            original_dup=item.original_dup or self._metadata.dup,
            source_id=self.id,
            priority=self._metadata.priority,
            index=index,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, name={self.name!r}, status={self.status.value})"
