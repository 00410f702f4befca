"""
Sources backed by plain word lists.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Callable

from compflow.domain.protocols import Clock
from compflow.domain.types import Context
from compflow.logger import get_logger

from .base import BaseSource, DeliverCallback, RawItem

logger = get_logger("sources.words")

WORD_PATTERN = re.compile(r"\w{2,}")


class WordListSource(BaseSource):
    """Completes from a fixed vocabulary."""

    def __init__(self, name: str, clock: Clock, words: Iterable[RawItem], **kwargs) -> None:
        super().__init__(name, clock, **kwargs)
        self._words: list[RawItem] = []
        seen: set[str] = set()
        for word in words:
            key = word if isinstance(word, str) else word.original_word
            if key not in seen:
                seen.add(key)
                self._words.append(word)

    def complete(self, context: Context, deliver: DeliverCallback) -> None:
        logger.debug(f"WordListSource {self.name!r} delivering {len(self._words)} words")
        deliver(self._words)


class BufferWordsSource(BaseSource):
    """Completes from the words found in a text provider (e.g. the open buffer).

    ``latency_ms`` delays delivery on the clock, which makes the source stay
    in the ``processing`` state like a real out-of-process provider.
    """

    def __init__(
        self,
        name: str,
        clock: Clock,
        text_provider: Callable[[], str],
        *,
        latency_ms: float = 0.0,
        **kwargs,
    ) -> None:
        super().__init__(name, clock, **kwargs)
        self._text_provider = text_provider
        self._latency_ms = latency_ms

    def harvest(self, context: Context) -> list[str]:
        current = context.before_line[self.get_start_offset() - 1 :] if self.get_start_offset() > 0 else ""
        words = WORD_PATTERN.findall(self._text_provider())
        return [word for word in dict.fromkeys(words) if word != current]

    def complete(self, context: Context, deliver: DeliverCallback) -> None:
        words = self.harvest(context)
        logger.debug(f"BufferWordsSource {self.name!r} harvested {len(words)} words")
        if self._latency_ms <= 0:
            deliver(words)
        else:
            self._clock.call_later(self._latency_ms, lambda: deliver(words))
