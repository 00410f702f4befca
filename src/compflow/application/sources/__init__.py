"""Bundled completion sources."""

from .base import BaseSource, match_score
from .words import BufferWordsSource, WordListSource

__all__ = ["BaseSource", "BufferWordsSource", "WordListSource", "match_score"]
