"""
Registry of completion sources with a version-keyed sorted view.
"""

from __future__ import annotations

from typing import Callable

from compflow.core.cache import VersionedCache
from compflow.domain.protocols import CompletionSource
from compflow.logger import get_logger

logger = get_logger("registry")

_VIEW_KEY = "sources"


class SourceRegistry:
    """Holds registered sources and the enabled, priority-sorted view of them.

    The view is rebuilt only when :attr:`version` changes. Configuration
    changes do not invalidate it by themselves; call :meth:`invalidate`.
    """

    def __init__(
        self,
        is_enabled: Callable[[str], bool],
        priority_of: Callable[[CompletionSource], int] | None = None,
    ) -> None:
        self._is_enabled = is_enabled
        self._priority_of = priority_of or (lambda source: source.get_metadata().priority)
        self._sources: dict[int, CompletionSource] = {}
        self._version = 0
        self._cache: VersionedCache[str, tuple[CompletionSource, ...]] = VersionedCache()

    @property
    def version(self) -> int:
        return self._version

    def register(self, source: CompletionSource) -> None:
        self._sources[source.id] = source
        self._version += 1
        logger.debug(f"Registered source {source.name!r} (id={source.id}, version={self._version})")

    def unregister(self, source_id: int) -> CompletionSource | None:
        source = self._sources.pop(source_id, None)
        self._version += 1
        if source is not None:
            logger.debug(f"Unregistered source {source.name!r} (id={source_id}, version={self._version})")
        return source

    def invalidate(self) -> None:
        """Force the next :meth:`get_sources` call to rebuild the view."""
        self._version += 1

    def get_sources(self) -> tuple[CompletionSource, ...]:
        """Enabled sources, highest priority first, ties in registration order."""
        return self._cache.ensure(_VIEW_KEY, self._version, self._build_view)

    def find(self, source_id: int) -> CompletionSource | None:
        for source in self.get_sources():
            if source.id == source_id:
                return source
        return None

    def _build_view(self) -> tuple[CompletionSource, ...]:
        enabled = [source for source in self._sources.values() if self._is_enabled(source.name)]
        ordered = sorted(enabled, key=self._priority_of, reverse=True)
        logger.debug(
            f"Rebuilt source view (version={self._version}): {[source.name for source in ordered]}"
        )
        return tuple(ordered)

    def __len__(self) -> int:
        return len(self._sources)

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._sources
