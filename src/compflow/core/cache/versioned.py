"""Version-keyed cache implementation.

Entries are stored together with the version they were computed for. A
lookup through :meth:`VersionedCache.ensure` only recomputes when the
caller's version differs from the stored one, so hot paths can ask for a
value on every keystroke without paying for a rebuild.
"""

from typing import Callable, Hashable, TypeVar

from compflow.domain.protocols import Cache

K = TypeVar("K")
V = TypeVar("V")

_UNVERSIONED = object()


class VersionedCache(Cache[K, V]):
    """Cache whose entries are invalidated by a version token.

    Example:
        >>> cache = VersionedCache[str, list[int]]()
        >>> cache.ensure("sources", 1, lambda: [1, 2])
        [1, 2]
        >>> cache.ensure("sources", 1, lambda: [3])  # same version, cached
        [1, 2]
        >>> cache.ensure("sources", 2, lambda: [3])  # version bumped
        [3]
    """

    def __init__(self) -> None:
        self._data: dict[K, tuple[V, Hashable]] = {}  # (value, version)

    def ensure(self, key: K, version: Hashable, factory: Callable[[], V]) -> V:
        """Return the value cached for ``version``, building it if needed.

        Args:
            key: The cache key
            version: Token the cached value must have been built for
            factory: Called to build the value when the version differs

        Returns:
            The cached or freshly built value
        """
        entry = self._data.get(key)
        if entry is not None and entry[1] == version:
            return entry[0]

        value = factory()
        self._data[key] = (value, version)
        return value

    def version_of(self, key: K) -> Hashable | None:
        entry = self._data.get(key)
        if entry is None or entry[1] is _UNVERSIONED:
            return None
        return entry[1]

    def get(self, key: K) -> V | None:
        entry = self._data.get(key)
        return None if entry is None else entry[0]

    def set(self, key: K, value: V, version: Hashable = _UNVERSIONED) -> None:
        self._data[key] = (value, version)

    def clear(self, key: K | None = None) -> None:
        if key is None:
            self._data.clear()
        else:
            self._data.pop(key, None)

    def has_changed(self, key: K, value: V) -> bool:
        cached = self.get(key)
        return cached is None or cached != value

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: K) -> bool:
        return key in self._data
