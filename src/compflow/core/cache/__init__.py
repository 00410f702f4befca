"""Cache implementations."""

from compflow.core.cache.versioned import VersionedCache

__all__ = ["VersionedCache"]
