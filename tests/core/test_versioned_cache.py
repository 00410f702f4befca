"""Tests for VersionedCache."""

from compflow.core.cache import VersionedCache


def test_ensure_builds_once_per_version():
    cache = VersionedCache()
    builds = []

    def build():
        builds.append(1)
        return len(builds)

    assert cache.ensure("view", 1, build) == 1
    assert cache.ensure("view", 1, build) == 1
    assert cache.ensure("view", 2, build) == 2
    assert len(builds) == 2
    assert cache.version_of("view") == 2


def test_set_without_version():
    cache = VersionedCache()
    cache.set("key", "value")

    assert cache.get("key") == "value"
    assert cache.version_of("key") is None
    assert "key" in cache
    assert cache.ensure("key", 1, lambda: "rebuilt") == "rebuilt"


def test_clear_single_and_all():
    cache = VersionedCache()
    cache.set("a", 1, version=1)
    cache.set("b", 2, version=1)

    cache.clear("a")
    assert "a" not in cache
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0


def test_has_changed():
    cache = VersionedCache()

    assert cache.has_changed("key", 1)
    cache.set("key", 1)
    assert not cache.has_changed("key", 1)
    assert cache.has_changed("key", 2)
