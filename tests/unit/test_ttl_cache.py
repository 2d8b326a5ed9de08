"""
Unit tests for the TTL cache.

These tests verify expiry-on-read, per-entry TTLs, the background sweep,
teardown and the process-wide default instance.
"""

import threading
import time

import pytest

from yfclient.cache import ttl as ttl_module
from yfclient.cache import (
    TTLCache,
    clear_global,
    delete_global,
    get_global,
    get_global_cache,
    get_global_string,
    set_global,
    set_global_with_ttl,
)


@pytest.fixture
def cache():
    """Create a cache with a long sweep interval so only reads expire entries."""
    cache = TTLCache(ttl=60.0, cleanup_interval=60.0)
    yield cache
    if not cache.closed:
        cache.close()


class TestTTLCache:
    """Test basic cache operations."""

    def test_set_and_get(self, cache):
        cache.set("AAPL:tz", "America/New_York")

        assert cache.get("AAPL:tz") == ("America/New_York", True)

    def test_get_missing_key(self, cache):
        assert cache.get("missing") == (None, False)

    def test_overwrite(self, cache):
        cache.set("k", 1)
        cache.set("k", 2)

        assert cache.get("k") == (2, True)
        assert len(cache) == 1

    def test_get_string(self, cache):
        cache.set("name", "Apple")
        cache.set("count", 3)

        assert cache.get_string("name") == ("Apple", True)
        assert cache.get_string("count") == ("", False)
        assert cache.get_string("missing") == ("", False)

    def test_delete(self, cache):
        cache.set("k", "v")
        cache.delete("k")
        cache.delete("never-set")

        assert cache.get("k") == (None, False)

    def test_clear(self, cache):
        for i in range(5):
            cache.set(f"k{i}", i)

        cache.clear()

        assert len(cache) == 0
        assert cache.len() == 0

    def test_contains(self, cache):
        cache.set("k", None)

        assert "k" in cache
        assert "other" not in cache

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            TTLCache(ttl=0)
        with pytest.raises(ValueError):
            TTLCache(cleanup_interval=-1)


class TestExpiry:
    """Test that expiry is enforced on read, independent of the sweep."""

    def test_entry_expires_after_ttl(self):
        cache = TTLCache(ttl=0.05, cleanup_interval=60.0)
        try:
            cache.set("k", "v")
            assert cache.get("k") == ("v", True)

            time.sleep(0.1)

            assert cache.get("k") == (None, False)
            # Not swept yet, still counted
            assert len(cache) == 1
        finally:
            cache.close()

    def test_set_with_ttl_expires_independently(self, cache):
        cache.set("long", "default-ttl")
        cache.set_with_ttl("short", "brief", 0.05)

        time.sleep(0.1)

        assert cache.get("short") == (None, False)
        assert cache.get("long") == ("default-ttl", True)

    def test_manual_cleanup_removes_only_expired(self, cache):
        cache.set_with_ttl("a", 1, 0.01)
        cache.set_with_ttl("b", 2, 0.01)
        cache.set("c", 3)

        time.sleep(0.05)
        removed = cache.cleanup()

        assert removed == 2
        assert len(cache) == 1
        assert cache.get("c") == (3, True)

    def test_background_sweep(self):
        cache = TTLCache(ttl=0.01, cleanup_interval=0.05)
        try:
            cache.set("k", "v")
            assert len(cache) == 1

            deadline = time.monotonic() + 2.0
            while len(cache) and time.monotonic() < deadline:
                time.sleep(0.02)

            assert len(cache) == 0
        finally:
            cache.close()


class TestConcurrency:
    """Test concurrent access from many threads."""

    def test_concurrent_writers_and_readers(self, cache):
        errors = []

        def worker(n):
            try:
                for i in range(200):
                    cache.set(f"{n}:{i}", i)
                    value, found = cache.get(f"{n}:{i}")
                    assert found and value == i
            except AssertionError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(cache) == 8 * 200


class TestClose:
    """Test teardown of the sweep thread."""

    def test_close_stops_sweep_thread(self):
        cache = TTLCache()
        cache.close()

        assert cache.closed
        assert not cache._cleanup_thread.is_alive()

    def test_close_twice_is_an_error(self):
        cache = TTLCache()
        cache.close()

        with pytest.raises(RuntimeError):
            cache.close()

    def test_concurrent_close_raises_exactly_once(self):
        cache = TTLCache()
        barrier = threading.Barrier(8)
        errors = []
        lock = threading.Lock()

        def closer():
            barrier.wait()
            try:
                cache.close()
            except RuntimeError as e:
                with lock:
                    errors.append(e)

        threads = [threading.Thread(target=closer) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert cache.closed
        assert len(errors) == 7

    def test_context_manager(self):
        with TTLCache() as cache:
            cache.set("k", "v")
        assert cache.closed


class TestGlobalCache:
    """Test the process-wide default cache."""

    @pytest.fixture(autouse=True)
    def fresh_global(self, monkeypatch):
        monkeypatch.setattr(ttl_module, "_global_cache", None)
        yield
        cache = ttl_module._global_cache
        if cache is not None and not cache.closed:
            cache.close()

    def test_global_helpers(self):
        set_global("k", "v")
        set_global_with_ttl("n", 42, 60.0)

        assert get_global("k") == ("v", True)
        assert get_global_string("k") == ("v", True)
        assert get_global_string("n") == ("", False)

        delete_global("k")
        assert get_global("k") == (None, False)

        clear_global()
        assert get_global("n") == (None, False)

    def test_created_once_under_concurrent_access(self):
        barrier = threading.Barrier(16)
        seen = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            instance = get_global_cache()
            with lock:
                seen.append(instance)

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(seen) == 16
        assert all(instance is seen[0] for instance in seen)
