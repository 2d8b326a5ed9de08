"""Thread-safe in-memory cache with per-entry TTL.

Entries are checked for expiry on every read, so :meth:`TTLCache.get` never
returns a stale value. A background thread additionally sweeps expired
entries so they stop taking memory; the sweep only affects :func:`len`.

Basic usage::

    with TTLCache(ttl=300.0) as cache:
        cache.set("AAPL:tz", "America/New_York")
        tz, found = cache.get_string("AAPL:tz")

A process-wide default instance backs the ``*_global`` helpers. Prefer
passing an explicit cache (as :class:`yfclient.client.YFClient` does);
the global one exists for call sites that have no client to hand.
"""

import logging
import threading
import time
from typing import Any, Dict, NamedTuple, Optional, Tuple

from ..config import DEFAULT_CACHE_CLEANUP_INTERVAL, DEFAULT_CACHE_TTL
from ..utils import ReadWriteLock


logger = logging.getLogger(__name__)


class _Entry(NamedTuple):
    value: Any
    expires_at: float

    def is_expired(self, now: Optional[float] = None) -> bool:
        return (now if now is not None else time.monotonic()) > self.expires_at


class TTLCache:
    """Key/value store whose entries expire after a time-to-live."""

    def __init__(self, ttl: float = DEFAULT_CACHE_TTL,
                 cleanup_interval: float = DEFAULT_CACHE_CLEANUP_INTERVAL):
        if ttl <= 0 or cleanup_interval <= 0:
            raise ValueError("ttl and cleanup_interval must be positive")

        self.ttl = ttl
        self.cleanup_interval = cleanup_interval

        self._items: Dict[str, _Entry] = {}
        self._lock = ReadWriteLock()
        self._stop_event = threading.Event()
        self._close_lock = threading.Lock()

        self._cleanup_thread = threading.Thread(
            target=self._cleanup_loop,
            name="ttl-cache-cleanup",
            daemon=True,
        )
        self._cleanup_thread.start()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def set(self, key: str, value: Any) -> None:
        """Store a value with the default TTL."""
        self.set_with_ttl(key, value, self.ttl)

    def set_with_ttl(self, key: str, value: Any, ttl: float) -> None:
        """Store a value that expires ``ttl`` seconds from now."""
        with self._lock.write_lock():
            self._items[key] = _Entry(value, time.monotonic() + ttl)

    def get(self, key: str) -> Tuple[Any, bool]:
        """Return ``(value, True)``, or ``(None, False)`` if missing or expired."""
        with self._lock.read_lock():
            entry = self._items.get(key)

        if entry is None or entry.is_expired():
            return None, False
        return entry.value, True

    def get_string(self, key: str) -> Tuple[str, bool]:
        """Like :meth:`get` but also reports not-found for non-string values."""
        value, found = self.get(key)
        if not found or not isinstance(value, str):
            return "", False
        return value, True

    def delete(self, key: str) -> None:
        with self._lock.write_lock():
            self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock.write_lock():
            self._items = {}

    def __len__(self) -> int:
        # Includes expired entries the sweep has not removed yet
        with self._lock.read_lock():
            return len(self._items)

    def len(self) -> int:
        return len(self)

    def __contains__(self, key: str) -> bool:
        return self.get(key)[1]

    def cleanup(self) -> int:
        """Remove all expired entries and return how many were removed."""
        now = time.monotonic()
        with self._lock.write_lock():
            expired = [key for key, entry in self._items.items() if entry.is_expired(now)]
            for key in expired:
                del self._items[key]

        if expired:
            logger.debug(f"Removed {len(expired)} expired cache entries")
        return len(expired)

    def _cleanup_loop(self) -> None:
        """Background sweep, runs until close()."""
        while not self._stop_event.wait(self.cleanup_interval):
            self.cleanup()

    @property
    def closed(self) -> bool:
        return self._stop_event.is_set()

    def close(self) -> None:
        """Stop the background sweep.

        Must be called once per cache; closing twice raises RuntimeError.
        """
        with self._close_lock:
            if self._stop_event.is_set():
                raise RuntimeError("TTLCache.close() called on an already closed cache")
            self._stop_event.set()
        self._cleanup_thread.join(timeout=1.0)

    def __repr__(self) -> str:
        return f"<TTLCache ttl={self.ttl} entries={len(self)}>"


# Global cache instance
_global_cache: Optional[TTLCache] = None
_global_cache_lock = threading.Lock()


def get_global_cache() -> TTLCache:
    """Return the process-wide cache, creating it on first use."""
    global _global_cache
    cache = _global_cache
    if cache is not None:
        return cache

    with _global_cache_lock:
        if _global_cache is None:
            _global_cache = TTLCache()
        return _global_cache


def set_global(key: str, value: Any) -> None:
    get_global_cache().set(key, value)


def set_global_with_ttl(key: str, value: Any, ttl: float) -> None:
    get_global_cache().set_with_ttl(key, value, ttl)


def get_global(key: str) -> Tuple[Any, bool]:
    return get_global_cache().get(key)


def get_global_string(key: str) -> Tuple[str, bool]:
    return get_global_cache().get_string(key)


def delete_global(key: str) -> None:
    get_global_cache().delete(key)


def clear_global() -> None:
    get_global_cache().clear()
