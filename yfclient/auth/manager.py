"""Cookie + crumb lifecycle management.

:class:`AuthManager` hands out a currently valid crumb. Crumbs are cached
for ``crumb_ttl`` seconds; when one goes stale the first caller to notice
runs the refresh while concurrent callers wait for and share its outcome,
success or error.
"""

import logging
import threading
import time
from typing import Any, Dict, Optional

from ..config import DEFAULT_CRUMB_TTL
from ..errors import AuthError, YFError
from ..http import TLSClient
from ..utils import ReadWriteLock
from .strategies import AuthStrategy, run_strategy


logger = logging.getLogger(__name__)


class _Refresh:
    """Outcome of one refresh, shared by every caller that waited on it."""

    def __init__(self):
        self.done = threading.Event()
        self.crumb: Optional[str] = None
        self.error: Optional[Exception] = None

    def result(self) -> str:
        self.done.wait()
        if self.error is not None:
            raise self.error
        return self.crumb


class AuthManager:
    """Fetches, caches and refreshes the Yahoo Finance crumb.

    If the active strategy fails the manager switches to the alternate one
    and tries again. The switch is sticky: later refreshes start with the
    strategy that last worked (or was last tried).
    """

    def __init__(self, client: TLSClient, crumb_ttl: float = DEFAULT_CRUMB_TTL,
                 strategy: AuthStrategy = AuthStrategy.BASIC):
        self.client = client
        self.crumb_ttl = crumb_ttl

        self._lock = ReadWriteLock()
        self._cookie = ""
        self._crumb = ""
        self._expiry = 0.0
        self._strategy = strategy

        # Single-flight bookkeeping, guarded by _flight_lock
        self._flight_lock = threading.Lock()
        self._in_flight: Optional[_Refresh] = None
        self._last_refresh: Optional[_Refresh] = None
        self._generation = 0

    @property
    def strategy(self) -> AuthStrategy:
        with self._lock.read_lock():
            return self._strategy

    @property
    def cookie(self) -> str:
        with self._lock.read_lock():
            return self._cookie

    @property
    def is_valid(self) -> bool:
        """True if a crumb is held and has not expired."""
        with self._lock.read_lock():
            return self._is_fresh()

    def _is_fresh(self) -> bool:
        return bool(self._crumb) and time.monotonic() < self._expiry

    def get_crumb(self) -> str:
        """Return a valid crumb, fetching a new one if necessary.

        Raises:
            AuthError: if both strategies failed
        """
        with self._flight_lock:
            seen = self._generation

        with self._lock.read_lock():
            if self._is_fresh():
                return self._crumb

        return self._refresh(seen)

    def _refresh(self, seen: int) -> str:
        with self._flight_lock:
            if self._generation != seen:
                # A refresh finished after this caller found the crumb stale
                return self._last_refresh.result()

            flight = self._in_flight
            if flight is not None:
                leader = False
            else:
                flight = self._in_flight = _Refresh()
                leader = True

        if not leader:
            return flight.result()

        try:
            flight.crumb = self._fetch()
        except Exception as e:
            flight.error = e
        finally:
            with self._flight_lock:
                self._in_flight = None
                self._last_refresh = flight
                self._generation += 1
            flight.done.set()

        return flight.result()

    def _fetch(self) -> str:
        """Run the active strategy, falling back to the alternate one."""
        strategy = self.strategy
        try:
            credentials = run_strategy(strategy, self.client)
        except YFError as first_error:
            fallback = strategy.alternate
            logger.warning(
                f"{strategy.value} authentication failed ({first_error}), "
                f"falling back to {fallback.value}"
            )
            with self._lock.write_lock():
                self._strategy = fallback
            strategy = fallback

            try:
                credentials = run_strategy(strategy, self.client)
            except YFError as e:
                logger.error(f"Authentication failed with both strategies: {e}")
                raise AuthError("authentication failed", cause=e) from e

        with self._lock.write_lock():
            self._cookie = credentials.cookie
            self._crumb = credentials.crumb
            self._expiry = time.monotonic() + self.crumb_ttl

        logger.info(f"Obtained crumb using {strategy.value} strategy")
        return credentials.crumb

    def add_crumb_to_params(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Set the ``crumb`` query parameter on ``params`` (a new dict if None).

        Errors from :meth:`get_crumb` propagate unchanged.
        """
        crumb = self.get_crumb()
        if params is None:
            params = {}
        params["crumb"] = crumb
        return params

    def _clear(self) -> None:
        self._cookie = ""
        self._crumb = ""
        self._expiry = 0.0
        self.client.clear_cookies()

    def reset(self) -> None:
        """Clear cookie and crumb, keeping the current strategy."""
        with self._lock.write_lock():
            self._clear()

    def switch_strategy(self) -> None:
        """Flip to the alternate strategy and clear cookie and crumb."""
        with self._lock.write_lock():
            self._strategy = self._strategy.alternate
            self._clear()
            logger.info(f"Switched authentication strategy to {self._strategy.value}")

    def __repr__(self) -> str:
        return f"<AuthManager strategy={self._strategy.value} valid={self._is_fresh()}>"
