"""Top-level client owning the transport, crumb manager and cache.

Higher-level modules (quotes, search, screeners, ...) take a
:class:`YFClient` and call :meth:`YFClient.get_json` or
:meth:`YFClient.post_json`; the client attaches the crumb and recovers
from a rejected crumb by switching strategy and retrying.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from .auth import AuthManager
from .cache import TTLCache
from .config import ClientConfig
from .errors import AuthError, http_status_to_error
from .http import Response, TLSClient


logger = logging.getLogger(__name__)


class YFClient:
    """One transport, one crumb manager and one cache, wired together.

    Example usage::

        with YFClient() as client:
            data = client.get_json(endpoints.QUOTE_URL, {"symbols": "AAPL"})
    """

    def __init__(self, config: Optional[ClientConfig] = None,
                 cache: Optional[TTLCache] = None):
        self.config = config or ClientConfig()

        if self.config.enable_detailed_logging:
            logging.getLogger("yfclient").setLevel(logging.DEBUG)

        self.transport = TLSClient(self.config)
        self.auth = AuthManager(self.transport, crumb_ttl=self.config.crumb_ttl)

        # An injected cache belongs to the caller and is left open on close()
        self._owns_cache = cache is None
        self.cache = cache or TTLCache(
            ttl=self.config.cache_ttl,
            cleanup_interval=self.config.cache_cleanup_interval,
        )
        self._closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def get_json(self, url: str, params: Optional[Mapping[str, Any]] = None,
                 authenticated: bool = True) -> Any:
        """GET a JSON endpoint, attaching the crumb when ``authenticated``."""
        response = self._send(lambda query: self.transport.get(url, query), params, authenticated)
        return response.json()

    def post_json(self, url: str, params: Optional[Mapping[str, Any]] = None,
                  body: Any = None, authenticated: bool = True) -> Any:
        """POST a JSON body to a JSON endpoint."""
        response = self._send(lambda query: self.transport.post_json(url, query, body), params, authenticated)
        return response.json()

    def cached_json(self, key: str, url: str, params: Optional[Mapping[str, Any]] = None,
                    ttl: Optional[float] = None, authenticated: bool = True) -> Any:
        """Memoised :meth:`get_json`; the result is stored under ``key``."""
        value, found = self.cache.get(key)
        if found:
            return value

        value = self.get_json(url, params, authenticated=authenticated)
        if ttl is None:
            self.cache.set(key, value)
        else:
            self.cache.set_with_ttl(key, value, ttl)
        return value

    def _send(self, request: Callable[[Dict[str, Any]], Response],
              params: Optional[Mapping[str, Any]], authenticated: bool) -> Response:
        """Send a request, retrying with the alternate strategy on 401/403."""
        attempts = self.config.max_auth_retries + 1 if authenticated else 1

        for attempt in range(attempts):
            query = dict(params or {})
            if authenticated:
                self.auth.add_crumb_to_params(query)

            response = request(query)
            error = http_status_to_error(response.status_code, response.text)
            if error is None:
                return response

            if isinstance(error, AuthError) and attempt + 1 < attempts:
                logger.warning(
                    f"Crumb rejected with HTTP {response.status_code}, "
                    f"retrying with a fresh crumb ({attempt + 1}/{attempts - 1})"
                )
                self.auth.switch_strategy()
                continue

            raise error

        # Unreachable: the last attempt either returns or raises
        raise AuthError("authentication failed")

    def close(self) -> None:
        """Close the transport and the cache if this client created it."""
        if self._closed:
            return
        self._closed = True

        self.transport.close()
        if self._owns_cache:
            self.cache.close()

    def __repr__(self) -> str:
        return f"<YFClient {self.transport.fingerprint} auth={self.auth.strategy.value}>"


def create_client(config: Optional[ClientConfig] = None, **kwargs) -> YFClient:
    """Create a YFClient from a config, or from keyword overrides of the default config."""
    if config is None:
        config = ClientConfig(**kwargs)
    elif kwargs:
        config = config.with_overrides(**kwargs)
    return YFClient(config)
