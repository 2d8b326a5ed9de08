"""curl_cffi transport with browser TLS fingerprinting.

Yahoo blocks clients whose TLS handshake does not look like a browser's.
:class:`TLSClient` sends every request through a curl_cffi session that
impersonates Chrome (or a configured JA3 string) and carries a matching
User-Agent.
"""

import json
import logging
import threading
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlencode

from curl_cffi import requests as curl_requests
from curl_cffi.requests.exceptions import RequestException, Timeout

from ..config import ClientConfig
from ..errors import NetworkError, RequestTimeoutError, http_status_to_error
from ..utils import build_url
from .headers import form_post_headers, get_request_headers, json_post_headers, random_user_agent
from .response import Response


logger = logging.getLogger(__name__)

Params = Optional[Mapping[str, Any]]


class TLSClient:
    """Thread-safe HTTP transport shared by every module of a client.

    The underlying curl_cffi session is built lazily on the first request,
    exactly once even under concurrent first use. A session cookie set via
    :meth:`set_cookie` is attached to GET and JSON POST requests.
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()
        self.user_agent = self.config.user_agent or random_user_agent()

        self._session: Optional[curl_requests.Session] = None
        self._init_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._initialized = False
        self._closed = False
        self._cookie = ""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def closed(self) -> bool:
        return self._closed

    def _initialize_session(self) -> curl_requests.Session:
        """Build the curl_cffi session on first use."""
        session = self._session
        if session is not None:
            return session

        with self._init_lock:
            if self._closed:
                raise NetworkError("request failed", cause=RuntimeError("client has been closed"))
            if self._session is None:
                self._session = self._create_session()
                self._initialized = True
                logger.debug(f"Initialized TLS session ({self.fingerprint})")
            return self._session

    def _create_session(self) -> curl_requests.Session:
        session_kwargs: Dict[str, Any] = {
            "timeout": self.config.timeout,
            "verify": self.config.verify_ssl,
        }

        # A raw JA3 string takes precedence over the named browser target
        if self.config.ja3:
            session_kwargs["ja3"] = self.config.ja3
        else:
            session_kwargs["impersonate"] = self.config.impersonate

        if self.config.proxy_url:
            session_kwargs["proxies"] = {"http": self.config.proxy_url, "https": self.config.proxy_url}

        return curl_requests.Session(**session_kwargs)

    @property
    def fingerprint(self) -> str:
        """Identifier of the TLS fingerprint presented by this client."""
        return f"ja3:{self.config.ja3}" if self.config.ja3 else self.config.impersonate

    # Cookie storage

    def set_cookie(self, cookie: str) -> None:
        """Set the cookie sent with subsequent requests."""
        with self._state_lock:
            self._cookie = cookie or ""

    def get_cookie(self) -> str:
        with self._state_lock:
            return self._cookie

    cookie = property(get_cookie, set_cookie)

    def clear_cookies(self) -> None:
        """Drop the session cookie and everything curl_cffi has stored in its jar."""
        with self._state_lock:
            self._cookie = ""
            session = self._session
        if session is not None:
            session.cookies.clear()

    # Requests

    def get(self, url: str, params: Params = None) -> Response:
        """Perform GET request."""
        return self._request("GET", url, params, headers=get_request_headers(self.get_cookie()))

    def post(self, url: str, params: Params = None,
             data: Optional[Mapping[str, str]] = None) -> Response:
        """Perform POST request with a URL-encoded form body."""
        body = urlencode(data or {})
        return self._request("POST", url, params, headers=form_post_headers(), data=body)

    def post_json(self, url: str, params: Params = None,
                  body: Union[str, bytes, Mapping[str, Any], list, None] = None) -> Response:
        """Perform POST request with a raw JSON body.

        ``body`` may already be serialised (str or bytes); anything else is
        passed through ``json.dumps``.
        """
        if body is None:
            payload: Union[str, bytes] = ""
        elif isinstance(body, (str, bytes)):
            payload = body
        else:
            payload = json.dumps(body)

        return self._request("POST", url, params, headers=json_post_headers(self.get_cookie()), data=payload)

    def get_json(self, url: str, params: Params = None) -> Any:
        """GET a URL and decode the JSON body.

        Raises:
            YFError: mapped from the HTTP status when it is 400 or above
            InvalidResponseError: if the body is not valid JSON
        """
        response = self.get(url, params)

        error = http_status_to_error(response.status_code, response.text)
        if error is not None:
            raise error

        return response.json()

    def _request(self, method: str, url: str, params: Params,
                 headers: Dict[str, str], data: Union[str, bytes, None] = None) -> Response:
        """Internal method to perform HTTP requests."""
        if self._closed:
            raise NetworkError(f"{method} request failed", cause=RuntimeError("client has been closed"))

        session = self._initialize_session()
        full_url = build_url(url, params)

        request_headers = dict(headers)
        request_headers["User-Agent"] = self.user_agent

        request_kwargs: Dict[str, Any] = {
            "headers": request_headers,
            "timeout": self.config.timeout,
        }
        if data is not None:
            request_kwargs["data"] = data

        if self.config.enable_detailed_logging:
            logger.debug(f"{method} {full_url}")

        try:
            response = session.request(method, full_url, **request_kwargs)
        except Timeout as e:
            raise RequestTimeoutError(f"{method} request timed out", cause=e) from e
        except RequestException as e:
            raise NetworkError(f"{method} request failed", cause=e) from e

        result = Response.from_curl(response)

        if self.config.enable_detailed_logging:
            logger.debug(f"{method} {full_url} -> {result.status_code}")

        return result

    def close(self) -> None:
        """Release the curl_cffi session.

        Idempotent. A fault raised by the engine's own close routine is
        logged and discarded; it never reaches the caller.
        """
        with self._init_lock:
            if self._closed:
                return
            self._closed = True

            session, self._session = self._session, None
            if session is None:
                return

            try:
                session.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing TLS session: {e}")

    def get_client_info(self) -> Dict[str, Any]:
        """Get information about the client configuration."""
        return {
            "fingerprint": self.fingerprint,
            "impersonate": self.config.impersonate,
            "ja3": self.config.ja3,
            "user_agent": self.user_agent,
            "timeout": self.config.timeout,
            "proxy_url": self.config.proxy_url,
            "initialized": self._initialized,
            "closed": self._closed,
        }

    def __repr__(self) -> str:
        return f"<TLSClient {self.fingerprint} initialized={self._initialized} closed={self._closed}>"
