"""Error taxonomy for Yahoo Finance requests.

Every error raised by the package is a :class:`YFError` carrying an
:class:`ErrorCode`. Subclasses exist for each kind so callers can either
``except RateLimitError`` or test the code with the ``is_*`` helpers.
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Kinds of failure."""
    UNKNOWN = "unknown"
    NETWORK = "network"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    NOT_FOUND = "not_found"
    INVALID_SYMBOL = "invalid_symbol"
    INVALID_RESPONSE = "invalid_response"
    NO_DATA = "no_data"
    TIMEOUT = "timeout"


class YFError(Exception):
    """Base error for Yahoo Finance operations."""

    default_code = ErrorCode.UNKNOWN
    default_message = "unknown error"

    def __init__(self, message: Optional[str] = None,
                 cause: Optional[BaseException] = None,
                 code: Optional[ErrorCode] = None):
        self.code = code or self.default_code
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code.value!r}, message={self.message!r})"


class NetworkError(YFError):
    """Transport failure or server-side (5xx) error."""
    default_code = ErrorCode.NETWORK
    default_message = "network error"


class AuthError(YFError):
    """Cookie/crumb could not be obtained or was rejected."""
    default_code = ErrorCode.AUTH
    default_message = "authentication failed"


class RateLimitError(YFError):
    default_code = ErrorCode.RATE_LIMIT
    default_message = "rate limited by Yahoo Finance"


class NotFoundError(YFError):
    default_code = ErrorCode.NOT_FOUND
    default_message = "resource not found"


class InvalidSymbolError(YFError):
    default_code = ErrorCode.INVALID_SYMBOL
    default_message = "invalid symbol"


class InvalidResponseError(YFError):
    """Body did not have the expected shape."""
    default_code = ErrorCode.INVALID_RESPONSE
    default_message = "invalid response format"


class NoDataError(YFError):
    default_code = ErrorCode.NO_DATA
    default_message = "no data available"


class RequestTimeoutError(YFError):
    default_code = ErrorCode.TIMEOUT
    default_message = "request timeout"


def _has_code(error: Optional[BaseException], code: ErrorCode) -> bool:
    return isinstance(error, YFError) and error.code is code


def is_rate_limit_error(error: Optional[BaseException]) -> bool:
    return _has_code(error, ErrorCode.RATE_LIMIT)


def is_auth_error(error: Optional[BaseException]) -> bool:
    return _has_code(error, ErrorCode.AUTH)


def is_not_found_error(error: Optional[BaseException]) -> bool:
    return _has_code(error, ErrorCode.NOT_FOUND)


def is_invalid_symbol_error(error: Optional[BaseException]) -> bool:
    return _has_code(error, ErrorCode.INVALID_SYMBOL)


def is_no_data_error(error: Optional[BaseException]) -> bool:
    return _has_code(error, ErrorCode.NO_DATA)


def is_timeout_error(error: Optional[BaseException]) -> bool:
    return _has_code(error, ErrorCode.TIMEOUT)


def http_status_to_error(status_code: int, body: str = "") -> Optional[YFError]:
    """Map an HTTP status code to an error, or ``None`` for non-error statuses.

    Args:
        status_code: HTTP status of the response
        body: Response body, included in the message of uncategorised 4xx errors

    Returns:
        A YFError subclass instance, or None when status_code < 400
    """
    if status_code in (401, 403):
        return AuthError(cause=Exception(f"HTTP {status_code}"))
    if status_code == 404:
        return NotFoundError()
    if status_code == 429:
        return RateLimitError()
    if status_code in (500, 502, 503, 504):
        return NetworkError(f"server error: HTTP {status_code}")
    if status_code >= 400:
        return YFError(f"HTTP {status_code}: {body}")
    return None
