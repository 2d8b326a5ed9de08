"""Session core for the Yahoo Finance web API.

Yahoo Finance rejects clients that do not look like a browser and requires
a cookie plus an anti-automation crumb on its data endpoints. This package
provides the pieces every data module builds on:

- A TLS-fingerprinting HTTP transport (curl_cffi, Chrome impersonation)
- Crumb acquisition with Basic and CSRF-consent strategies and automatic fallback
- A thread-safe TTL cache with background expiry sweeps
- A client facade that wires the three together
"""

from .config import ClientConfig, DEFAULT_CONFIG, DEFAULT_JA3
from .errors import (
    ErrorCode,
    YFError,
    NetworkError,
    AuthError,
    RateLimitError,
    NotFoundError,
    InvalidSymbolError,
    InvalidResponseError,
    NoDataError,
    RequestTimeoutError,
    http_status_to_error,
    is_rate_limit_error,
    is_auth_error,
    is_not_found_error,
    is_invalid_symbol_error,
    is_no_data_error,
    is_timeout_error,
)
from .http import TLSClient, Response, create_tls_client, random_user_agent
from .auth import AuthManager, AuthStrategy, extract_input_value
from .cache import (
    TTLCache,
    get_global_cache,
    set_global,
    set_global_with_ttl,
    get_global,
    get_global_string,
    delete_global,
    clear_global,
)
from .client import YFClient, create_client
from . import endpoints

# Version information
__version__ = "0.3.0"
__license__ = "MIT"
__title__ = "yfclient"
__description__ = "TLS-fingerprinted session, crumb and cache core for the Yahoo Finance API"


__all__ = [
    # Client
    "YFClient",
    "create_client",
    "ClientConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_JA3",

    # Transport
    "TLSClient",
    "Response",
    "create_tls_client",
    "random_user_agent",

    # Authentication
    "AuthManager",
    "AuthStrategy",
    "extract_input_value",

    # Cache
    "TTLCache",
    "get_global_cache",
    "set_global",
    "set_global_with_ttl",
    "get_global",
    "get_global_string",
    "delete_global",
    "clear_global",

    # Errors
    "ErrorCode",
    "YFError",
    "NetworkError",
    "AuthError",
    "RateLimitError",
    "NotFoundError",
    "InvalidSymbolError",
    "InvalidResponseError",
    "NoDataError",
    "RequestTimeoutError",
    "http_status_to_error",
    "is_rate_limit_error",
    "is_auth_error",
    "is_not_found_error",
    "is_invalid_symbol_error",
    "is_no_data_error",
    "is_timeout_error",

    # Modules
    "endpoints",

    # Version info
    "__version__",
]


# Module initialization
def _initialize_logging():
    """Initialize default logging configuration."""
    import logging

    logger = logging.getLogger(__name__)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)


# Initialize on import
_initialize_logging()
