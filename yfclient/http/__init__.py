"""HTTP transport with browser TLS fingerprinting.

Provides the shared transport used by every request the package makes,
along with the browser header sets and the response wrapper.
"""

from typing import Optional

from ..config import ClientConfig
from .client import TLSClient
from .headers import (
    USER_AGENTS,
    get_request_headers,
    form_post_headers,
    json_post_headers,
    random_user_agent,
)
from .response import Response


def create_tls_client(config: Optional[ClientConfig] = None, **kwargs) -> TLSClient:
    """Create a transport from a config, or from keyword overrides of the default config."""
    if config is None:
        config = ClientConfig(**kwargs)
    elif kwargs:
        config = config.with_overrides(**kwargs)
    return TLSClient(config)


__all__ = [
    # Classes
    "TLSClient",
    "Response",

    # Headers
    "USER_AGENTS",
    "get_request_headers",
    "form_post_headers",
    "json_post_headers",
    "random_user_agent",

    # Functions
    "create_tls_client",
]
