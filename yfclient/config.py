"""Client configuration."""

from dataclasses import dataclass, replace
from typing import Optional


# Chrome JA3 fingerprint, usable as an explicit override of the impersonation target
DEFAULT_JA3 = (
    "771,4865-4866-4867-49195-49199-49196-49200-52393-52392-49171-49172-156-157-47-53,"
    "0-23-65281-10-11-35-16-5-13-18-51-45-43-27-17513,29-23-24,0"
)
DEFAULT_IMPERSONATE = "chrome124"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CRUMB_TTL = 3600.0  # 1 hour
DEFAULT_CACHE_TTL = 300.0  # 5 minutes
DEFAULT_CACHE_CLEANUP_INTERVAL = 600.0  # 10 minutes


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for the transport, the crumb manager and the cache."""

    # HTTP settings
    timeout: float = DEFAULT_TIMEOUT
    proxy_url: Optional[str] = None
    verify_ssl: bool = True

    # TLS / browser fingerprint
    impersonate: str = DEFAULT_IMPERSONATE  # curl_cffi impersonation target
    ja3: Optional[str] = None  # overrides impersonate when set
    user_agent: Optional[str] = None  # random desktop UA when unset

    # Authentication
    crumb_ttl: float = DEFAULT_CRUMB_TTL
    max_auth_retries: int = 1

    # Cache
    cache_ttl: float = DEFAULT_CACHE_TTL
    cache_cleanup_interval: float = DEFAULT_CACHE_CLEANUP_INTERVAL

    # Logging
    enable_detailed_logging: bool = False

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.crumb_ttl <= 0:
            raise ValueError("crumb_ttl must be positive")
        if self.cache_ttl <= 0 or self.cache_cleanup_interval <= 0:
            raise ValueError("cache_ttl and cache_cleanup_interval must be positive")
        if self.max_auth_retries < 0:
            raise ValueError("max_auth_retries cannot be negative")

    def with_overrides(self, **kwargs) -> "ClientConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **kwargs)


DEFAULT_CONFIG = ClientConfig()
