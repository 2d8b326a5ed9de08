"""Utility helpers shared across the package."""

from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from .locks import ReadWriteLock


# URL utilities
def build_url(base: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Append URL-encoded query parameters to a URL.

    ``None`` values are skipped; list or tuple values repeat the key.
    """
    if not params:
        return base

    query = urlencode(
        [(key, item) for key, value in params.items() if value is not None
         for item in (value if isinstance(value, (list, tuple)) else [value])]
    )
    if not query:
        return base

    separator = "&" if "?" in base else "?"
    return f"{base}{separator}{query}"


__all__ = [
    'ReadWriteLock',
    'build_url',
]
