"""In-memory TTL caching.

Used for data that is fetched often and changes rarely, such as timezone
mappings and ticker metadata.
"""

from .ttl import (
    TTLCache,
    get_global_cache,
    set_global,
    set_global_with_ttl,
    get_global,
    get_global_string,
    delete_global,
    clear_global,
)

__all__ = [
    "TTLCache",
    "get_global_cache",
    "set_global",
    "set_global_with_ttl",
    "get_global",
    "get_global_string",
    "delete_global",
    "clear_global",
]
