"""Yahoo Finance authentication (cookie + crumb).

Provides the crumb manager, the two acquisition strategies, and the
consent-page form parser they rely on.
"""

from .manager import AuthManager
from .parser import extract_input_value, extract_input_values
from .strategies import (
    AuthStrategy,
    Credentials,
    STRATEGIES,
    fetch_basic,
    fetch_csrf,
    parse_set_cookie,
    run_strategy,
    validate_crumb_response,
)

__all__ = [
    # Classes
    "AuthManager",
    "Credentials",

    # Enums
    "AuthStrategy",

    # Strategies
    "STRATEGIES",
    "fetch_basic",
    "fetch_csrf",
    "run_strategy",

    # Parsing
    "extract_input_value",
    "extract_input_values",
    "parse_set_cookie",
    "validate_crumb_response",
]
