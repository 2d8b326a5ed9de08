"""Browser-like request headers and user agents.

The header sets here are sent with every transport request so the request
looks like it came from the browser whose TLS fingerprint is being
impersonated.
"""

import random
from typing import Dict, List, Optional


USER_AGENTS: List[str] = [
    # Chrome
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    # Edge
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36 Edg/124.0.0.0",
    # Firefox
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:125.0) Gecko/20100101 Firefox/125.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14.4; rv:125.0) Gecko/20100101 Firefox/125.0",
    # Safari
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4.1 Safari/605.1.15",
]

ACCEPT_ANY = "application/json,text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
ACCEPT_JSON = "application/json"
ACCEPT_LANGUAGE = "en-US,en;q=0.5"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


def random_user_agent() -> str:
    """Pick a desktop browser user agent."""
    return random.choice(USER_AGENTS)


def get_request_headers(cookie: Optional[str] = None) -> Dict[str, str]:
    """Headers for a GET request."""
    headers = {
        "Accept": ACCEPT_ANY,
        "Accept-Language": ACCEPT_LANGUAGE,
        "Connection": "keep-alive",
    }
    if cookie:
        headers["Cookie"] = cookie
    return headers


def form_post_headers() -> Dict[str, str]:
    """Headers for a URL-encoded form POST.

    The stored cookie is not attached here; the consent form relies on the
    cookies the engine collected from the preceding consent page.
    """
    return {
        "Accept": ACCEPT_ANY,
        "Accept-Language": ACCEPT_LANGUAGE,
        "Content-Type": FORM_CONTENT_TYPE,
        "Connection": "keep-alive",
    }


def json_post_headers(cookie: Optional[str] = None) -> Dict[str, str]:
    """Headers for a POST with a JSON body."""
    headers = {
        "Accept": ACCEPT_JSON,
        "Accept-Language": ACCEPT_LANGUAGE,
        "Content-Type": JSON_CONTENT_TYPE,
        "Connection": "keep-alive",
    }
    if cookie:
        headers["Cookie"] = cookie
    return headers
