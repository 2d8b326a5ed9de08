"""Cookie and crumb acquisition strategies.

Each strategy is a plain function taking the shared transport and returning
:class:`Credentials`, or raising a :class:`YFError` that names the failed
step. :class:`AuthStrategy` tags which one a manager prefers.
"""

import logging
from enum import Enum
from typing import Callable, Dict, NamedTuple, Optional

from .. import endpoints
from ..errors import InvalidResponseError, RateLimitError, YFError
from ..http import Response, TLSClient
from .parser import extract_input_value


logger = logging.getLogger(__name__)


class AuthStrategy(Enum):
    """Cookie acquisition flow."""
    BASIC = "basic"  # fc.yahoo.com cookie endpoint
    CSRF = "csrf"  # guce.yahoo.com consent flow, needed in consent-gated regions

    @property
    def alternate(self) -> "AuthStrategy":
        return AuthStrategy.CSRF if self is AuthStrategy.BASIC else AuthStrategy.BASIC


class Credentials(NamedTuple):
    cookie: str
    crumb: str


def parse_set_cookie(set_cookie: Optional[str]) -> str:
    """Reduce a raw Set-Cookie header to its ``name=value`` pair."""
    if not set_cookie:
        return ""
    name_value = set_cookie.split(';', 1)[0].strip()
    if '=' not in name_value:
        return ""
    return name_value


def _cookie_from(response: Response) -> str:
    return parse_set_cookie(response.header("Set-Cookie"))


def _step(description: str, call: Callable[[], Response]) -> Response:
    """Run one round trip, wrapping transport failures with the step name."""
    try:
        return call()
    except YFError as e:
        raise type(e)(f"failed to {description}", cause=e, code=e.code) from e


def validate_crumb_response(response: Response) -> str:
    """Return the crumb carried by a getcrumb response.

    Raises:
        RateLimitError: on HTTP 429 or a rate-limit page
        InvalidResponseError: on an empty body or an HTML error page
    """
    body = response.text or ""
    if response.status_code == 429 or endpoints.RATE_LIMIT_MARKER in body:
        raise RateLimitError("rate limited")

    crumb = body.strip()
    if not crumb or endpoints.HTML_MARKER in body:
        raise InvalidResponseError("invalid crumb response")
    return crumb


def fetch_basic(client: TLSClient) -> Credentials:
    """Basic strategy.

    1. GET fc.yahoo.com and keep the cookie it sets.
    2. GET the getcrumb endpoint; the body is the crumb.
    """
    response = _step("get cookie", lambda: client.get(endpoints.COOKIE_URL))
    cookie = _cookie_from(response)
    if cookie:
        client.set_cookie(cookie)
    else:
        cookie = client.get_cookie()

    response = _step("get crumb", lambda: client.get(endpoints.CRUMB_URL))
    crumb = validate_crumb_response(response)

    return Credentials(cookie=cookie, crumb=crumb)


def fetch_csrf(client: TLSClient) -> Credentials:
    """CSRF consent strategy, used where the cookie endpoint is consent-gated.

    1. GET the consent page and scrape ``csrfToken`` and ``sessionId``.
    2. POST the consent form.
    3. GET copyConsent.
    4. GET the getcrumb endpoint.
    """
    response = _step("get consent page", lambda: client.get(endpoints.CONSENT_URL))
    cookie = _cookie_from(response)

    csrf_token = extract_input_value(response.text, "csrfToken")
    session_id = extract_input_value(response.text, "sessionId")
    if not csrf_token or not session_id:
        raise InvalidResponseError("failed to extract CSRF tokens")

    consent_data = {
        "agree": "agree",
        "consentUUID": "default",
        "sessionId": session_id,
        "csrfToken": csrf_token,
        "originalDoneUrl": endpoints.CONSENT_DONE_URL,
        "namespace": endpoints.CONSENT_NAMESPACE,
    }
    session_params = {"sessionId": session_id}

    response = _step(
        "submit consent",
        lambda: client.post(endpoints.COLLECT_CONSENT_URL, session_params, consent_data),
    )
    cookie = _cookie_from(response) or cookie

    response = _step(
        "copy consent",
        lambda: client.get(endpoints.COPY_CONSENT_URL, session_params),
    )
    cookie = _cookie_from(response) or cookie

    if cookie:
        client.set_cookie(cookie)
    else:
        cookie = client.get_cookie()

    response = _step("get crumb", lambda: client.get(endpoints.CRUMB_CSRF_URL))
    crumb = validate_crumb_response(response)

    return Credentials(cookie=cookie, crumb=crumb)


STRATEGIES: Dict[AuthStrategy, Callable[[TLSClient], Credentials]] = {
    AuthStrategy.BASIC: fetch_basic,
    AuthStrategy.CSRF: fetch_csrf,
}


def run_strategy(strategy: AuthStrategy, client: TLSClient) -> Credentials:
    """Run the flow selected by ``strategy``."""
    logger.debug(f"Fetching crumb with {strategy.value} strategy")
    return STRATEGIES[strategy](client)
