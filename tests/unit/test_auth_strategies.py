"""
Unit tests for the Basic and CSRF-consent crumb strategies.
"""

import pytest

from fakes import CONSENT_PAGE, FakeTransport

from yfclient import endpoints
from yfclient.auth import AuthStrategy, Credentials, fetch_basic, fetch_csrf, run_strategy
from yfclient.errors import InvalidResponseError, NetworkError, RateLimitError
from yfclient.http import Response


@pytest.fixture
def transport():
    return FakeTransport()


def queue_csrf_flow(transport, crumb="csrf-crumb"):
    transport.queue("GET", endpoints.CONSENT_URL, Response(200, CONSENT_PAGE))
    transport.queue("POST", endpoints.COLLECT_CONSENT_URL, Response(200, "ok"))
    transport.queue("GET", endpoints.COPY_CONSENT_URL,
                    Response(200, "", {"set-cookie": "GUC=consented; Path=/"}))
    transport.queue("GET", endpoints.CRUMB_CSRF_URL, Response(200, crumb))


class TestAuthStrategy:
    def test_alternate(self):
        assert AuthStrategy.BASIC.alternate is AuthStrategy.CSRF
        assert AuthStrategy.CSRF.alternate is AuthStrategy.BASIC


class TestBasicStrategy:
    """Test the fc.yahoo.com cookie + getcrumb flow."""

    def test_success(self, transport):
        transport.queue("GET", endpoints.COOKIE_URL,
                        Response(404, "", {"Set-Cookie": "A3=cookie-value; Domain=.yahoo.com"}))
        transport.queue("GET", endpoints.CRUMB_URL, Response(200, "crumb-123\n"))

        credentials = fetch_basic(transport)

        assert credentials == Credentials(cookie="A3=cookie-value", crumb="crumb-123")
        assert transport.cookie == "A3=cookie-value"

    def test_cookie_step_network_failure(self, transport):
        transport.queue("GET", endpoints.COOKIE_URL, NetworkError("GET request failed"))

        with pytest.raises(NetworkError) as exc_info:
            fetch_basic(transport)
        assert "failed to get cookie" in str(exc_info.value)

    def test_crumb_step_network_failure(self, transport):
        transport.queue("GET", endpoints.COOKIE_URL, Response(200, ""))
        transport.queue("GET", endpoints.CRUMB_URL, NetworkError("GET request failed"))

        with pytest.raises(NetworkError) as exc_info:
            fetch_basic(transport)
        assert "failed to get crumb" in str(exc_info.value)

    def test_rate_limited(self, transport):
        transport.queue("GET", endpoints.COOKIE_URL, Response(200, ""))
        transport.queue("GET", endpoints.CRUMB_URL, Response(429, "Too Many Requests"))

        with pytest.raises(RateLimitError):
            fetch_basic(transport)

    def test_html_error_page(self, transport):
        transport.queue("GET", endpoints.COOKIE_URL, Response(200, ""))
        transport.queue("GET", endpoints.CRUMB_URL, Response(200, "<html><body>denied</body></html>"))

        with pytest.raises(InvalidResponseError):
            fetch_basic(transport)


class TestCSRFStrategy:
    """Test the four-step consent flow."""

    def test_success(self, transport):
        queue_csrf_flow(transport)

        credentials = run_strategy(AuthStrategy.CSRF, transport)

        assert credentials == Credentials(cookie="GUC=consented", crumb="csrf-crumb")
        assert transport.cookie == "GUC=consented"

    def test_consent_form_payload(self, transport):
        queue_csrf_flow(transport)

        fetch_csrf(transport)

        post_calls = [call for call in transport.calls if call[0] == "POST"]
        assert len(post_calls) == 1
        _, url, params, data = post_calls[0]
        assert url == endpoints.COLLECT_CONSENT_URL
        assert params == {"sessionId": "sess-123"}
        assert data == {
            "agree": "agree",
            "consentUUID": "default",
            "sessionId": "sess-123",
            "csrfToken": "csrf-abc",
            "originalDoneUrl": "https://finance.yahoo.com/",
            "namespace": "yahoo",
        }

    def test_copy_consent_carries_session_id(self, transport):
        queue_csrf_flow(transport)

        fetch_csrf(transport)

        copy_calls = [call for call in transport.calls if call[1] == endpoints.COPY_CONSENT_URL]
        assert copy_calls[0][2] == {"sessionId": "sess-123"}

    def test_missing_tokens(self, transport):
        transport.queue("GET", endpoints.CONSENT_URL,
                        Response(200, '<input name="csrfToken" value="only-csrf">'))

        with pytest.raises(InvalidResponseError) as exc_info:
            fetch_csrf(transport)
        assert "failed to extract CSRF tokens" in str(exc_info.value)
        assert transport.count("POST", endpoints.COLLECT_CONSENT_URL) == 0

    def test_submit_failure(self, transport):
        transport.queue("GET", endpoints.CONSENT_URL, Response(200, CONSENT_PAGE))
        transport.queue("POST", endpoints.COLLECT_CONSENT_URL, NetworkError("POST request failed"))

        with pytest.raises(NetworkError) as exc_info:
            fetch_csrf(transport)
        assert "failed to submit consent" in str(exc_info.value)

    def test_keeps_existing_cookie_when_none_set(self, transport):
        transport.cookie = "A3=existing"
        transport.queue("GET", endpoints.CONSENT_URL, Response(200, CONSENT_PAGE))
        transport.queue("POST", endpoints.COLLECT_CONSENT_URL, Response(200, "ok"))
        transport.queue("GET", endpoints.COPY_CONSENT_URL, Response(200, ""))
        transport.queue("GET", endpoints.CRUMB_CSRF_URL, Response(200, "c"))

        credentials = fetch_csrf(transport)

        assert credentials.cookie == "A3=existing"
