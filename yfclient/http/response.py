"""HTTP response wrapper returned by the transport."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..errors import InvalidResponseError


@dataclass
class Response:
    """Status, raw body and headers of a completed request.

    JSON decoding is left to the caller; :meth:`json` is a convenience that
    raises :class:`InvalidResponseError` on malformed bodies.
    """
    status_code: int
    text: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def ok(self) -> bool:
        """True if status code is less than 400."""
        return self.status_code < 400

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    def json(self) -> Any:
        """Parse response body as JSON."""
        try:
            return json.loads(self.text)
        except (json.JSONDecodeError, TypeError) as e:
            raise InvalidResponseError("JSON unmarshal failed", cause=e) from e

    @classmethod
    def from_curl(cls, response: Any) -> "Response":
        """Build from a curl_cffi response object."""
        return cls(
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
            url=str(response.url),
        )

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"
