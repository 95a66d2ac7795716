"""
=============================================================================
HTTP REQUEST
=============================================================================

The inbound side of the library. Parsing raw bytes off the socket is the
job of the HTTP server we plug into (``http.server``); by the time a
presenter sees a request, it is already this plain, immutable value:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      WHERE REQUESTS COME FROM                       │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   socket ──► http.server ──► HTTPRequest ──► Writer ──► presenters  │
    │              (parsing)       (this module)   (I/O)      (pure)      │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Because the request is frozen, presenters cannot accidentally communicate
through it, and presenting the same request twice gives the same answer.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qs
import json

from .headers import Headers


@dataclass(frozen=True)
class HTTPRequest:
    """
    An HTTP request as seen by presenters.

    =========================================================================
    FIELDS
    =========================================================================

        method          "GET", "POST", ... (matched case-sensitively)
        path            "/api/users" (no query string)
        query_string    "page=1&limit=10" (raw, undecoded)
        version         "HTTP/1.1"
        headers         Headers multi-map (dicts are converted)
        body            raw body bytes
        client_address  (ip, port) of the peer

    =========================================================================
    """

    method: str
    path: str = "/"
    query_string: str = ""
    version: str = "HTTP/1.1"
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""
    client_address: Tuple[str, int] = ("", 0)

    def __post_init__(self):
        if not isinstance(self.headers, Headers):
            object.__setattr__(self, "headers", Headers(self.headers))

    @property
    def url(self) -> str:
        """Path plus query string, as it appeared in the request line."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    @property
    def query_params(self) -> Dict[str, List[str]]:
        return parse_qs(self.query_string, keep_blank_values=True)

    def get_query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the first value of a query parameter."""
        values = self.query_params.get(name)
        return values[0] if values else default

    def get_query_list(self, name: str) -> List[str]:
        return self.query_params.get(name, [])

    def get_header(self, name: str, default: str = "") -> str:
        """Get the first value of a header (case-insensitive)."""
        return self.headers.first(name, default)

    @property
    def content_type(self) -> Optional[str]:
        """Media type from Content-Type, without parameters like charset."""
        value = self.headers.first("Content-Type")
        if value is None:
            return None
        return value.split(";", 1)[0].strip().lower()

    @property
    def content_length(self) -> int:
        try:
            return int(self.headers.first("Content-Length", "0"))
        except ValueError:
            return 0

    @property
    def host(self) -> str:
        return self.get_header("Host")

    @property
    def user_agent(self) -> str:
        return self.get_header("User-Agent")

    @property
    def is_json(self) -> bool:
        return self.content_type == "application/json"

    @property
    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON (json.JSONDecodeError
                        is a ValueError subclass).
        """
        return json.loads(self.body.decode("utf-8"))
