"""
=============================================================================
RESPONSE VALUE
=============================================================================

The one piece of data every component in this library exchanges.

Presenters COMPUTE a Response; only the Writer turns it into bytes on the
wire. Keeping the Response a plain immutable value is what makes
presenters trivial to test: call, then compare.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                          RESPONSE FIELDS                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   status_code   int     0 = "unset" (see below), else HTTP status   │
    │   headers       multi   {"Vary": ["Origin", "Accept-Encoding"]}     │
    │   body          bytes   opaque; b"" is a valid, empty body          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
THE UNSET STATUS (0)
=============================================================================

A status code of 0 means "this presenter did not produce a real answer".

    - DefaultResp swaps in its default presenter's response
    - ErrHandler swaps in its fallback presenter's response (if any)
    - Writer writes 200, matching what a server does when a body is
      written without an explicit status

A consequence: a presenter cannot return 0 as a final status. Nothing
legitimate needs to, so this is treated as unsupported.

=============================================================================
BUILDER PATTERN
=============================================================================

Responses can be built directly:

    Response(status_code=200, headers={"Content-Type": ["text/plain"]}, body=b"hi")

or with the fluent builder:

    ResponseBuilder().status(HTTPStatus.OK).text("hi").header("Vary", "Origin").build()

The builder's header() APPENDS, so repeated calls produce multi-valued
headers rather than overwriting.

Whatever mapping is passed in, a Response keeps its own read-only copy
with tuple values: {"Content-Type": ("text/plain",)}. Changing the
caller's dict afterwards does not change the Response.

=============================================================================
"""

from dataclasses import dataclass, field, replace
from http import HTTPStatus
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Union
import json

from .headers import Headers, _as_value_list


# Reserved "not explicitly provided" status
STATUS_UNSET = 0

# What the Writer commits when a presenter leaves the status unset
DEFAULT_STATUS = int(HTTPStatus.OK)


@dataclass(frozen=True)
class Response:
    """
    Immutable HTTP response produced by a presenter.

    Adapters never patch a Response they received; they either return it
    unchanged or return a different one. Use ``replace()`` to derive a
    modified copy.
    """

    status_code: int = STATUS_UNSET
    headers: Mapping[str, Union[str, Sequence[str]]] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self):
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

        # One Response may be shared by every request (FixedPresenter)
        object.__setattr__(self, "headers", MappingProxyType({
            name: tuple(_as_value_list(values)) for name, values in self.headers.items()
        }))

    @property
    def has_status(self) -> bool:
        """True unless the status code is the unset sentinel."""
        return self.status_code != STATUS_UNSET

    @property
    def reason_phrase(self) -> str:
        """Standard reason phrase for the status, or "" when unknown."""
        try:
            return HTTPStatus(self.status_code).phrase
        except ValueError:
            return ""

    def replace(self, **changes: Any) -> "Response":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)


class ResponseBuilder:
    """
    Fluent builder for Response values.

    Each method returns ``self`` so calls chain:

        response = (ResponseBuilder()
            .status(HTTPStatus.CREATED)
            .json({"id": 7})
            .header("Location", "/notes/7")
            .build())

    If ``status()`` is never called the built response keeps the unset
    status, so an outer DefaultResp or the Writer decides the status.
    """

    def __init__(self):
        self._status = STATUS_UNSET
        self._headers = Headers()
        self._body = b""

    # =========================================================================
    # STATUS
    # =========================================================================

    def status(self, status: int) -> "ResponseBuilder":
        self._status = int(status)
        return self

    # =========================================================================
    # HEADERS
    # =========================================================================

    def header(self, name: str, value: str) -> "ResponseBuilder":
        """Append a header value (repeated names become multi-valued)."""
        self._headers.add(name, value)
        return self

    def headers(self, headers: Mapping[str, Union[str, Sequence[str]]]) -> "ResponseBuilder":
        """Append every value of a header mapping."""
        self._headers.extend(headers)
        return self

    def content_type(self, content_type: str) -> "ResponseBuilder":
        """Set (not append) the Content-Type header."""
        self._headers.set("Content-Type", content_type)
        return self

    # =========================================================================
    # BODY
    # =========================================================================

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        """Set a raw body; strings are encoded as UTF-8."""
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        return self

    def text(self, text: str, content_type: str = "text/plain; charset=utf-8") -> "ResponseBuilder":
        self._body = text.encode("utf-8")
        return self.content_type(content_type)

    def json(self, data: Any, pretty: bool = False) -> "ResponseBuilder":
        """
        Serialize ``data`` as the JSON body.

        ensure_ascii=False keeps non-ASCII text readable instead of
        escaping it to \\uXXXX sequences.
        """
        indent = 2 if pretty else None
        self._body = json.dumps(data, indent=indent, ensure_ascii=False).encode("utf-8")
        return self.content_type("application/json; charset=utf-8")

    # =========================================================================
    # BUILD
    # =========================================================================

    def build(self) -> Response:
        return Response(
            status_code=self._status,
            headers=self._headers.to_dict(),
            body=self._body,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
# One-liners for the common responses. All of them set an explicit status,
# so they are never replaced by a fallback presenter.
#
#     return ok({"notes": notes})
#     return not_found("no such note")
#
# =============================================================================

def ok(body: Union[str, bytes, dict, list] = "", content_type: Optional[str] = None) -> Response:
    """
    200 OK.

    dict/list bodies become JSON, str bodies plain text, bytes are sent as-is.
    """
    builder = ResponseBuilder().status(HTTPStatus.OK)

    if isinstance(body, (dict, list)):
        builder.json(body)
    elif isinstance(body, str):
        builder.text(body, content_type or "text/plain; charset=utf-8")
    else:
        builder.body(body)
        if content_type:
            builder.content_type(content_type)

    return builder.build()


def created(body: Union[str, bytes, dict, list] = "", location: Optional[str] = None) -> Response:
    """201 Created, optionally pointing at the new resource with Location."""
    builder = ResponseBuilder().status(HTTPStatus.CREATED)

    if isinstance(body, (dict, list)):
        builder.json(body)
    elif body:
        builder.body(body)

    if location:
        builder.header("Location", location)

    return builder.build()


def no_content() -> Response:
    return Response(status_code=int(HTTPStatus.NO_CONTENT))


def bad_request(message: str = "Bad Request") -> Response:
    return ResponseBuilder().status(HTTPStatus.BAD_REQUEST).json({"error": message}).build()


def not_found(message: str = "Not Found") -> Response:
    return ResponseBuilder().status(HTTPStatus.NOT_FOUND).json({"error": message}).build()


def method_not_allowed(allowed_methods: Sequence[str]) -> Response:
    """
    405 Method Not Allowed.

    RFC 7231 requires the Allow header listing the methods that are valid
    for the resource.
    """
    return (ResponseBuilder()
        .status(HTTPStatus.METHOD_NOT_ALLOWED)
        .header("Allow", ", ".join(allowed_methods))
        .json({"error": "Method Not Allowed", "allowed": list(allowed_methods)})
        .build())


def internal_error(message: str = "Internal Server Error") -> Response:
    """500 Internal Server Error. Keep ``message`` generic in production."""
    return ResponseBuilder().status(HTTPStatus.INTERNAL_SERVER_ERROR).json({"error": message}).build()
