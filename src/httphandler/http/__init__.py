"""
=============================================================================
HTTP VALUES
=============================================================================

The plain values that flow through a handler tree:

    HTTPRequest   what came in (built by the server binding)
    Response      what a presenter computed (immutable)
    Headers       ordered, case-insensitive header multi-map

Nothing in this package performs I/O.

=============================================================================
"""

from .headers import Headers, canonical_header_key
from .request import HTTPRequest
from .response import (
    DEFAULT_STATUS,
    STATUS_UNSET,
    Response,
    ResponseBuilder,
    bad_request,
    created,
    internal_error,
    method_not_allowed,
    no_content,
    not_found,
    ok,
)

__all__ = [
    # Values
    "HTTPRequest",
    "Response",
    "Headers",
    "canonical_header_key",

    # Status conventions
    "STATUS_UNSET",
    "DEFAULT_STATUS",

    # Building responses
    "ResponseBuilder",
    "ok",
    "created",
    "no_content",
    "bad_request",
    "not_found",
    "method_not_allowed",
    "internal_error",
]
