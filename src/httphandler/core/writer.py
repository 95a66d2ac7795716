"""
=============================================================================
WRITER - THE I/O BOUNDARY
=============================================================================

Everything above the Writer is pure computation. The Writer is the single
place where a Response becomes bytes on the wire:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       Writer.serve_http                             │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. response = presenter.present(request)                          │
    │                                                                      │
    │   2. headers   for each name, for each value:                       │
    │                    response_writer.headers.add(name, value)         │
    │                (ADD, not set: multi-valued headers survive)         │
    │                                                                      │
    │   3. status    0 ──► 200   (same as a server that sees a body       │
    │                             written before any status)              │
    │                                                                      │
    │   4. response_writer.write_header(status)                           │
    │      response_writer.write(body)                                    │
    │                                                                      │
    │   5. write failed? ──► handle_err(request, error), if configured    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Order matters: headers must be in place before the status is committed,
because committing the status is what sends the header block.

=============================================================================
WHY WRITE FAILURES ARE ONLY REPORTED
=============================================================================

By the time the body write fails, the status line and headers have
usually been flushed already. There is no way to send a different
response, so the only sensible policy is best-effort notification. With
no callback configured the failure is dropped; it never propagates into
the server.

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging

from ..http.headers import Headers
from ..http.request import HTTPRequest
from ..http.response import DEFAULT_STATUS, STATUS_UNSET
from ..presenters.base import ErrorCallback, Presenter, PresenterLike, as_presenter


logger = logging.getLogger(__name__)


class ResponseWriter(ABC):
    """
    The outbound channel for one request.

    =========================================================================
    CONTRACT
    =========================================================================

    headers:
        Mutable Headers. Changes take effect until the status is committed.

    write_header(status_code):
        Commit the status line and headers. Only the first call counts.

    write(data):
        Write body bytes, committing status 200 first if nothing was
        committed yet. Raises (typically OSError) when the write fails.

    A ResponseWriter belongs to exactly one request and is never shared.

    =========================================================================
    """

    @property
    @abstractmethod
    def headers(self) -> Headers:
        """Headers to send with the status line."""

    @abstractmethod
    def write_header(self, status_code: int) -> None:
        """Commit the status code and headers."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write body bytes and return how many were written."""


class Handler(ABC):
    """Something the server binding can hand a request and a ResponseWriter."""

    @abstractmethod
    def serve_http(self, request: HTTPRequest, response_writer: ResponseWriter) -> None:
        """Respond to ``request`` through ``response_writer``."""


class Writer(Handler):
    """
    Writes the response returned by a Presenter.

    Usage:
        handler = Writer(
            DefaultResp(dispatcher, FixedPresenter(internal_error())),
            handle_err=log_errors(),
        )
        serve(handler, ServerConfig(port=8080))

    ``handle_err`` is called with ``(request, error)`` when writing the
    body fails; when it is None such failures are ignored.
    """

    def __init__(self, presenter: PresenterLike, handle_err: Optional[ErrorCallback] = None):
        self._presenter = as_presenter(presenter)
        self._handle_err = handle_err

    @property
    def presenter(self) -> Presenter:
        return self._presenter

    @property
    def handle_err(self) -> Optional[ErrorCallback]:
        return self._handle_err

    def serve_http(self, request: HTTPRequest, response_writer: ResponseWriter) -> None:
        response = self._presenter.present(request)

        # Headers go in before write_header(), which sends them
        headers = response_writer.headers
        for name, values in response.headers.items():
            if isinstance(values, str):
                values = [values]
            for value in values:
                headers.add(name, value)

        status_code = response.status_code
        if status_code == STATUS_UNSET:
            status_code = DEFAULT_STATUS
        response_writer.write_header(int(status_code))

        try:
            response_writer.write(response.body)
        except Exception as exc:
            if self._handle_err is None:
                logger.debug("Dropped body write failure for %s %s: %s", request.method, request.url, exc)
                return
            self._handle_err(request, exc)

    def __repr__(self) -> str:
        return f"Writer({self._presenter.name})"
