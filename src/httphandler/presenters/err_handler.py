"""
=============================================================================
ERROR HANDLER
=============================================================================

Adapts an ErrPresenter into a Presenter, so "what happens when something
goes wrong" lives in ONE place instead of in every leaf handler.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         ErrHandler.present                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   response, err = err_presenter.err_present(request)                │
    │                                                                      │
    │   err is not None?  ──yes──►  handle_err(request, err)   (log it)   │
    │                                                                      │
    │   response.status_code != 0 ?                                       │
    │        yes ──► response                (leaf chose the answer)      │
    │        no  ──► fallback configured?                                 │
    │                   yes ──► fallback.present(request)                 │
    │                   no  ──► response     (0 propagates outward)       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Separating "log the error" from "decide the body" means one error callback
can be shared by a whole API while each endpoint still shapes its own
error responses. A leaf that returns (bad_request(...), err) gets its 400
sent AND its error logged.

=============================================================================
"""

from typing import Optional
import logging

from ..http.request import HTTPRequest
from ..http.response import Response, STATUS_UNSET
from .base import (
    ErrorCallback,
    ErrPresenter,
    ErrPresenterLike,
    Presenter,
    PresenterLike,
    as_err_presenter,
    as_presenter,
)


logger = logging.getLogger(__name__)


def log_errors(
    target: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
) -> ErrorCallback:
    """
    Build an error callback that logs failures.

    Each error is logged as ``"<METHOD> <url> failed: <error>"`` with the
    exception attached, so tracebacks show up when the error was raised
    somewhere before being returned.

    Args:
        target: Logger to use (defaults to this module's logger)
        level: Log level for the message

    Returns:
        A callback suitable for ErrHandler / Writer ``handle_err``
    """
    log = target or logger

    def handle_err(request: HTTPRequest, err: Exception) -> None:
        log.log(level, "%s %s failed: %s", request.method, request.url, err, exc_info=err)

    return handle_err


# Default error callback of ErrHandler
log_error = log_errors()


class ErrHandler(Presenter):
    """
    A Presenter that reports errors from an ErrPresenter.

    Usage:
        ErrHandler(
            load_note,                               # ErrPresenter or function
            handle_err=log_errors(api_logger),       # observe the error
            fallback=FixedPresenter(internal_error()),  # used only if status unset
        )

    ``handle_err`` defaults to ``log_error``; pass ``None`` to ignore errors
    entirely. Failures raised by the callback itself propagate to the caller.
    """

    def __init__(
        self,
        err_presenter: ErrPresenterLike,
        handle_err: Optional[ErrorCallback] = log_error,
        fallback: Optional[PresenterLike] = None,
    ):
        self._err_presenter = as_err_presenter(err_presenter)
        self._handle_err = handle_err
        self._fallback = as_presenter(fallback)

    @property
    def err_presenter(self) -> ErrPresenter:
        return self._err_presenter

    @property
    def handle_err(self) -> Optional[ErrorCallback]:
        return self._handle_err

    @property
    def fallback(self) -> Optional[Presenter]:
        return self._fallback

    def present(self, request: HTTPRequest) -> Response:
        response, err = self._err_presenter.err_present(request)

        if err is not None and self._handle_err is not None:
            self._handle_err(request, err)

        # The leaf's own response wins whenever it set a status, even on error
        if response.status_code != STATUS_UNSET or self._fallback is None:
            return response

        return self._fallback.present(request)

    def __repr__(self) -> str:
        return f"ErrHandler({self._err_presenter.name})"
