"""
=============================================================================
ENDPOINT ASSEMBLY
=============================================================================

Most APIs want every endpoint to behave the same way around the edges:

    1. the same response when the method is not supported
    2. the same generic response when something fails unexpectedly
    3. errors logged in one place, not in every handler
    4. responses written the same way

``new_handler`` builds that standard tree once, so an endpoint only has to
supply its ErrPresenters:

    Writer(handle_err=handle_write_err)
      └── DefaultResp(default=<500 unexpected error>)
            └── Dispatcher(method_not_supported=<405 + Allow>)
                  ├── "GET"  ─► ErrHandler(list_notes,  handle_err)
                  └── "POST" ─► ErrHandler(create_note, handle_err)

    notes = new_handler({"GET": list_notes, "POST": create_note})
    serve(notes, ServerConfig(port=8080))

=============================================================================
"""

from http import HTTPStatus
from typing import Mapping, Optional

from .core.writer import Writer
from .http.request import HTTPRequest
from .http.response import Response, ResponseBuilder, method_not_allowed
from .presenters.base import ErrorCallback, ErrPresenterLike, FixedPresenter, PresenterLike
from .presenters.default_resp import DefaultResp
from .presenters.dispatcher import Dispatcher
from .presenters.err_handler import ErrHandler, log_error


def unexpected_error(request: HTTPRequest) -> Response:
    """Generic 500 naming the endpoint, used when a leaf leaves the status unset."""
    return (ResponseBuilder()
        .status(HTTPStatus.INTERNAL_SERVER_ERROR)
        .json({"error": f"unexpected error on the {request.method} {request.path} endpoint"})
        .build())


def new_handler(
    method_to_err_presenter: Mapping[str, ErrPresenterLike],
    handle_err: Optional[ErrorCallback] = log_error,
    method_not_supported: Optional[PresenterLike] = None,
    default: Optional[PresenterLike] = None,
    handle_write_err: Optional[ErrorCallback] = None,
) -> Writer:
    """
    Build the standard handler tree for one endpoint.

    Args:
        method_to_err_presenter: HTTP method -> ErrPresenter (or function)
        handle_err: Callback for errors returned by the ErrPresenters
        method_not_supported: Presenter for unmapped methods
                              (default: 405 with an Allow header)
        default: Presenter used when a leaf leaves the status unset
                 (default: ``unexpected_error``)
        handle_write_err: Callback for failed body writes

    Returns:
        A Writer ready to be served.
    """
    methods = list(method_to_err_presenter)
    dispatcher = Dispatcher(
        {
            method: ErrHandler(err_presenter, handle_err=handle_err)
            for method, err_presenter in method_to_err_presenter.items()
        },
        method_not_supported=method_not_supported or FixedPresenter(method_not_allowed(methods)),
    )
    return Writer(
        DefaultResp(dispatcher, default_presenter=default or unexpected_error),
        handle_err=handle_write_err,
    )
