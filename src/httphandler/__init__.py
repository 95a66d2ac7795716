"""
=============================================================================
HTTPHANDLER - HTTP Handlers Composed From Pure Presenters
=============================================================================

After writing and reading enough HTTP handlers, the same code keeps
showing up in all of them:

    def handle(request, response_writer):
        if request.method == "GET":
            status, body, err = handle_get(request)
        elif request.method == "POST":
            status, body, err = handle_post(request)
        else:
            status = 405
        if err is not None:
            log.error("an error occurred: %s", err)
            status, body = 500, "unexpected error"
        response_writer.write_header(status)
        response_writer.write(body)

Every handler re-does four things:

    1. Dispatch on the request method
    2. Log an error if one occurred
    3. Build a response when something fails (usually a generic 500)
    4. Write the response (headers BEFORE the status, and so on)

This package has one small type for each of them, and they compose into
a regular handler.

=============================================================================
THE CORE IDEA
=============================================================================

Handlers are easier to write and test when they RETURN data instead of
writing it. So the building block is the Presenter:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   Handler      serve_http(request, response_writer)   does I/O      │
    │   Presenter    present(request) -> Response           pure          │
    │   ErrPresenter err_present(request) -> (Response, error)            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    1. Dispatcher     picks a presenter by request method
    2. ErrHandler     reports errors, turns an ErrPresenter into a Presenter
    3. DefaultResp    substitutes a default when the status is unset (0)
    4. Writer         the Handler that writes a presenter's Response

=============================================================================
QUICK START
=============================================================================

    from httphandler import (
        ServerConfig, bad_request, err_presenter, new_handler, ok, serve,
    )

    @err_presenter
    def list_notes(request):
        return ok({"notes": NOTES}), None

    @err_presenter
    def create_note(request):
        try:
            note = request.json["text"]
        except (ValueError, KeyError, TypeError) as exc:
            return bad_request("expected a JSON object with 'text'"), exc
        NOTES.append(note)
        return ok({"created": note}), None

    serve(new_handler({"GET": list_notes, "POST": create_note}),
          ServerConfig(port=8080))

Not every endpoint has to use every piece. Handlers that don't fit the
mold can implement Handler directly.

=============================================================================
"""

__version__ = "0.1.0"

from .app import new_handler, unexpected_error
from .config import ServerConfig
from .core import Handler, ResponseRecorder, ResponseWriter, Writer, create_server, serve
from .errors import ConfigurationError
from .http import (
    DEFAULT_STATUS,
    STATUS_UNSET,
    Headers,
    HTTPRequest,
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
from .presenters import (
    DefaultResp,
    Dispatcher,
    ErrHandler,
    ErrPresenter,
    ErrPresenterFunc,
    FixedPresenter,
    Presenter,
    PresenterFunc,
    err_presenter,
    log_error,
    log_errors,
    presenter,
)

__all__ = [
    # Values
    "HTTPRequest",
    "Response",
    "Headers",
    "ResponseBuilder",
    "STATUS_UNSET",
    "DEFAULT_STATUS",
    "ok",
    "created",
    "no_content",
    "bad_request",
    "not_found",
    "method_not_allowed",
    "internal_error",

    # Presenters
    "Presenter",
    "ErrPresenter",
    "PresenterFunc",
    "ErrPresenterFunc",
    "FixedPresenter",
    "presenter",
    "err_presenter",
    "Dispatcher",
    "ErrHandler",
    "DefaultResp",
    "log_error",
    "log_errors",

    # Writing
    "Handler",
    "ResponseWriter",
    "ResponseRecorder",
    "Writer",

    # Serving
    "ServerConfig",
    "create_server",
    "serve",
    "new_handler",
    "unexpected_error",

    "ConfigurationError",
    "__version__",
]
