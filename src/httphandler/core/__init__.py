"""
=============================================================================
CORE - WHERE RESPONSES MEET THE WIRE
=============================================================================

Everything that performs I/O lives here:

Writer:
    Runs a presenter and writes its Response. The root of every handler
    tree built with this library.

ResponseWriter / Handler:
    The outbound channel and the "serve a request" interface the server
    binding calls.

ResponseRecorder:
    An in-memory ResponseWriter for tests and examples.

create_server / serve:
    Plug a Handler into the standard library's ThreadingHTTPServer.

=============================================================================
"""

from .recorder import ResponseRecorder
from .server import (
    RequestHandler,
    StreamResponseWriter,
    create_server,
    make_request_handler,
    serve,
    setup_logging,
)
from .writer import Handler, ResponseWriter, Writer

__all__ = [
    "Writer",            # Presenter -> wire
    "Handler",           # serve_http(request, response_writer)
    "ResponseWriter",    # Outbound channel interface
    "ResponseRecorder",  # In-memory ResponseWriter
    "StreamResponseWriter",
    "RequestHandler",
    "make_request_handler",
    "create_server",
    "serve",
    "setup_logging",
]
