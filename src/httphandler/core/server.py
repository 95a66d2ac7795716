"""
=============================================================================
http.server BINDING
=============================================================================

httphandler does not listen on sockets itself. It plugs into the standard
library's ``http.server``, which already knows how to accept connections
and parse request lines and headers:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       ONE REQUEST, END TO END                       │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   ThreadingHTTPServer        one thread per request                 │
    │        │                                                             │
    │        ▼                                                             │
    │   RequestHandler.do_<METHOD>                                        │
    │        │  read body (Content-Length, max_request_size)              │
    │        │  build HTTPRequest                                         │
    │        ▼                                                             │
    │   handler.serve_http(request, StreamResponseWriter)                 │
    │        │                                                             │
    │        ▼                                                             │
    │   Writer ──► presenters ──► Response ──► status, headers, body      │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Responses are sent HTTP/1.0 style: the body ends when the connection
closes, so no Content-Length has to be known before the status line is
committed.

=============================================================================
USAGE
=============================================================================

    handler = Writer(my_presenter)

    # Blocking, with logging configured from the config:
    serve(handler, ServerConfig(port=8080))

    # Or drive the server yourself (tests, embedding):
    server = create_server(handler, ServerConfig(port=0))
    threading.Thread(target=server.serve_forever, daemon=True).start()
    ...
    server.shutdown()

=============================================================================
"""

from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional, Type
from urllib.parse import urlsplit
import json
import logging
import time

from ..config import ServerConfig
from ..http.headers import Headers
from ..http.request import HTTPRequest
from ..http.response import DEFAULT_STATUS
from .writer import Handler, ResponseWriter


logger = logging.getLogger(__name__)


class StreamResponseWriter(ResponseWriter):
    """
    ResponseWriter backed by a BaseHTTPRequestHandler's output stream.

    Status and headers are sent together on ``write_header``. For HEAD
    requests the body bytes are accepted but not sent.
    """

    def __init__(self, request_handler: BaseHTTPRequestHandler, request: HTTPRequest):
        self._request_handler = request_handler
        self._include_body = request.method != "HEAD"
        self._headers = Headers()
        self.committed = False
        self.bytes_written = 0

    @property
    def headers(self) -> Headers:
        return self._headers

    def write_header(self, status_code: int) -> None:
        if self.committed:
            logger.warning("Superfluous write_header(%d) call ignored", status_code)
            return
        self.committed = True

        self._request_handler.send_response(status_code)
        for name, values in self._headers.items():
            for value in values:
                self._request_handler.send_header(name, value)
        self._request_handler.end_headers()

    def write(self, data: bytes) -> int:
        if not self.committed:
            self.write_header(DEFAULT_STATUS)
        if not self._include_body or not data:
            return 0

        self._request_handler.wfile.write(data)
        self._request_handler.wfile.flush()
        self.bytes_written += len(data)
        return len(data)


class RequestHandler(BaseHTTPRequestHandler):
    """
    Base request handler that forwards every request to a Handler.

    Don't subclass this by hand; ``make_request_handler`` creates a
    subclass bound to a handler tree and a config.
    """

    handler: Handler
    config: ServerConfig

    protocol_version = "HTTP/1.0"
    sys_version = ""

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _serve(self) -> None:
        start_time = time.monotonic()
        self._status_code: Optional[int] = None
        response_writer: Optional[StreamResponseWriter] = None

        try:
            request = self._read_request()
            if request is None:
                return

            response_writer = StreamResponseWriter(self, request)
            self.handler.serve_http(request, response_writer)

            # A handler that wrote nothing still owes the client a status line
            if not response_writer.committed:
                response_writer.write_header(DEFAULT_STATUS)
        except Exception:
            logger.exception("Unhandled error serving %s %s", self.command, self.path)
            if response_writer is None or not response_writer.committed:
                self.send_error(HTTPStatus.INTERNAL_SERVER_ERROR)
        finally:
            bytes_written = response_writer.bytes_written if response_writer else 0
            self._log_access(start_time, bytes_written)

    def __getattr__(self, name: str):
        # http.server looks up do_<METHOD>; every method, including
        # TRACE or custom verbs, goes to the handler tree
        if name.startswith("do_"):
            return self._serve
        raise AttributeError(name)

    def _read_request(self) -> Optional[HTTPRequest]:
        """
        Build an HTTPRequest, or send an error response and return None.

        The body is read according to Content-Length; anything above
        ``config.max_request_size`` is refused with 413.
        """
        length = 0
        raw_length = self.headers.get("Content-Length")
        if raw_length:
            try:
                length = int(raw_length)
            except ValueError:
                length = -1
            if length < 0:
                self.send_error(HTTPStatus.BAD_REQUEST, "Invalid Content-Length")
                return None

        if length > self.config.max_request_size:
            self.send_error(HTTPStatus.REQUEST_ENTITY_TOO_LARGE)
            return None

        body = self.rfile.read(length) if length else b""
        target = urlsplit(self.path)

        return HTTPRequest(
            method=self.command,
            path=target.path or "/",
            query_string=target.query,
            version=self.request_version,
            headers=Headers(self.headers.items()),
            body=body,
            client_address=tuple(self.client_address[:2]),
        )

    # =========================================================================
    # LOGGING
    # =========================================================================
    #
    # http.server writes straight to stderr. Everything is routed through
    # the logging module instead.
    #
    # =========================================================================

    def log_request(self, code="-", size="-") -> None:
        # Called by send_response(); the access line is emitted in _serve
        if isinstance(code, int):
            self._status_code = int(code)

    def log_error(self, format: str, *args) -> None:
        logger.warning("%s - %s", self.address_string(), format % args)

    def log_message(self, format: str, *args) -> None:
        logger.info("%s - %s", self.address_string(), format % args)

    def _log_access(self, start_time: float, content_length: int) -> None:
        duration_ms = (time.monotonic() - start_time) * 1000
        status = self._status_code if self._status_code is not None else "-"
        timestamp = time.strftime("%d/%b/%Y:%H:%M:%S %z")

        if self.config.log_format == "json":
            logger.info(json.dumps({
                "client_ip": self.client_address[0],
                "method": self.command,
                "path": self.path,
                "status_code": status,
                "content_length": content_length,
                "duration_ms": round(duration_ms, 2),
                "timestamp": timestamp,
            }))
        else:
            logger.info(
                '%s - - [%s] "%s %s" %s %d %.2fms',
                self.client_address[0], timestamp, self.command, self.path,
                status, content_length, duration_ms,
            )


def make_request_handler(
    handler: Handler,
    config: Optional[ServerConfig] = None,
) -> Type[RequestHandler]:
    """
    Create a BaseHTTPRequestHandler subclass that serves ``handler``.

    The class is what ``http.server`` servers expect; the handler tree is
    shared by every request the server processes.
    """
    config = config or ServerConfig()
    return type(
        "BoundRequestHandler",
        (RequestHandler,),
        {
            "handler": handler,
            "config": config,
            "server_version": config.server_name,
            "timeout": config.timeout,
        },
    )


def create_server(handler: Handler, config: Optional[ServerConfig] = None) -> ThreadingHTTPServer:
    """
    Bind a ThreadingHTTPServer that serves ``handler``.

    Raises:
        ValueError: If the configuration is invalid.
        OSError: If the address cannot be bound.
    """
    config = config or ServerConfig()
    config.validate()

    server = ThreadingHTTPServer((config.host, config.port), make_request_handler(handler, config))
    server.daemon_threads = True
    return server


def setup_logging(config: ServerConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("httphandler").setLevel(level)


def serve(handler: Handler, config: Optional[ServerConfig] = None) -> None:
    """
    Serve ``handler`` until interrupted (blocking).

    Sets up logging from the config, binds, and runs until Ctrl+C.
    """
    config = config or ServerConfig()
    setup_logging(config)

    server = create_server(handler, config)
    host, port = server.server_address[:2]
    logger.info("Serving %r on http://%s:%d", handler, host, port)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
    finally:
        server.server_close()
        logger.info("Server stopped")
