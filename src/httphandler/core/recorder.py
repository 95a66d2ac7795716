"""
=============================================================================
RESPONSE RECORDER
=============================================================================

An in-memory ResponseWriter. It behaves like a real connection (first
status wins, a body write implies 200, headers are frozen once the status
is committed) but simply records what was written.

Use it to test handlers without a socket:

    recorder = ResponseRecorder()
    writer.serve_http(HTTPRequest("GET", "/notes"), recorder)

    assert recorder.code == 200
    assert recorder.header_map.get_all("Vary") == ["Origin", "Accept"]
    assert recorder.body == b"..."

=============================================================================
"""

from http import HTTPStatus
import logging

from ..http.headers import Headers
from .writer import ResponseWriter


logger = logging.getLogger(__name__)


class ResponseRecorder(ResponseWriter):
    """
    Records the status, headers and body written to it.

    Attributes:
        code: Committed status code (200 until something is committed)
        header_map: Snapshot of the headers at commit time
        body: Every byte passed to write()
        written: Whether a status has been committed
    """

    def __init__(self):
        self.code = int(HTTPStatus.OK)
        self.header_map = Headers()
        self.body = b""
        self.written = False
        self._headers = Headers()

    @property
    def headers(self) -> Headers:
        return self._headers

    def write_header(self, status_code: int) -> None:
        if self.written:
            logger.warning("Superfluous write_header(%d) call ignored", status_code)
            return
        self.code = status_code
        self.header_map = self._headers.copy()
        self.written = True

    def write(self, data: bytes) -> int:
        if not self.written:
            self.write_header(int(HTTPStatus.OK))
        self.body += data
        return len(data)

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8")
