"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Callable, Generator, List, Tuple
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httphandler import HTTPRequest, ResponseRecorder, ServerConfig
from httphandler.core import create_server


@pytest.fixture
def make_request() -> Callable[..., HTTPRequest]:
    """Factory for HTTPRequest values with test-friendly defaults."""
    def factory(method: str = "GET", path: str = "/notes", **kwargs) -> HTTPRequest:
        return HTTPRequest(method=method, path=path, **kwargs)
    return factory


@pytest.fixture
def get_request(make_request) -> HTTPRequest:
    """Sample GET request."""
    return make_request("GET", "/notes", query_string="page=1")


@pytest.fixture
def recorder() -> ResponseRecorder:
    return ResponseRecorder()


class ErrorRecorder:
    """Error callback that remembers every (request, error) it receives."""

    def __init__(self):
        self.calls: List[Tuple[HTTPRequest, Exception]] = []

    def __call__(self, request: HTTPRequest, err: Exception) -> None:
        self.calls.append((request, err))

    @property
    def errors(self) -> List[Exception]:
        return [err for _, err in self.calls]


@pytest.fixture
def error_recorder() -> ErrorRecorder:
    return ErrorRecorder()


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class RunningServer:
    """A ThreadingHTTPServer serving in a background thread."""

    def __init__(self, handler, config: ServerConfig):
        self.server = create_server(handler, config)
        self.port = self.server.server_address[1]
        self._thread = threading.Thread(target=self.server.serve_forever, daemon=True)

    @property
    def base_url(self) -> str:
        return f"http://127.0.0.1:{self.port}"

    def start(self) -> "RunningServer":
        self._thread.start()
        return self

    def stop(self) -> None:
        self.server.shutdown()
        self.server.server_close()
        self._thread.join(timeout=5.0)


@pytest.fixture
def run_server() -> Generator[Callable[..., RunningServer], None, None]:
    """Start servers for a handler on an OS-assigned port; stopped after the test."""
    started: List[RunningServer] = []

    def start(handler, **config_overrides) -> RunningServer:
        config = ServerConfig(host="127.0.0.1", port=0, timeout=5.0, log_level="WARNING")
        for name, value in config_overrides.items():
            setattr(config, name, value)
        running = RunningServer(handler, config).start()
        started.append(running)
        return running

    yield start

    for running in started:
        running.stop()
