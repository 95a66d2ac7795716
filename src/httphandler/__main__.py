"""
=============================================================================
COMMAND-LINE ENTRY POINT
=============================================================================

Runs a small demo API built with ``new_handler``:

    python -m httphandler --port 8080

    curl localhost:8080/notes                       # 200, list notes
    curl -d '{"text": "hi"}' localhost:8080/notes   # 201, create a note
    curl -d 'not json' localhost:8080/notes         # 400 + error logged
    curl -X DELETE localhost:8080/notes             # 204, clear notes
    curl -X PUT localhost:8080/notes                # 405 + Allow header

Once ``--max-notes`` is reached, creating a note fails without choosing a
status, so the shared "unexpected error" 500 is sent and the error logged.

There is no path routing: every path is the same notes endpoint.

=============================================================================
"""

from typing import Any, Dict, List, Optional
import argparse
import logging
import sys
import threading

from . import __version__
from .app import new_handler
from .config import LOG_FORMATS, LOG_LEVELS, ServerConfig
from .core import Writer, serve
from .http import HTTPRequest, Response, bad_request, created, no_content, ok
from .presenters import err_presenter, log_errors


logger = logging.getLogger("httphandler.demo")


class NoteStore:
    """Thread-safe in-memory notes (requests run on separate threads)."""

    def __init__(self, max_notes: int = 100):
        self.max_notes = max_notes
        self._notes: List[Dict[str, Any]] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def all(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._notes)

    def add(self, text: str) -> Dict[str, Any]:
        """
        Store a note.

        Raises:
            OverflowError: If the store already holds ``max_notes`` notes.
        """
        with self._lock:
            if len(self._notes) >= self.max_notes:
                raise OverflowError(f"note store is full ({self.max_notes} notes)")
            note = {"id": self._next_id, "text": text}
            self._next_id += 1
            self._notes.append(note)
            return note

    def clear(self) -> None:
        with self._lock:
            self._notes.clear()


def notes_handler(store: NoteStore) -> Writer:
    """Build the notes endpoint around ``store``."""

    @err_presenter
    def list_notes(request: HTTPRequest):
        return ok({"notes": store.all()}), None

    @err_presenter
    def create_note(request: HTTPRequest):
        try:
            text = request.json["text"]
            if not isinstance(text, str):
                raise TypeError("'text' must be a string")
        except (ValueError, KeyError, TypeError) as exc:
            return bad_request("expected a JSON object with a string 'text'"), exc

        try:
            note = store.add(text)
        except OverflowError as exc:
            # No status: the shared unexpected-error response is used
            return Response(), exc

        return created(note, location=f"{request.path.rstrip('/')}/{note['id']}"), None

    @err_presenter
    def clear_notes(request: HTTPRequest):
        store.clear()
        return no_content(), None

    return new_handler(
        {"GET": list_notes, "POST": create_note, "DELETE": clear_notes},
        handle_err=log_errors(logger),
        handle_write_err=log_errors(logger, logging.WARNING),
    )


def build_config(args: argparse.Namespace) -> ServerConfig:
    """Environment first, then explicit command-line flags on top."""
    config = ServerConfig.from_env()
    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_format is not None:
        config.log_format = args.log_format
    return config


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="httphandler",
        description="Serve a demo notes API built from composed presenters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httphandler                      # Run with defaults
  python -m httphandler --port 3000          # Custom port
  python -m httphandler --host 0.0.0.0       # Listen on all interfaces
  python -m httphandler --log-format json    # JSON access logs
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: $HTTP_HOST or 127.0.0.1)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: $HTTP_PORT or 8080)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: $HTTP_LOG_LEVEL or INFO)"
    )

    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Access log format (default: $HTTP_LOG_FORMAT or text)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # DEMO ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--max-notes",
        type=int,
        default=100,
        help="Notes kept before creating one fails (default: 100)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httphandler {__version__}"
    )

    args = parser.parse_args(argv)

    try:
        config = build_config(args)
        config.validate()
        serve(notes_handler(NoteStore(max_notes=args.max_notes)), config)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
