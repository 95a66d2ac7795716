"""
Unit tests for the command-line demo.
"""

import argparse
import json
import pytest

from httphandler.__main__ import NoteStore, build_config, main, notes_handler
from httphandler.core import ResponseRecorder


def serve(handler, request) -> ResponseRecorder:
    recorder = ResponseRecorder()
    handler.serve_http(request, recorder)
    return recorder


class TestNotesEndpoint:
    """Tests for the demo notes endpoint."""

    def test_create_then_list(self, make_request):
        """Test that created notes are listed."""
        handler = notes_handler(NoteStore())

        created = serve(handler, make_request("POST", body=b'{"text": "buy milk"}'))
        listed = serve(handler, make_request("GET"))

        assert created.code == 201
        assert created.header_map.first("Location") == "/notes/1"
        assert json.loads(listed.body) == {"notes": [{"id": 1, "text": "buy milk"}]}

    @pytest.mark.parametrize("body", [b"not json", b'{"title": "x"}', b'{"text": 5}', b"[1]"])
    def test_invalid_body(self, body, make_request, caplog):
        """Test that bad input gets 400 and is logged."""
        recorder = serve(notes_handler(NoteStore()), make_request("POST", body=body))

        assert recorder.code == 400
        assert "POST /notes failed" in caplog.text

    def test_full_store_gets_generic_500(self, make_request):
        """Test that a status-less failure falls back to the shared 500."""
        handler = notes_handler(NoteStore(max_notes=1))
        serve(handler, make_request("POST", body=b'{"text": "one"}'))

        recorder = serve(handler, make_request("POST", body=b'{"text": "two"}'))

        assert recorder.code == 500
        assert b"unexpected error" in recorder.body

    def test_clear(self, make_request):
        """Test DELETE empties the store."""
        store = NoteStore()
        store.add("x")

        recorder = serve(notes_handler(store), make_request("DELETE"))

        assert recorder.code == 204
        assert store.all() == []

    def test_unsupported_method(self, make_request):
        """Test that PUT is refused with 405."""
        recorder = serve(notes_handler(NoteStore()), make_request("PUT"))

        assert recorder.code == 405
        assert recorder.header_map.first("Allow") == "GET, POST, DELETE"


class TestCommandLine:
    """Tests for argument handling."""

    def test_flags_override_environment(self, monkeypatch):
        """Test that explicit flags win over HTTP_* variables."""
        monkeypatch.setenv("HTTP_PORT", "3000")
        monkeypatch.setenv("HTTP_LOG_FORMAT", "json")
        args = argparse.Namespace(host=None, port=9000, log_level=None, log_format=None)

        config = build_config(args)

        assert config.port == 9000
        assert config.log_format == "json"

    def test_version(self, capsys):
        """Test --version prints and exits."""
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])

        assert excinfo.value.code == 0
        assert "httphandler" in capsys.readouterr().out

    def test_invalid_config_returns_error(self, capsys):
        """Test that a bad port is reported instead of raising."""
        assert main(["--port", "70000"]) == 1
        assert "Invalid port" in capsys.readouterr().err
