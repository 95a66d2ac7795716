"""
Unit tests for the HTTPRequest value.
"""

import dataclasses
import pytest

from httphandler.http import Headers, HTTPRequest


class TestHTTPRequest:
    """Tests for HTTPRequest accessors."""

    def test_defaults(self):
        """Test that only the method is required."""
        request = HTTPRequest(method="GET")

        assert request.path == "/"
        assert request.query_string == ""
        assert request.body == b""
        assert isinstance(request.headers, Headers)
        assert len(request.headers) == 0

    def test_is_immutable(self, get_request: HTTPRequest):
        """Test that presenters cannot modify the request."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            get_request.method = "POST"

    def test_dict_headers_are_converted(self):
        """Test that plain dict headers become a case-insensitive Headers."""
        request = HTTPRequest(method="GET", headers={"content-type": "text/plain"})

        assert isinstance(request.headers, Headers)
        assert request.get_header("Content-Type") == "text/plain"
        assert request.get_header("CONTENT-TYPE") == "text/plain"

    def test_missing_header_default(self, get_request: HTTPRequest):
        """Test get_header falls back to the default."""
        assert get_request.get_header("X-Missing") == ""
        assert get_request.get_header("X-Missing", "fallback") == "fallback"

    def test_url_includes_query_string(self, get_request: HTTPRequest):
        """Test that url reproduces the request target."""
        assert get_request.url == "/notes?page=1"
        assert HTTPRequest(method="GET", path="/notes").url == "/notes"

    def test_query_params(self, make_request):
        """Test query parameter parsing."""
        request = make_request(query_string="tag=a&tag=b&limit=10&empty=")

        assert request.get_query("limit") == "10"
        assert request.get_query_list("tag") == ["a", "b"]
        assert request.get_query("empty") == ""
        assert request.get_query("missing", "default") == "default"
        assert request.get_query_list("missing") == []

    def test_content_type_strips_parameters(self, make_request):
        """Test that content_type is the bare, lowercased media type."""
        request = make_request(headers={"Content-Type": "Application/JSON; charset=utf-8"})

        assert request.content_type == "application/json"
        assert request.is_json is True

    def test_content_type_missing(self, make_request):
        """Test content_type when no header was sent."""
        request = make_request()

        assert request.content_type is None
        assert request.is_json is False

    def test_content_length(self, make_request):
        """Test Content-Length parsing, including garbage values."""
        assert make_request(headers={"Content-Length": "42"}).content_length == 42
        assert make_request(headers={"Content-Length": "abc"}).content_length == 0
        assert make_request().content_length == 0

    def test_host_and_user_agent(self, make_request):
        """Test the Host and User-Agent shortcuts."""
        request = make_request(headers={"Host": "localhost:8080", "User-Agent": "pytest"})

        assert request.host == "localhost:8080"
        assert request.user_agent == "pytest"


class TestRequestJSON:
    """Tests for JSON body decoding."""

    def test_json_body(self, make_request):
        """Test decoding a JSON body."""
        request = make_request("POST", body=b'{"text": "hello", "tags": ["a"]}')

        assert request.json == {"text": "hello", "tags": ["a"]}

    def test_invalid_json_raises_value_error(self, make_request):
        """Test that malformed JSON raises ValueError."""
        request = make_request("POST", body=b"not json")

        with pytest.raises(ValueError):
            request.json

    def test_utf8_body(self, make_request):
        """Test that non-ASCII JSON survives decoding."""
        request = make_request("POST", body='{"text": "héllo"}'.encode("utf-8"))

        assert request.json["text"] == "héllo"
