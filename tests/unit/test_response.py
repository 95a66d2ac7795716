"""
Unit tests for Response values and builders.
"""

import dataclasses
import json
import pytest

from httphandler.http.response import (
    DEFAULT_STATUS,
    STATUS_UNSET,
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
from httphandler.presenters import FixedPresenter


class TestResponse:
    """Tests for the Response value."""

    def test_defaults(self):
        """Test that an empty Response has the unset status."""
        response = Response()

        assert response.status_code == STATUS_UNSET == 0
        assert response.has_status is False
        assert dict(response.headers) == {}
        assert response.body == b""

    def test_default_status_is_200(self):
        """Test the status written for unset responses."""
        assert DEFAULT_STATUS == 200

    def test_str_body_is_encoded(self):
        """Test that a str body is stored as UTF-8 bytes."""
        assert Response(status_code=200, body="héllo").body == "héllo".encode("utf-8")

    def test_is_immutable(self):
        """Test that responses cannot be patched in place."""
        response = Response(status_code=200)

        with pytest.raises(dataclasses.FrozenInstanceError):
            response.status_code = 500

    def test_source_headers_changed_after_construction(self):
        """Test that mutating the caller's dict does not reach the Response."""
        source = {"X": ["a"], "Y": "c"}
        response = Response(status_code=200, headers=source)

        source["X"].append("b")
        source["Z"] = ["new"]

        assert dict(response.headers) == {"X": ("a",), "Y": ("c",)}

    def test_headers_are_read_only(self):
        """Test that headers cannot be changed through the Response."""
        response = Response(status_code=200, headers={"X": ["a"]})

        with pytest.raises(TypeError):
            response.headers["X"] = ["leak"]
        with pytest.raises(AttributeError):
            response.headers["X"].append("leak")

    def test_shared_response_stays_unchanged(self, make_request):
        """Test that a FixedPresenter hands every request the same headers."""
        fixed = FixedPresenter(Response(status_code=200, headers={"X": ["a"]}))
        first = fixed.present(make_request())
        with pytest.raises(AttributeError):
            first.headers["X"].append("leak")

        assert fixed.present(make_request()).headers["X"] == ("a",)

    def test_equal_headers_compare_equal(self):
        """Test that list and str header values normalise the same way."""
        assert Response(headers={"X": "a"}) == Response(headers={"X": ["a"]})

    def test_replace_returns_new_value(self):
        """Test deriving a modified copy."""
        original = Response(status_code=200, body=b"a")
        changed = original.replace(status_code=201)

        assert changed.status_code == 201
        assert changed.body == b"a"
        assert original.status_code == 200

    def test_reason_phrase(self):
        """Test standard and unknown reason phrases."""
        assert Response(status_code=404).reason_phrase == "Not Found"
        assert Response(status_code=599).reason_phrase == ""
        assert Response().reason_phrase == ""


class TestResponseBuilder:
    """Tests for ResponseBuilder fluent API."""

    def test_status_defaults_to_unset(self):
        """Test that the builder does not pick a status by itself."""
        assert ResponseBuilder().text("hi").build().status_code == STATUS_UNSET

    def test_json_body(self):
        """Test JSON body and Content-Type."""
        response = ResponseBuilder().status(200).json({"key": "value"}).build()

        assert response.headers["Content-Type"] == ("application/json; charset=utf-8",)
        assert json.loads(response.body) == {"key": "value"}

    def test_json_keeps_unicode(self):
        """Test that non-ASCII characters are not escaped."""
        response = ResponseBuilder().json({"text": "héllo"}).build()

        assert "héllo".encode("utf-8") in response.body

    def test_pretty_json(self):
        """Test indented JSON output."""
        response = ResponseBuilder().json({"a": 1}, pretty=True).build()

        assert b"\n" in response.body

    def test_header_appends(self):
        """Test that repeated header() calls build a multi-valued header."""
        response = (ResponseBuilder()
            .status(200)
            .header("Multiple-Values", "first")
            .header("multiple-values", "second")
            .build())

        assert response.headers["Multiple-Values"] == ("first", "second")

    def test_headers_mapping(self):
        """Test appending a mapping of single and multiple values."""
        response = ResponseBuilder().headers({"X-One": "1", "X-Many": ["a", "b"]}).build()

        assert response.headers["X-One"] == ("1",)
        assert response.headers["X-Many"] == ("a", "b")

    def test_content_type_replaces(self):
        """Test that content_type() overrides earlier values."""
        response = ResponseBuilder().text("<p>hi</p>", "text/html").content_type("text/plain").build()

        assert response.headers["Content-Type"] == ("text/plain",)
        assert response.body == b"<p>hi</p>"

    def test_built_response_is_independent(self):
        """Test that later builder calls do not leak into a built Response."""
        builder = ResponseBuilder().header("X-A", "1")
        response = builder.build()
        builder.header("X-A", "2")

        assert response.headers["X-A"] == ("1",)


class TestConvenienceFunctions:
    """Tests for response convenience functions."""

    def test_ok_with_dict(self):
        """Test ok() with dict body."""
        response = ok({"status": "success"})

        assert response.status_code == 200
        assert json.loads(response.body) == {"status": "success"}

    def test_ok_with_text(self):
        """Test ok() with a text body."""
        response = ok("hello")

        assert response.body == b"hello"
        assert response.headers["Content-Type"] == ("text/plain; charset=utf-8",)

    def test_ok_with_bytes(self):
        """Test ok() with raw bytes and an explicit content type."""
        response = ok(b"\x00\x01", content_type="application/octet-stream")

        assert response.body == b"\x00\x01"
        assert response.headers["Content-Type"] == ("application/octet-stream",)

    def test_created_with_location(self):
        """Test created() response."""
        response = created({"id": 1}, location="/notes/1")

        assert response.status_code == 201
        assert response.headers["Location"] == ("/notes/1",)

    def test_no_content(self):
        """Test no_content() has no body."""
        response = no_content()

        assert response.status_code == 204
        assert response.body == b""

    @pytest.mark.parametrize("factory,status", [
        (bad_request, 400),
        (not_found, 404),
        (internal_error, 500),
    ])
    def test_error_responses(self, factory, status):
        """Test that error shortcuts carry a JSON error message."""
        response = factory("went wrong")

        assert response.status_code == status
        assert json.loads(response.body) == {"error": "went wrong"}

    def test_method_not_allowed(self):
        """Test 405 with the Allow header."""
        response = method_not_allowed(["GET", "POST"])

        assert response.status_code == 405
        assert response.headers["Allow"] == ("GET, POST",)
        assert json.loads(response.body)["allowed"] == ["GET", "POST"]
