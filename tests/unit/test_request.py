"""
Unit tests for request head parsing.
"""

from dataclasses import FrozenInstanceError

import pytest

from webserver.http.request import (
    HTTPParseError,
    RequestHead,
    extract_resource_path,
    parse_request_head,
)


class TestExtractResourcePath:
    """Tests for extract_resource_path()."""

    def test_second_token_is_path(self):
        """Test extracting the path from a full request line."""
        assert extract_resource_path("GET /poem/sonnet-18.html HTTP/1.1") == "/poem/sonnet-18.html"

    def test_only_first_line_used(self):
        """Test that header lines are ignored."""
        text = "GET /cs50 HTTP/1.1\nHost: localhost:8088\nReferer: /other"
        assert extract_resource_path(text) == "/cs50"

    def test_root_path(self):
        assert extract_resource_path("GET / HTTP/1.1") == "/"

    def test_query_string_kept(self):
        """Test that the path is returned verbatim, query string included."""
        assert extract_resource_path("GET /cs50?x=1 HTTP/1.1") == "/cs50?x=1"

    def test_method_not_checked(self):
        """Test that any method yields its path."""
        assert extract_resource_path("POST /poem/sonnet-18.html HTTP/1.1") == "/poem/sonnet-18.html"

    def test_two_tokens_enough(self):
        assert extract_resource_path("GET /") == "/"

    @pytest.mark.parametrize("text", ["GET", "", "GET\nHost: x", "GET  /double-space HTTP/1.1"])
    def test_malformed_request_line(self, text):
        """Test that a request line without a path is rejected."""
        with pytest.raises(HTTPParseError) as exc_info:
            extract_resource_path(text)

        assert exc_info.value.status_code == 400
        assert "Invalid request line" in str(exc_info.value)


class TestParseRequestHead:
    """Tests for parse_request_head()."""

    def test_parse_browser_request(self, sample_get_request: bytes):
        """Test parsing a typical browser request head."""
        text = sample_get_request.decode().replace("\r\n", "\n").rstrip("\n")
        head = parse_request_head(text)

        assert head.path == "/poem/sonnet-18.html"
        assert head.method == "GET"
        assert head.request_line == "GET /poem/sonnet-18.html HTTP/1.1"
        assert head.raw == text

    def test_missing_version(self):
        head = parse_request_head("GET /")
        assert head.path == "/"
        assert head.method == "GET"

    def test_malformed(self):
        with pytest.raises(HTTPParseError):
            parse_request_head("GET")

    def test_head_is_immutable(self):
        head = RequestHead(raw="GET / HTTP/1.1", request_line="GET / HTTP/1.1", path="/")
        with pytest.raises(FrozenInstanceError):
            head.path = "/other"
