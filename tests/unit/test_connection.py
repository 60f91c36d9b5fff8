"""
Unit tests for the connection wrapper.
"""

import socket
import time

import pytest

from webserver.core.connection import Connection, ConnectionState
from webserver.http.request import HTTPParseError


@pytest.fixture
def pair():
    """Connected (server side, client side) sockets."""
    server_side, client_side = socket.socketpair()
    yield server_side, client_side
    client_side.close()
    server_side.close()


def make_conn(sock: socket.socket, **kwargs) -> Connection:
    return Connection(socket=sock, address=("127.0.0.1", 40000), **kwargs)


class TestReadRequestHead:
    """Tests for Connection.read_request_head()."""

    def test_reads_until_blank_line(self, pair, sample_get_request: bytes):
        server_side, client_side = pair
        conn = make_conn(server_side)
        client_side.sendall(sample_get_request)

        text = conn.read_request_head()

        assert text == (
            "GET /poem/sonnet-18.html HTTP/1.1\n"
            "Host: localhost:8088\n"
            "User-Agent: pytest\n"
            "Accept: text/html"
        )
        assert conn.state == ConnectionState.READING

    def test_bare_lf_line_endings(self, pair):
        server_side, client_side = pair
        conn = make_conn(server_side)
        client_side.sendall(b"GET /cs50 HTTP/1.0\nHost: x\n\n")

        assert conn.read_request_head() == "GET /cs50 HTTP/1.0\nHost: x"

    def test_data_after_blank_line_not_consumed_into_head(self, pair):
        server_side, client_side = pair
        conn = make_conn(server_side)
        client_side.sendall(b"GET / HTTP/1.1\r\n\r\nextra body bytes")

        assert conn.read_request_head() == "GET / HTTP/1.1"

    def test_single_token_request_line(self, pair):
        """Test that a malformed line is still returned; parsing rejects it later."""
        server_side, client_side = pair
        conn = make_conn(server_side)
        client_side.sendall(b"GET\r\n\r\n")

        assert conn.read_request_head() == "GET"

    def test_eof_before_anything(self, pair):
        server_side, client_side = pair
        conn = make_conn(server_side)
        client_side.shutdown(socket.SHUT_WR)

        assert conn.read_request_head() is None

    def test_eof_mid_head(self, pair):
        server_side, client_side = pair
        conn = make_conn(server_side)
        client_side.sendall(b"GET / HTTP/1.1\r\nHost: x\r\n")
        client_side.shutdown(socket.SHUT_WR)

        assert conn.read_request_head() is None

    def test_invalid_utf8_replaced(self, pair):
        server_side, client_side = pair
        conn = make_conn(server_side)
        client_side.sendall(b"GET /\xff HTTP/1.1\r\n\r\n")

        assert conn.read_request_head() == "GET /� HTTP/1.1"

    def test_head_too_large(self, pair):
        server_side, client_side = pair
        conn = make_conn(server_side, max_header_size=1024)
        client_side.sendall(b"GET /" + b"a" * 2000 + b" HTTP/1.1\r\n\r\n")

        with pytest.raises(HTTPParseError) as exc_info:
            conn.read_request_head()

        assert exc_info.value.status_code == 431

    def test_timeout(self, pair):
        server_side, _client_side = pair
        conn = make_conn(server_side, timeout=0.1)

        with pytest.raises(socket.timeout):
            conn.read_request_head()


class TestSend:
    """Tests for Connection.send()."""

    def test_send(self, pair):
        server_side, client_side = pair
        conn = make_conn(server_side)

        assert conn.send(b"HTTP/1.1 200 OK\r\n") is True
        assert client_side.recv(1024) == b"HTTP/1.1 200 OK\r\n"
        assert conn.bytes_sent == 17
        assert conn.state == ConnectionState.WRITING

    def test_client_gone_is_not_an_error(self, pair):
        """Test that a broken pipe is reported, not raised."""
        server_side, client_side = pair
        conn = make_conn(server_side)
        client_side.close()

        assert conn.send(b"x" * 1024) is False
        assert conn.bytes_sent == 0

    def test_other_errors_propagate(self, pair):
        server_side, _client_side = pair
        conn = make_conn(server_side)
        conn.close()

        with pytest.raises(OSError):
            conn.send(b"x")


class TestClose:
    """Tests for closing connections."""

    def test_close_releases_socket(self, pair):
        server_side, client_side = pair
        conn = make_conn(server_side)
        client_side.close()

        conn.close()

        assert conn.closed
        assert server_side.fileno() == -1

    def test_close_is_idempotent(self, pair):
        server_side, client_side = pair
        conn = make_conn(server_side)
        client_side.close()

        conn.close()
        conn.close()

        assert conn.state == ConnectionState.CLOSED

    def test_client_sees_eof_after_close(self, pair):
        server_side, client_side = pair
        conn = make_conn(server_side)
        conn.send(b"done")
        client_side.shutdown(socket.SHUT_WR)

        conn.close()

        assert client_side.recv(1024) == b"done"
        assert client_side.recv(1024) == b""

    def test_context_manager_closes_on_error(self, pair):
        server_side, client_side = pair
        client_side.close()

        with pytest.raises(RuntimeError):
            with make_conn(server_side) as conn:
                raise RuntimeError("boom")

        assert conn.closed

    def test_close_does_not_wait_for_client(self, pair):
        """Test that close returns at once while the client keeps its socket open."""
        server_side, client_side = pair
        conn = make_conn(server_side)
        conn.send(b"done")
        client_side.sendall(b"unread bytes")

        started = time.monotonic()
        conn.close()

        assert time.monotonic() - started < 0.1
        assert client_side.recv(1024) == b"done"
