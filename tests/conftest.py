"""
pytest configuration and fixtures.
"""

import shutil
import socket
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Generator, Optional, Tuple
import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from webserver import WebServer, ServerConfig
from webserver.config import DEFAULT_SITE_DIR


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request, as a browser would send it."""
    return (
        b"GET /poem/sonnet-18.html HTTP/1.1\r\n"
        b"Host: localhost:8088\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"\r\n"
    )


@pytest.fixture
def config() -> ServerConfig:
    """Default test server configuration."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        timeout=5.0,
        log_level="WARNING",
    )


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """A writable copy of the bundled site."""
    target = tmp_path / "site"
    shutil.copytree(DEFAULT_SITE_DIR, target)
    return target


# =============================================================================
# RAW HTTP CLIENT
# =============================================================================

@dataclass
class RawResponse:
    """A response as it came off the wire."""
    status: int
    reason: str
    status_line: str
    headers: Dict[str, str] = field(default_factory=dict)
    header_block: bytes = b""
    body: bytes = b""


def parse_response(data: bytes) -> Optional[RawResponse]:
    """Split raw response bytes into status, headers and body."""
    if not data:
        return None

    head, _, body = data.partition(b"\r\n\r\n")
    lines = head.decode("utf-8").split("\r\n")
    _version, status, reason = lines[0].split(" ", 2)

    headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(": ")
        headers[name] = value

    return RawResponse(
        status=int(status),
        reason=reason,
        status_line=lines[0],
        headers=headers,
        header_block=head + b"\r\n\r\n",
        body=body,
    )


def send_raw(address: Tuple[str, int], raw: bytes, timeout: float = 5.0) -> Optional[RawResponse]:
    """Send raw bytes, read until the server closes, parse what came back."""
    with socket.create_connection(address, timeout=timeout) as s:
        if raw:
            s.sendall(raw)
        chunks = []
        while True:
            chunk = s.recv(65536)
            if not chunk:
                break
            chunks.append(chunk)
    return parse_response(b"".join(chunks))


def get(address: Tuple[str, int], path: str) -> RawResponse:
    """GET path the way a browser would."""
    raw = f"GET {path} HTTP/1.1\r\nHost: localhost\r\nConnection: close\r\n\r\n".encode()
    return send_raw(address, raw)


# =============================================================================
# BACKGROUND SERVER
# =============================================================================

class ServerThread:
    """Runs a WebServer in a background thread."""

    def __init__(self, server: WebServer):
        self.server = server
        self._thread: Optional[threading.Thread] = None

    @property
    def address(self) -> Tuple[str, int]:
        return self.server.address

    def start(self) -> "ServerThread":
        self._thread = threading.Thread(
            target=self.server.run,
            kwargs={"setup_logging": False},
            daemon=True,
        )
        self._thread.start()

        if not self.server.wait_until_listening(timeout=5.0):
            raise RuntimeError("Server failed to start")
        return self

    def stop(self):
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    @property
    def alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()


@pytest.fixture(scope="module")
def live_server() -> Generator[ServerThread, None, None]:
    """A server on the bundled site, shared by a test module."""
    server = WebServer(ServerConfig(host="127.0.0.1", port=0, timeout=5.0))
    srv = ServerThread(server).start()

    yield srv

    srv.stop()


@pytest.fixture
def site_server(site_dir: Path, server_factory) -> ServerThread:
    """A server on a writable copy of the site (tests may delete files)."""
    return server_factory(timeout=5.0, site_dir=str(site_dir))


@pytest.fixture
def http_get():
    """get(address, path) -> RawResponse"""
    return get


@pytest.fixture
def http_send():
    """send_raw(address, raw_bytes) -> RawResponse or None"""
    return send_raw


@pytest.fixture
def server_factory() -> Generator:
    """server_factory(**config) -> running ServerThread, stopped after the test."""
    started = []

    def factory(**kwargs) -> ServerThread:
        kwargs.setdefault("host", "127.0.0.1")
        kwargs.setdefault("port", 0)
        srv = ServerThread(WebServer(ServerConfig(**kwargs))).start()
        started.append(srv)
        return srv

    yield factory

    for srv in started:
        srv.stop()
