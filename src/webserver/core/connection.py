"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

This module wraps one accepted client socket with the small API the server
needs: read the request head, send bytes, close.

=============================================================================
TCP IS A BYTE STREAM, NOT A MESSAGE PROTOCOL!
=============================================================================

TCP does NOT preserve message boundaries. A request sent as one write may
arrive as several recv() chunks, or several requests may arrive in one.

    Client sends:
        GET / HTTP/1.1\r\n
        Host: localhost\r\n
        \r\n

    Server might receive:
        First recv():  "GET / HT"         (incomplete!)
        Second recv(): "TP/1.1\r\nHost"   (rest)
        Third recv():  ": localhost\r\n\r\n"

So we never parse raw recv() chunks. The socket is wrapped in a buffered
reader (socket.makefile) and read LINE BY LINE until the empty line that
ends the head:

    readline() → "GET / HTTP/1.1\r\n"     keep
    readline() → "Host: localhost\r\n"    keep
    readline() → "\r\n"                   blank: head complete
    readline() → ""                       EOF: client went away

=============================================================================
CONNECTION LIFECYCLE
=============================================================================

    ┌──────────┐   read_request_head()   ┌─────────┐   send()   ┌─────────┐
    │   NEW    │ ──────────────────────► │ READING │ ─────────► │ WRITING │
    └──────────┘                         └─────────┘            └────┬────┘
                                                                     │
                                          close() / __exit__        │
                                        ┌────────────────────────────┘
                                        ▼
                                   ┌─────────┐
                                   │ CLOSED  │  reader + socket released
                                   └─────────┘

One connection carries exactly one request. There is no keep-alive: the
connection is closed as soon as the response is written.

=============================================================================
"""

import logging
import socket
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Optional

from ..http.request import HTTPParseError
from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)

# Unread request bytes discarded at close, so the close sends FIN, not RST
DRAIN_SIZE = 64 * 1024


class ConnectionState(Enum):
    """Connection lifecycle states, used for logging and close()."""
    NEW = "new"
    READING = "reading"
    WRITING = "writing"
    CLOSED = "closed"


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short connection identifier (for logging).
        state: Current connection state.
        created_at: Timestamp when connection was accepted.
        bytes_sent: Number of response bytes written.
    """

    # Required parameters
    socket: socket.socket
    address: tuple

    # Generated/default parameters
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)
    bytes_sent: int = 0

    # Configuration (passed from ServerConfig)
    timeout: Optional[float] = None
    max_header_size: int = 64 * 1024

    # Buffered reader over the socket, created in __post_init__
    _reader: Optional[BinaryIO] = field(default=None, repr=False)

    def __post_init__(self):
        # Accepted sockets may inherit the listening socket's timeout
        self.socket.settimeout(self.timeout)
        self._reader = self.socket.makefile("rb")

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def age(self) -> float:
        """Seconds since the connection was accepted."""
        return time.time() - self.created_at

    @property
    def closed(self) -> bool:
        return self.state == ConnectionState.CLOSED

    # =========================================================================
    # READING
    # =========================================================================

    def read_request_head(self) -> Optional[str]:
        """
        Read request lines until the blank line that ends the head.

        Lines are decoded as UTF-8 (bad bytes replaced), stripped of their
        line ending, and joined with "\\n".

        Returns:
            The header text, or None if the client closed the connection
            before sending a complete head.

        Raises:
            HTTPParseError: If the head grows beyond max_header_size.
            OSError: On socket errors (including timeouts).
        """
        self.state = ConnectionState.READING

        lines = []
        size = 0

        while True:
            # One extra byte so an over-long line is detected, not truncated
            raw = self._reader.readline(self.max_header_size + 1)
            if not raw:
                logger.debug(f"[{self.id}] EOF after {len(lines)} header lines")
                return None

            size += len(raw)
            if size > self.max_header_size:
                raise HTTPParseError(
                    f"Request head exceeds {self.max_header_size} bytes",
                    status_code=HTTPStatus.REQUEST_HEADER_FIELDS_TOO_LARGE,
                )

            line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
            if not line.strip():
                break
            lines.append(line)

        return "\n".join(lines)

    # =========================================================================
    # WRITING
    # =========================================================================

    def send(self, data: bytes) -> bool:
        """
        Write data to the client.

        sendall() blocks until every byte is handed to the kernel, so there
        is nothing left to flush afterwards.

        Returns:
            True if sent, False if the client had already closed the
            connection (broken pipe / reset). That is an expected early
            disconnect and is only logged.

        Raises:
            OSError: Any other socket failure.
        """
        self.state = ConnectionState.WRITING

        try:
            self.socket.sendall(data)
        except (BrokenPipeError, ConnectionResetError) as e:
            logger.warning(f"[{self.id}] Client closed the connection before the response was fully sent: {e}")
            return False

        self.bytes_sent += len(data)
        return True

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection gracefully.

        1. shutdown(SHUT_WR): send FIN, client sees EOF after the body
        2. discard what the client already sent, without waiting for more
        3. close the reader and the socket, releasing the descriptor

        Safe to call more than once.
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Already disconnected

        # One non-blocking read: the next client must not wait on this one
        try:
            self.socket.setblocking(False)
            self.socket.recv(DRAIN_SIZE)
        except OSError:
            pass  # Nothing pending, or already disconnected

        try:
            self._reader.close()
        finally:
            self.socket.close()

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    # =========================================================================
    # CONTEXT MANAGER
    # =========================================================================

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions
