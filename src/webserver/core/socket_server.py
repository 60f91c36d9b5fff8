"""
=============================================================================
LOW-LEVEL TCP SOCKET SERVER
=============================================================================

This module implements the accept loop: bind a listening socket, accept
clients one at a time, hand each one to the request handler, repeat.

=============================================================================
SOCKET LIFECYCLE (Server Side)
=============================================================================

    1. socket()    Create a socket file descriptor
    2. bind()      Associate the socket with an IP:PORT
    3. listen()    Mark socket as "listening"; OS starts queueing clients
    4. accept()    Wait for and accept an incoming connection
                   └─ Returns a NEW socket just for that client
    5. close()     Release the socket resources

=============================================================================
ONE CLIENT AT A TIME
=============================================================================

The handler runs synchronously inside the accept loop:

    while running:
        accept()  ──►  handler(conn)  ──►  (conn closed)  ──►  accept() ...

While one client is being served the next ones wait in the listen queue
(backlog). A slow client therefore delays everyone behind it. That is the
whole concurrency model: no threads, no shared state between requests.

=============================================================================
ERROR CLASSES
=============================================================================

    bind() fails           → logged, OSError re-raised (process exits)
    handler raises         → logged with traceback, loop continues
    accept() fails         → logged, loop stops (socket is unusable)

=============================================================================
"""

import logging
import signal
import socket
import threading
from typing import Callable, Optional, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)


class SocketServer:
    """
    Single-threaded TCP accept loop.

    Usage:
        def handle_connection(conn: Connection):
            ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown()
    """

    # accept() wakes up this often to notice shutdown()
    ACCEPT_POLL_INTERVAL = 1.0

    def __init__(self, config: ServerConfig):
        """
        Initialize the socket server.

        The socket is not created until start().
        """
        self.config = config
        self._socket: Optional[socket.socket] = None
        self._running = False
        self._bound = threading.Event()
        self._shutdown_event = threading.Event()
        self._original_handlers: dict = {}

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """
        The address actually bound.

        Differs from the configured one when port 0 was requested.
        """
        if self._socket is not None:
            return self._socket.getsockname()[:2]
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        """Create the listening socket with SO_REUSEADDR set."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # Allow an immediate restart while old sockets sit in TIME_WAIT
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        sock.settimeout(self.ACCEPT_POLL_INTERVAL)
        return sock

    def _setup_signals(self):
        """
        Turn SIGINT/SIGTERM into a graceful shutdown.

        Signal handlers can only be installed from the main thread; when
        the server runs elsewhere (tests) shutdown() must be called
        explicitly.
        """
        if threading.current_thread() is not threading.main_thread():
            return

        def shutdown_handler(signum, frame):
            logger.info(f"Received {signal.Signals(signum).name}, initiating shutdown...")
            self.shutdown()

        self._original_handlers[signal.SIGTERM] = signal.signal(signal.SIGTERM, shutdown_handler)
        self._original_handlers[signal.SIGINT] = signal.signal(signal.SIGINT, shutdown_handler)

    def _restore_signals(self):
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def start(self, connection_handler: Callable[[Connection], None]):
        """
        Bind, listen and run the accept loop.

        This method BLOCKS until shutdown() is called.

        Args:
            connection_handler: Called with each accepted Connection. It runs
                to completion before the next client is accepted.

        Raises:
            OSError: If the listening socket cannot be bound.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
            self._socket.listen(self.config.backlog)
        except OSError as e:
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            self._socket.close()
            self._socket = None
            raise

        self._running = True
        self._shutdown_event.clear()
        self._setup_signals()

        host, port = self.address
        logger.info(f"Server listening on {host}:{port}")
        self._bound.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        """Accept clients and serve them one by one until shut down."""
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue  # Poll the running flag
            except OSError as e:
                if self._running:
                    logger.error(f"Accept error: {e}")
                break

            logger.info(f"Client connected: {client_address[0]}:{client_address[1]}")

            try:
                conn = Connection(
                    socket=client_socket,
                    address=client_address,
                    timeout=self.config.timeout,
                    max_header_size=self.config.max_header_size,
                )
            except OSError as e:
                logger.error(f"Could not set up connection from {client_address[0]}: {e}")
                client_socket.close()
                continue

            try:
                connection_handler(conn)
            except Exception:
                # One bad connection must never take the server down
                logger.exception(f"[{conn.id}] Unhandled error while serving {conn.client_ip}")
            finally:
                conn.close()

    def shutdown(self):
        """
        Ask the accept loop to stop.

        Idempotent. Takes effect within ACCEPT_POLL_INTERVAL seconds, or
        once the current client has been served.
        """
        if self._running:
            logger.info("Shutting down socket server...")
        self._running = False
        self._shutdown_event.set()

    def _cleanup(self):
        self._restore_signals()

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass  # Already closed
            self._socket = None

        self._running = False
        self._bound.clear()
        logger.info("Socket server stopped")

    def wait_until_listening(self, timeout: Optional[float] = None) -> bool:
        """Block until the socket is bound and listening (tests use this)."""
        return self._bound.wait(timeout)

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        """Block until shutdown() has been called."""
        return self._shutdown_event.wait(timeout)
