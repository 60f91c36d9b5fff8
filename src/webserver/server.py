"""
=============================================================================
WEB SERVER
=============================================================================

Ties the pieces together: the accept loop hands every connection to
WebServer.handle_connection(), which runs the whole request sequence before
the next client is accepted.

=============================================================================
REQUEST SEQUENCE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   accept()                                   (SocketServer)          │
    │      │                                                               │
    │      ▼                                                               │
    │   read_request_head()   lines until blank    (Connection)            │
    │      │                                                               │
    │      ├── EOF ──────────────────────────► close, no response          │
    │      ▼                                                               │
    │   parse_request_head()  second token = path  (http.request)          │
    │      │                                                               │
    │      ├── malformed ────────────────────► 404 page (text/html)        │
    │      ▼                                                               │
    │   classify(path)        image/png, text/html (http.content_type)     │
    │      │                                                               │
    │      ▼                                                               │
    │   handle_resource_request()              (handlers.static)           │
    │      │                                                               │
    │      ├── ServeFile ──► 200 + file bytes                              │
    │      ├── Redirect  ──► 302 + Location                                │
    │      └── no route / file missing ──────► 404 page                    │
    │                                                                      │
    │   close()               always, on every path                        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
USAGE
=============================================================================

    from webserver import WebServer, ServerConfig

    server = WebServer(ServerConfig(port=8088))
    server.run()  # Blocks until Ctrl+C

=============================================================================
"""

import logging
import socket
from typing import Optional, Tuple

from .config import ServerConfig
from .context import RequestContext
from .core import Connection, SocketServer
from .handlers import handle_resource_request, send_not_found
from .http import HTML, HTTPParseError, RequestHead, RouteTable, default_routes, parse_request_head


logger = logging.getLogger(__name__)

# One line per response, like a web server access log
access_logger = logging.getLogger("webserver.access")


class WebServer:
    """
    Single-threaded static site server.

    Attributes:
        config: Server configuration.
        routes: Read-only route table, built once.
    """

    def __init__(self, config: Optional[ServerConfig] = None, routes: Optional[RouteTable] = None):
        """
        Args:
            config: Server configuration (defaults to ServerConfig()).
            routes: Route table (defaults to the site's routes for config).
        """
        self.config = config or ServerConfig()
        self.routes = routes if routes is not None else default_routes(self.config)
        self._socket_server = SocketServer(self.config)

    @property
    def address(self) -> Tuple[str, int]:
        """Bound (host, port); the real port once listening on port 0."""
        return self._socket_server.address

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self, host: Optional[str] = None, port: Optional[int] = None, setup_logging: bool = True):
        """
        Start the server (blocking).

        Args:
            host: Override config host.
            port: Override config port.
            setup_logging: Configure the root logger from config.log_level.

        Raises:
            ValueError: Invalid configuration.
            OSError: The listening socket could not be bound.
        """
        if host:
            self.config.host = host
        if port is not None:
            self.config.port = port

        if setup_logging:
            self._setup_logging()

        self.config.validate()

        logger.info(f"Serving site from {self.config.site_root}")
        logger.debug("Routes:\n" + self.routes.describe())

        try:
            self._socket_server.start(self.handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")

    def shutdown(self):
        """Stop accepting clients; run() returns shortly after."""
        self._socket_server.shutdown()

    def wait_until_listening(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_listening(timeout)

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("webserver").setLevel(level)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def handle_connection(self, conn: Connection):
        """
        Serve one connection from request head to close.

        Errors other than the ones handled here propagate to the accept
        loop, which logs them and moves on to the next client.
        """
        with conn:  # Context manager ensures connection is closed
            header_text = None

            try:
                header_text = conn.read_request_head()
                if header_text is None:
                    logger.info(f"[{conn.id}] Client {conn.client_ip} closed the connection without a request")
                    return

                ctx = RequestContext(conn, parse_request_head(header_text))

            except socket.timeout:
                logger.warning(f"[{conn.id}] Timed out waiting for request from {conn.client_ip}")
                return

            except HTTPParseError as e:
                logger.warning(f"[{conn.id}] Malformed request ({e.status_code}): {e.message}")
                ctx = self._malformed_context(conn, header_text)
                send_not_found(ctx, self.config.error_page)
                self._log_access(ctx)
                return

            logger.info(f"[{conn.id}] Request from {conn.client_ip}: {ctx.head.request_line}")
            logger.debug(f"[{conn.id}] Request head:\n{ctx.head.raw}")

            if not handle_resource_request(ctx, self.routes):
                send_not_found(ctx, self.config.error_page)

            self._log_access(ctx)

    def _malformed_context(self, conn: Connection, header_text: Optional[str]) -> RequestContext:
        """Context for a request whose path could not be extracted; answered as html."""
        raw = header_text or ""
        request_line = raw.split("\n", 1)[0]
        head = RequestHead(raw=raw, request_line=request_line or "-", path="", method=request_line.split(" ", 1)[0])
        return RequestContext(conn, head, content_type=HTML)

    def _log_access(self, ctx: RequestContext):
        """One line per response: client method path status bytes."""
        head = ctx.head
        access_logger.info(
            f"{ctx.conn.client_ip} {head.method or '-'} {head.path or '-'} "
            f"{int(ctx.status) if ctx.status else '-'} {ctx.conn.bytes_sent}"
        )
