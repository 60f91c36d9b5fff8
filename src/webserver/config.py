"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the web server.

The server itself is deliberately small: one port, one site directory, one
request at a time. Everything that used to be a hardcoded constant (port,
file locations, redirect target) lives here so it can be inspected and
overridden in one place.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m webserver --port 9000                           │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_PORT=9000 python -m webserver                        │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
SITE LAYOUT
=============================================================================

The site directory must look like this:

    site/
    ├── main-page.html       served for "/"
    ├── 404.html             served for anything unknown
    ├── poem/                served under /poem/<name>.html
    └── images/              served under /images/<name>.png

By default the copy bundled inside the package is used.

=============================================================================
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# Site bundled with the package (src/webserver/site)
DEFAULT_SITE_DIR = Path(__file__).parent / "site"

MAIN_PAGE = "main-page.html"
ERROR_PAGE = "404.html"
POEM_DIR = "poem"
IMAGES_DIR = "images"

CS50_URL = "https://www.youtube.com/watch?v=LfaMVlDaQ24&ab_channel=freeCodeCamp.org"


@dataclass
class ServerConfig:
    """
    Configuration for the web server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, timeout, max_header_size

    SITE
    - site_dir, redirect_url

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """
    The IP address to bind to.
    - "127.0.0.1" - Localhost only (development)
    - "0.0.0.0" - All network interfaces (containers)
    """

    port: int = 8088
    """
    The port number to listen on.
    0 lets the OS pick a free port (useful in tests).
    """

    backlog: int = 50
    """
    Maximum number of queued connections while one is being served.
    """

    timeout: Optional[float] = None
    """
    Client socket timeout in seconds.
    None = blocking reads: a silent client stalls the server until it
    disconnects. Set a value to drop such clients instead.
    """

    max_header_size: int = 64 * 1024  # 64 KB
    """
    Maximum size of the request head (request line + headers) in bytes.
    Larger heads are treated as malformed requests.
    """

    # ─────────────────────────────────────────────────────────────────────
    # SITE
    # ─────────────────────────────────────────────────────────────────────

    site_dir: Optional[str] = None
    """
    Directory holding main-page.html, 404.html, poem/ and images/.
    None = the site bundled with the package.
    """

    redirect_url: str = CS50_URL
    """Target of the /cs50 redirect."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR).
    DEBUG also logs every request head as received.
    """

    # ─────────────────────────────────────────────────────────────────────
    # SITE PATHS
    # ─────────────────────────────────────────────────────────────────────

    @property
    def site_root(self) -> Path:
        """Resolved site directory."""
        return Path(self.site_dir) if self.site_dir else DEFAULT_SITE_DIR

    @property
    def main_page(self) -> Path:
        return self.site_root / MAIN_PAGE

    @property
    def error_page(self) -> Path:
        return self.site_root / ERROR_PAGE

    @property
    def poem_dir(self) -> Path:
        return self.site_root / POEM_DIR

    @property
    def images_dir(self) -> Path:
        return self.site_root / IMAGES_DIR

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTP_HOST       Server host (default: 127.0.0.1)
        HTTP_PORT       Server port (default: 8088)
        HTTP_TIMEOUT    Client socket timeout in seconds (default: none)
        HTTP_SITE_DIR   Site directory (default: bundled site)
        HTTP_LOG_LEVEL  Logging level (default: INFO)

        =====================================================================
        """
        timeout = os.getenv("HTTP_TIMEOUT")
        return cls(
            host=os.getenv("HTTP_HOST", "127.0.0.1"),
            port=int(os.getenv("HTTP_PORT", "8088")),
            timeout=float(timeout) if timeout else None,
            site_dir=os.getenv("HTTP_SITE_DIR"),
            log_level=os.getenv("HTTP_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called once at startup so a bad port or a missing site directory
        is reported before the first client connects.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.max_header_size < 1024:
            raise ValueError("max_header_size must be >= 1024")

        if not self.site_root.is_dir():
            raise ValueError(f"Site directory does not exist: {self.site_root}")
