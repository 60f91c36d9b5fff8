"""
=============================================================================
WEB SERVER CLI ENTRY POINT
=============================================================================

    # Run with defaults (127.0.0.1:8088, bundled site)
    python -m webserver

    # Custom port
    python -m webserver --port 9000

    # Listen on all interfaces (for containers)
    python -m webserver --host 0.0.0.0

    # Serve another copy of the site
    python -m webserver --site ./my-site

Settings not given on the command line come from the environment
(HTTP_HOST, HTTP_PORT, HTTP_TIMEOUT, HTTP_SITE_DIR, HTTP_LOG_LEVEL) and
then from the ServerConfig defaults.

=============================================================================
"""

import argparse
import logging
import sys

from . import __version__
from .config import ServerConfig
from .server import WebServer


logger = logging.getLogger("webserver")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webserver",
        description="Single-threaded static site server built on raw sockets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m webserver                      # Run with defaults
  python -m webserver --port 9000          # Custom port
  python -m webserver --host 0.0.0.0       # Listen on all interfaces
  python -m webserver --site ./my-site     # Serve another site directory
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 127.0.0.1, use 0.0.0.0 for containers)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: 8088)"
    )

    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Drop clients that stay silent this many seconds (default: wait forever)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # SITE / LOGGING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--site", "-s",
        default=None,
        help="Site directory with main-page.html, 404.html, poem/ and images/"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"webserver {__version__}"
    )

    return parser


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Environment first, then command-line overrides."""
    config = ServerConfig.from_env()

    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.site is not None:
        config.site_dir = args.site
    if args.log_level is not None:
        config.log_level = args.log_level

    return config


def main(argv=None) -> int:
    """
    Main CLI entry point.

    Returns:
        0 on clean shutdown, 1 if the port could not be bound,
        2 on invalid configuration.
    """
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    server = WebServer(config)

    try:
        server.run()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    except OSError as e:
        logger.error(f"Server could not start: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
