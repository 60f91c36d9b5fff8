"""
=============================================================================
WEBSERVER - Single-threaded static site server on raw sockets
=============================================================================

A deliberately small HTTP/1.1 server: one listening socket, one client at
a time, a fixed table of pages, images and one redirect.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    webserver/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m webserver)
    ├── server.py            # WebServer: the request sequence
    ├── config.py            # ServerConfig dataclass
    ├── context.py           # Per-request RequestContext
    ├── core/                # Low-level components
    │   ├── socket_server.py # Accept loop
    │   └── connection.py    # Connection wrapper
    ├── http/                # HTTP protocol components
    │   ├── request.py       # Request head parsing
    │   ├── content_type.py  # Content-Type classification
    │   ├── response.py      # Response framing
    │   ├── router.py        # Route table
    │   └── status_codes.py  # Status codes
    ├── handlers/
    │   └── static.py        # File, 404 and redirect responses
    └── site/                # Bundled pages and images

=============================================================================
QUICK START
=============================================================================

    from webserver import WebServer, ServerConfig

    WebServer(ServerConfig(port=8088)).run()

    $ curl -i http://127.0.0.1:8088/poem/sonnet-18.html

=============================================================================
"""

__version__ = "1.0.0"

from .server import WebServer
from .config import ServerConfig

__all__ = ["WebServer", "ServerConfig", "__version__"]
