"""
Low-level networking components.

    core/
    ├── socket_server.py  # Listening socket + accept loop
    └── connection.py     # Per-client socket wrapper
"""

from .connection import Connection, ConnectionState
from .socket_server import SocketServer

__all__ = ["Connection", "ConnectionState", "SocketServer"]
