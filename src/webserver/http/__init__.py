"""
HTTP protocol components.

    http/
    ├── request.py       # Request head parsing
    ├── content_type.py  # Content-Type classification
    ├── response.py      # Response framing
    ├── router.py        # Route table
    └── status_codes.py  # Status codes
"""

from .request import HTTPParseError, RequestHead, extract_resource_path, parse_request_head
from .content_type import HTML, ContentType, classify
from .response import HTTPResponse, format_head, ok, not_found, redirect
from .router import RouteTable, ServeFile, Redirect, default_routes
from .status_codes import HTTPStatus

__all__ = [
    # Request parsing
    "HTTPParseError",
    "RequestHead",
    "extract_resource_path",
    "parse_request_head",

    # Classification
    "ContentType",
    "HTML",
    "classify",

    # Responses
    "HTTPResponse",
    "format_head",
    "ok",
    "not_found",
    "redirect",

    # Routing
    "RouteTable",
    "ServeFile",
    "Redirect",
    "default_routes",

    # Status codes
    "HTTPStatus",
]
