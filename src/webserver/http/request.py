"""
=============================================================================
HTTP REQUEST HEAD PARSING
=============================================================================

This server only looks at the very first line of a request:

    GET /poem/sonnet-18.html HTTP/1.1\r\n     ← request line
    Host: localhost:8088\r\n                 ← ignored
    User-Agent: curl/8.0\r\n                 ← ignored
    \r\n                                     ← end of head

The request line has three space-separated parts:

    GET /poem/sonnet-18.html HTTP/1.1
    ─┬─ ────────────┬─────── ────┬───
     │              │            │
   Method    Resource path    Version

Only the resource path is used for routing. Everything else is kept for
logging but never influences what is sent back.

=============================================================================
MALFORMED REQUESTS
=============================================================================

A request line with fewer than two tokens ("GET") has no path. That is a
client error, not a server crash: we raise HTTPParseError and the server
answers with its not-found page.

=============================================================================
"""

from dataclasses import dataclass
from .status_codes import HTTPStatus


class HTTPParseError(Exception):
    """
    Raised when a request head cannot be understood.

    Carries the HTTP status code that describes the problem, so the
    caller can log it meaningfully.
    """

    def __init__(self, message: str, status_code: int = HTTPStatus.BAD_REQUEST):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class RequestHead:
    """
    A parsed request head.

    Attributes:
        raw: Header lines up to (not including) the blank line, joined by "\\n".
        request_line: The first line, e.g. "GET / HTTP/1.1".
        path: The resource path, e.g. "/poem/sonnet-18.html".
        method: Request method when present ("GET").
    """

    raw: str
    request_line: str
    path: str
    method: str = ""


def extract_resource_path(header_text: str) -> str:
    """
    Return the resource path from the first line of a request head.

    The first line is split on the space character and the second token
    is returned:

        "GET /cs50 HTTP/1.1"  →  "/cs50"

    Raises:
        HTTPParseError: If the first line has no second token.
    """
    request_line = header_text.split("\n", 1)[0]
    tokens = request_line.split(" ")
    if len(tokens) < 2 or not tokens[1]:
        raise HTTPParseError(f"Invalid request line: {request_line!r}")
    return tokens[1]


def parse_request_head(header_text: str) -> RequestHead:
    """
    Parse accumulated header text into a RequestHead.

    Args:
        header_text: Lines read up to the first blank line.

    Returns:
        RequestHead with the resource path extracted.

    Raises:
        HTTPParseError: If the request line is malformed.
    """
    path = extract_resource_path(header_text)
    request_line = header_text.split("\n", 1)[0]

    return RequestHead(
        raw=header_text,
        request_line=request_line,
        path=path,
        method=request_line.split(" ", 1)[0],
    )
