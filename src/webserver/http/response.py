"""
=============================================================================
HTTP RESPONSE FRAMING
=============================================================================

Builds the exact bytes the server writes back to the client.

=============================================================================
RESPONSE ANATOMY
=============================================================================

Every file response (200 and 404) has the same shape:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │    HTTP/1.1 200 Document Follows\r\n          ← status line          │
    │    Content-Type: text/html; charset=UTF-8\r\n                        │
    │    Content-Length: 1532\r\n                   ← exact byte count     │
    │    \r\n                                       ← end of headers       │
    │    <!DOCTYPE html>...                         ← file bytes           │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Redirects carry no body and no Content-Type:

    HTTP/1.1 302 Found\r\n
    Location: https://www.youtube.com/...\r\n
    \r\n

No Date, Server or Connection headers are sent. The header order and the
CRLF line endings above are all a client gets, so they must not change.

=============================================================================
INTERVIEW QUESTIONS ABOUT RESPONSE FRAMING
=============================================================================

Q: "How does the client know where the body ends without keep-alive?"
A: "Content-Length gives the exact byte count. We also close the
   connection after every response, so even a client that ignores the
   header sees EOF when the body is complete."

Q: "Why is Content-Length the file size and not len(text)?"
A: "Content-Length counts bytes, not characters. A UTF-8 poem with
   accented letters has more bytes than characters."

=============================================================================
"""

from dataclasses import dataclass
from typing import Optional

from .content_type import ContentType
from .status_codes import HTTPStatus


HTTP_VERSION = "HTTP/1.1"
CRLF = "\r\n"


def format_head(status: HTTPStatus, content_type: ContentType, content_length: int) -> bytes:
    """
    Serialize the status line and headers of a file response.

    Args:
        status: Status code (200 or 404).
        content_type: Classification of the request.
        content_length: Body size in bytes.

    Returns:
        UTF-8 encoded head, terminated by the blank line.
    """
    lines = [
        f"{HTTP_VERSION} {status} {status.phrase}",
        f"Content-Type: {content_type.header_value}",
        f"Content-Length: {content_length}",
        "",
    ]
    return (CRLF.join(lines) + CRLF).encode("utf-8")


@dataclass
class HTTPResponse:
    """
    A response ready to be written to the socket.

    Either a file response (content_type + body) or a redirect (location,
    no body). Use the helpers below instead of building one by hand.
    """

    status: HTTPStatus = HTTPStatus.OK
    content_type: Optional[ContentType] = None
    body: bytes = b""
    location: Optional[str] = None

    @property
    def status_line(self) -> str:
        return f"{HTTP_VERSION} {self.status} {self.status.phrase}"

    def to_bytes(self) -> bytes:
        """Serialize the whole response: head followed by body."""
        if self.location is not None:
            return (
                f"{self.status_line}{CRLF}"
                f"Location: {self.location}{CRLF}"
                f"{CRLF}"
            ).encode("utf-8")

        if self.content_type is None:
            raise ValueError("A response with a body needs a content type")

        return format_head(self.status, self.content_type, len(self.body)) + self.body


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def ok(body: bytes, content_type: ContentType) -> HTTPResponse:
    """200 response carrying a file."""
    return HTTPResponse(HTTPStatus.OK, content_type, body)


def not_found(body: bytes, content_type: ContentType) -> HTTPResponse:
    """404 response carrying the error page."""
    return HTTPResponse(HTTPStatus.NOT_FOUND, content_type, body)


def redirect(location: str) -> HTTPResponse:
    """302 Found pointing at location, without a body."""
    return HTTPResponse(HTTPStatus.FOUND, location=location)
