"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The handful of status codes this server ever sends, with their reason
phrases.

    HTTP/1.1 200 Document Follows
             ─── ────────────────
              │   │
              │   └── Reason phrase
              └────── Status code

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes used by the server.

    IntEnum so a status compares equal to its number:

        HTTPStatus.OK == 200  # True
        f"{HTTPStatus.OK}"    # "200"
    """

    OK = 200
    FOUND = 302
    BAD_REQUEST = 400
    NOT_FOUND = 404
    REQUEST_HEADER_FIELDS_TOO_LARGE = 431

    def __str__(self) -> str:
        return str(self.value)

    @property
    def phrase(self) -> str:
        """Reason phrase for the status line."""
        return _STATUS_PHRASES.get(self, "Unknown")


_STATUS_PHRASES = {
    HTTPStatus.OK: "Document Follows",
    HTTPStatus.FOUND: "Found",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.REQUEST_HEADER_FIELDS_TOO_LARGE: "Request Header Fields Too Large",
}
