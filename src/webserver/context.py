"""
Per-request state.

Everything the handlers need for one request travels in a RequestContext
instead of living on the server object, so nothing from one request can
leak into the next.
"""

from dataclasses import dataclass
from typing import Optional

from .core.connection import Connection
from .http.content_type import ContentType, classify
from .http.request import RequestHead
from .http.status_codes import HTTPStatus


@dataclass
class RequestContext:
    """
    One request being served.

    Attributes:
        conn: The client connection.
        head: Parsed request head.
        content_type: Classification of head.path, used for every response
            of this request (including the 404 page).
        status: Status of the response sent so far, for the access log.
    """

    conn: Connection
    head: RequestHead
    content_type: Optional[ContentType] = None
    status: Optional[HTTPStatus] = None

    def __post_init__(self):
        if self.content_type is None:
            self.content_type = classify(self.head.path)

    @property
    def path(self) -> str:
        return self.head.path
