"""
=============================================================================
CONTENT-TYPE CLASSIFICATION
=============================================================================

Decides the Content-Type header for a request from its resource path.

The rules are fixed and intentionally tiny:

    ┌────────────────────────────┬───────────┬─────────────────────────┐
    │ Path                       │ Subtype   │ Content-Type            │
    ├────────────────────────────┼───────────┼─────────────────────────┤
    │ /images/java-logo.png      │ png       │ image/png               │
    │ /test/notes.txt            │ txt       │ text/txt                │
    │ /poem/sonnet-18.html       │ html      │ text/html               │
    │ /                          │ html      │ text/html               │
    │ /anything-else             │ html      │ text/html               │
    └────────────────────────────┴───────────┴─────────────────────────┘

Only paths under /test or /images take their subtype from the file
extension. Only "png" is an image; every other subtype is text/.

The result is used for every response of the request, including the
not-found page, so a request for /images/missing.gif is answered with a
404 page labelled text/gif.

=============================================================================
"""

from dataclasses import dataclass


# Prefixes whose subtype comes from the file extension
EXTENSION_PREFIXES = ("/test", "/images")

IMAGE_SUBTYPES = frozenset({"png"})

DEFAULT_SUBTYPE = "html"
CHARSET = "UTF-8"


@dataclass(frozen=True)
class ContentType:
    """
    Content type category and subtype.

    Example:
        ContentType("image/", "png").mime          == "image/png"
        ContentType("image/", "png").header_value  == "image/png; charset=UTF-8"
    """

    category: str
    subtype: str

    @property
    def mime(self) -> str:
        return self.category + self.subtype

    @property
    def header_value(self) -> str:
        """Value for the Content-Type response header."""
        return f"{self.mime}; charset={CHARSET}"

    def __str__(self) -> str:
        return self.mime


HTML = ContentType("text/", DEFAULT_SUBTYPE)


def classify(path: str) -> ContentType:
    """
    Classify a resource path.

    Args:
        path: Resource path from the request line.

    Returns:
        ContentType for the response headers.
    """
    subtype = DEFAULT_SUBTYPE
    if path.startswith(EXTENSION_PREFIXES) and "." in path:
        subtype = path.rsplit(".", 1)[1]

    category = "image/" if subtype in IMAGE_SUBTYPES else "text/"
    return ContentType(category, subtype)
