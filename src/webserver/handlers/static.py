"""
=============================================================================
STATIC FILE HANDLERS
=============================================================================

Writes the three kinds of responses this server produces:

    ┌────────────────────┬────────┬──────────────────────────────────────┐
    │ Handler            │ Status │ Body                                 │
    ├────────────────────┼────────┼──────────────────────────────────────┤
    │ send_file()        │ 200    │ the routed file                      │
    │ send_not_found()   │ 404    │ the site's 404.html                  │
    │ send_redirect()    │ 302    │ none (Location header only)          │
    └────────────────────┴────────┴──────────────────────────────────────┘

handle_resource_request() looks the path up in the route table and picks
the right one. It returns False when nothing was sent, which tells the
server to fall back to the not-found page.

=============================================================================
MISSING FILES
=============================================================================

A route can point at a file that is not on disk (someone deleted a poem).
Rather than closing the connection without a word, send_file() reports
False and the client gets the regular 404 page.

=============================================================================
CLIENTS THAT LEAVE EARLY
=============================================================================

Browsers often drop a connection mid-transfer (user clicked away, image
no longer needed). Writing to such a socket raises BrokenPipeError or
ConnectionResetError. That is not a server problem: it is logged as a
warning and the request simply ends. Any other socket error propagates.

=============================================================================
"""

import logging
from pathlib import Path

from ..context import RequestContext
from ..http.response import HTTPResponse, not_found, ok, redirect
from ..http.router import Redirect, RouteTable, ServeFile


logger = logging.getLogger(__name__)


def send_response(ctx: RequestContext, response: HTTPResponse) -> bool:
    """
    Write a response for ctx and record its status.

    Returns:
        False if the client disconnected while it was being written.
    """
    ctx.status = response.status
    return ctx.conn.send(response.to_bytes())


def send_file(ctx: RequestContext, path: Path) -> bool:
    """
    Send a file with status 200.

    The whole file is read into memory; Content-Length is its byte size
    and Content-Type comes from the request's classification.

    Args:
        ctx: Current request.
        path: File to send.

    Returns:
        True if a response was produced (even if the client left while
        it was being written), False if the file does not exist.
    """
    if not path.is_file():
        logger.warning(f"[{ctx.conn.id}] Routed file missing: {path}")
        return False

    content = path.read_bytes()
    send_response(ctx, ok(content, ctx.content_type))
    return True


def send_not_found(ctx: RequestContext, error_page: Path) -> None:
    """
    Send the error page with status 404.

    The Content-Type is the one computed for the original request, so an
    unknown /images/x.gif is answered as text/gif.

    Raises:
        FileNotFoundError: If the error page itself is missing.
    """
    content = error_page.read_bytes()
    send_response(ctx, not_found(content, ctx.content_type))


def send_redirect(ctx: RequestContext, url: str) -> None:
    """Send a 302 Found pointing at url."""
    send_response(ctx, redirect(url))


def handle_resource_request(ctx: RequestContext, routes: RouteTable) -> bool:
    """
    Serve ctx.path according to the route table.

    Returns:
        True if a response was sent, False if the path is not routed or its
        file is missing (the caller then sends the 404 page).
    """
    action = routes.lookup(ctx.path)

    if isinstance(action, ServeFile):
        return send_file(ctx, action.path)

    if isinstance(action, Redirect):
        send_redirect(ctx, action.url)
        return True

    return False
