"""
Response handlers.

    from webserver.handlers import handle_resource_request, send_not_found

    if not handle_resource_request(ctx, routes):
        send_not_found(ctx, config.error_page)
"""

from .static import (
    handle_resource_request,
    send_file,
    send_not_found,
    send_redirect,
    send_response,
)

__all__ = [
    "handle_resource_request",
    "send_file",
    "send_not_found",
    "send_redirect",
    "send_response",
]
