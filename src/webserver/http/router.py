"""
=============================================================================
ROUTE TABLE
=============================================================================

Maps resource paths to what the server should do with them.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTE TABLE                                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   /                              → ServeFile(main-page.html)        │
    │   /images/java-logo.png          → ServeFile(images/java-logo.png)  │
    │   /images/javascript-logo.png    → ServeFile(images/...)            │
    │   /poem/sonnet-18.html           → ServeFile(poem/sonnet-18.html)   │
    │   /poem/the-new-colossus.html    → ServeFile(poem/...)              │
    │   /cs50                          → Redirect(youtube URL)            │
    │   anything else                  → None (caller sends 404)          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
EXACT MATCH ONLY
=============================================================================

This is a lookup table, not a pattern router:

    /poem/sonnet-18.html       ✓
    /poem/sonnet-18.html/      ✗  (trailing slash)
    /poem/sonnet-18.html?x=1   ✗  (query string)
    /POEM/sonnet-18.html       ✗  (case)

The table is built once at startup and cannot be modified afterwards, so
it is safe to share between requests.

=============================================================================
"""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from ..config import ServerConfig


@dataclass(frozen=True)
class ServeFile:
    """Send the file at path with status 200."""
    path: Path


@dataclass(frozen=True)
class Redirect:
    """Send a 302 redirect to url."""
    url: str


Action = Union[ServeFile, Redirect]


IMAGE_FILES = ("java-logo.png", "javascript-logo.png")
POEM_FILES = ("sonnet-18.html", "the-new-colossus.html")


class RouteTable:
    """
    Immutable mapping from literal resource path to an Action.

    Usage:
        routes = RouteTable({"/": ServeFile(Path("index.html"))})
        routes.lookup("/")        # ServeFile(path=...)
        routes.lookup("/nope")    # None
    """

    def __init__(self, routes: Mapping[str, Action]):
        # Copy first so later changes to the caller's dict are not visible
        self._routes: Mapping[str, Action] = MappingProxyType(dict(routes))

    def lookup(self, path: str) -> Optional[Action]:
        """Return the action for path, or None if it is not routed."""
        return self._routes.get(path)

    @property
    def routes(self) -> Mapping[str, Action]:
        """Read-only view of the table."""
        return self._routes

    def describe(self) -> str:
        """One line per route, for the startup log."""
        lines = []
        for path, action in self._routes.items():
            if isinstance(action, Redirect):
                lines.append(f"  {path:<32} → 302 {action.url}")
            else:
                lines.append(f"  {path:<32} → {action.path}")
        return "\n".join(lines)


def default_routes(config: ServerConfig) -> RouteTable:
    """
    Build the site's route table from the configured site directory.

    Args:
        config: Server configuration (site paths, redirect target).

    Returns:
        RouteTable with the main page, images, poems and the /cs50 redirect.
    """
    routes: Dict[str, Action] = {"/": ServeFile(config.main_page)}

    for name in IMAGE_FILES:
        routes[f"/images/{name}"] = ServeFile(config.images_dir / name)

    for name in POEM_FILES:
        routes[f"/poem/{name}"] = ServeFile(config.poem_dir / name)

    routes["/cs50"] = Redirect(config.redirect_url)

    return RouteTable(routes)
