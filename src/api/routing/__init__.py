"""File-tree routing for the API.

- **discovery**: Walks the endpoints directory and maps files to URL prefixes
- **mount**: Imports each endpoint module and includes its router in the app

Adding a file under the endpoints root adds its routes; there is no central
registration list.
"""

from src.api.routing.discovery import (
    RouteEntry,
    discover_routes,
    path_from_file_name,
)
from src.api.routing.mount import load_endpoint, mount_routes

__all__ = [
    "RouteEntry",
    "discover_routes",
    "load_endpoint",
    "mount_routes",
    "path_from_file_name",
]
