"""
Route handler modules; each exposes a `register_*_routes(routes)` function.
"""
from .browse import register_browse_routes
from .health import register_health_routes
from .version import register_version_routes

__all__ = [
    "register_browse_routes",
    "register_health_routes",
    "register_version_routes",
]
