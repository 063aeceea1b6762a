"""
Route registration system.
Coordinates all route handlers and registers them with an aiohttp app.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from aiohttp import web

from omnex_backend.config import API_PREFIX, STATIC_PREFIX
from omnex_backend.observability import ensure_observability
from omnex_shared import get_logger

from .handlers import (
    register_browse_routes,
    register_health_routes,
    register_version_routes,
)

_APP_KEY_SECURITY_MIDDLEWARES_INSTALLED: web.AppKey[bool] = web.AppKey(
    "_omnex_security_middlewares_installed", bool
)
_APP_KEY_ROUTES_REGISTERED: web.AppKey[bool] = web.AppKey("_omnex_routes_registered", bool)

logger = get_logger(__name__)


@web.middleware
async def security_headers_middleware(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    """Apply security headers to Omnex responses; static asset bytes are left alone."""
    response = await handler(request)

    path = request.path or ""
    if not path.startswith(API_PREFIX) or path.startswith(STATIC_PREFIX + "/"):
        return response

    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    # The HTML page needs its inline styles; everything else is data.
    if not (response.content_type or "").startswith("text/html"):
        response.headers.setdefault("Content-Security-Policy", "default-src 'none'")
    return response


def _install_security_middlewares(app: web.Application) -> None:
    if app.get(_APP_KEY_SECURITY_MIDDLEWARES_INSTALLED):
        return
    app.middlewares.append(security_headers_middleware)
    app[_APP_KEY_SECURITY_MIDDLEWARES_INSTALLED] = True


def register_all_routes(routes: web.RouteTableDef | None = None) -> web.RouteTableDef:
    """
    Register all route handlers and return the RouteTableDef.
    This is the central registration point for all routes.
    """
    routes = routes if routes is not None else web.RouteTableDef()

    register_browse_routes(routes)
    register_health_routes(routes)
    register_version_routes(routes)

    logger.debug("Routes registered:")
    logger.debug("  GET /omnex/browse?folder=&view=&format=&type=&showAll=&page=&limit=&color=")
    logger.debug("  GET /omnex/ (alias of /omnex/browse)")
    logger.debug("  GET /omnex/b/<folders>/¬<view>¬/+<types>+/!<showAll>!")
    logger.debug("  GET /omnex/health")
    logger.debug("  GET /omnex/version")
    return routes


def register_routes(app: web.Application) -> None:
    """
    Register routes and middlewares onto an aiohttp application (once per app).
    """
    if app.get(_APP_KEY_ROUTES_REGISTERED):
        logger.debug("register_routes(app) skipped: routes already registered on this app")
        return

    ensure_observability(app)
    _install_security_middlewares(app)
    app.add_routes(register_all_routes())
    app[_APP_KEY_ROUTES_REGISTERED] = True
