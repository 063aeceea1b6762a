"""
Health check endpoint.
"""
from aiohttp import web

from omnex_backend.path_utils import relative_posix
from omnex_shared import Result, get_logger

from ..core import _json_response, get_settings

logger = get_logger(__name__)


def register_health_routes(routes: web.RouteTableDef) -> None:
    """
    Report whether the asset root is still servable.
    """

    @routes.get("/omnex/health")
    async def health(request):
        """Get health status."""
        settings = get_settings(request)
        try:
            available = settings.asset_root.is_dir()
        except OSError as exc:
            logger.debug("Asset root stat failed: %s", exc)
            available = False
        if not available:
            logger.warning("Health check: asset root is not available")
        return _json_response(
            Result.Ok(
                {
                    "status": "ok" if available else "degraded",
                    "asset_root_available": available,
                    "asset_root": relative_posix(settings.asset_root, settings.serve_root),
                    "static_mount": settings.static_mount if settings.serve_static else None,
                    "default_page_size": settings.default_page_size,
                }
            )
        )
