"""
Version reporting endpoint.
"""
from aiohttp import web

from omnex_shared import Result
from omnex_shared.version import get_version_info

from ..core import _json_response


def register_version_routes(routes: web.RouteTableDef) -> None:
    """
    Expose the currently installed Omnex version.
    """
    async def _get_version(_request: web.Request) -> web.Response:
        data = get_version_info()
        return _json_response(Result.Ok(data))

    routes.get("/omnex/version")(_get_version)
