"""
Browse endpoints: HTML listing and JSON/XML/CSV exports.
"""

import asyncio

from aiohttp import web

from omnex_backend.features.browser import ScanContext, build_export_tree, build_listing
from omnex_backend.features.export import render_export
from omnex_backend.features.ui import render_page
from omnex_backend.query import decode_query, first_values, parse_pretty_path
from omnex_shared import ErrorCode, OutputFormat, Result, get_logger, sanitize_error_message

from ..core import (
    _export_response,
    _html_response,
    _json_response,
    get_settings,
    serving_base_url,
)

logger = get_logger(__name__)

BROWSE_PATH = "/omnex/browse"
BROWSE_ALIAS_PATH = "/omnex/"
PRETTY_PREFIX = "/omnex/b"


def request_params(request: web.Request, tail: str = "") -> dict[str, str]:
    """Pretty-path parameters from `tail`, overridden by explicit query parameters."""
    params = parse_pretty_path(tail) if tail else {}
    params.update(first_values(request.query))
    return params


async def _render(request: web.Request, params: dict[str, str]) -> web.Response:
    settings = get_settings(request)
    state = await asyncio.to_thread(
        decode_query,
        params,
        settings.asset_root,
        default_accent=settings.default_accent,
        default_page_size=settings.default_page_size,
    )
    ctx = ScanContext(
        asset_root=settings.asset_root,
        serve_root=settings.serve_root,
        base_url=serving_base_url(request, settings),
        extensions=state.type_filter,
    )

    if state.format is OutputFormat.HTML:
        listing = await asyncio.to_thread(build_listing, state, ctx)
        if not listing.ok:
            return _json_response(listing, status=500)
        body = render_page(
            state,
            listing.data,
            endpoint=BROWSE_PATH,
            default_accent=settings.default_accent,
            pretty_base=PRETTY_PREFIX,
        )
        return _html_response(body)

    tree = await asyncio.to_thread(build_export_tree, state, ctx)
    if not tree.ok:
        return _json_response(tree, status=500)
    body, content_type = render_export(state.format, tree.data or [])
    return _export_response(body, content_type)


def register_browse_routes(routes: web.RouteTableDef) -> None:
    """Register the browse endpoint, its alias and the pretty-path form."""

    async def _browse(request: web.Request) -> web.Response:
        try:
            return await _render(request, request_params(request))
        except Exception as exc:
            logger.exception("Browse request failed")
            return _json_response(
                Result.Err(ErrorCode.SCAN_FAILED, sanitize_error_message(exc, "Browse failed")),
                status=500,
            )

    async def _browse_pretty(request: web.Request) -> web.Response:
        tail = request.match_info.get("tail", "")
        try:
            return await _render(request, request_params(request, tail))
        except Exception as exc:
            logger.exception("Browse request failed")
            return _json_response(
                Result.Err(ErrorCode.SCAN_FAILED, sanitize_error_message(exc, "Browse failed")),
                status=500,
            )

    routes.get(BROWSE_PATH)(_browse)
    routes.get(BROWSE_ALIAS_PATH)(_browse)
    routes.get(PRETTY_PREFIX + "/{tail:.*}")(_browse_pretty)
