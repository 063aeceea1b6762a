"""
Response utilities for route handlers.
"""

import math

from aiohttp import web

from omnex_shared import Result

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def _json_response(result: Result, status: int | None = None) -> web.Response:
    """
    Convert Result to JSON response.

    Args:
        result: Result object
        status: HTTP status code (optional, 200 when None)

    Returns:
        aiohttp web.Response
    """
    # Navigation problems degrade to fallbacks upstream; an explicit status is
    # only passed for server-side faults.
    if status is None:
        status = 200

    payload = _sanitize_json_payload(
        {
            "ok": result.ok,
            "data": result.data,
            "error": result.error,
            "code": result.code,
            "meta": result.meta,
        }
    )
    return web.json_response(payload, status=status)


def _sanitize_json_payload(value):
    """
    Normalize payload values so they are always valid strict JSON.
    - Converts NaN/Infinity floats to None.
    - Recurses through dict/list/tuple containers.
    """
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: _sanitize_json_payload(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_payload(v) for v in value]
    if isinstance(value, tuple):
        return [_sanitize_json_payload(v) for v in value]
    return value


def _export_response(body: str, content_type: str) -> web.Response:
    """Plain export body with permissive CORS, for API consumers on other origins."""
    return web.Response(text=body, content_type=content_type, charset="utf-8", headers=CORS_HEADERS)


def _html_response(body: str) -> web.Response:
    return web.Response(text=body, content_type="text/html", charset="utf-8")
