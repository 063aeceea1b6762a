"""
Observability helpers (request id + timing) for aiohttp routes.
"""

from __future__ import annotations

import logging
import time
from typing import Any
from uuid import uuid4

from aiohttp import web

from omnex_shared import get_logger, log_structured, request_id_var
from .config import API_PREFIX
from .utils import env_bool, env_float

logger = get_logger(__name__)

_APPKEY_OBS_INSTALLED = web.AppKey("omnex_observability_installed", bool)

MS_PER_S = 1000.0
_DEFAULT_SLOW_MS = 1500.0
_HEALTH_PATHS = frozenset({"/omnex/health"})


def _new_request_id() -> str:
    return uuid4().hex


def _get_request_id(request: web.Request) -> str:
    rid = (request.headers.get("X-Request-ID") or "").strip()
    return rid or _new_request_id()


def _is_error_status(status: int | None) -> bool:
    return status is not None and status >= 400


def _should_log(request: web.Request, *, status: int | None, duration_ms: float) -> bool:
    path = request.path or ""
    if not path.startswith(API_PREFIX):
        return False
    if _is_error_status(status):
        return True
    if env_bool("OMNEX_OBS_LOG_ALL", False):
        return True
    if path in _HEALTH_PATHS:
        return False
    # Slow scans are worth a line even when they succeed.
    return duration_ms >= env_float("OMNEX_OBS_SLOW_MS", _DEFAULT_SLOW_MS)


def build_request_log_fields(request: web.Request, response_status: int | None = None) -> dict[str, Any]:
    """Build a JSON-serializable dict of request/response fields for logs."""
    return {
        "request_id": request.get("omnex_request_id"),
        "method": request.method,
        "path": request.path,
        "query": dict(request.query),
        "status": response_status,
        "duration_ms": round(float(request.get("omnex_duration_ms") or 0.0), 2),
        "remote": getattr(request, "remote", None),
    }


def _emit_request_log(
    request: web.Request,
    *,
    status: int | None,
    duration_ms: float,
    error: str | None,
    error_type: str | None,
) -> None:
    if not _should_log(request, status=status, duration_ms=duration_ms):
        return
    fields = build_request_log_fields(request, response_status=status)
    if error:
        fields["error"] = error
        fields["error_type"] = error_type
    if status is not None and status >= 500:
        level = logging.ERROR
    elif status is not None and status >= 400:
        level = logging.WARNING
    else:
        level = logging.INFO
    log_structured(logger, level, "Request handled", **fields)


@web.middleware
async def request_context_middleware(request: web.Request, handler):
    """Add request-id correlation and lightweight request logging context."""
    rid = _get_request_id(request)
    request["omnex_request_id"] = rid
    token = request_id_var.set(rid)
    start = time.perf_counter()
    status: int | None = None
    error: str | None = None
    error_type: str | None = None
    try:
        response = await handler(request)
        status = int(getattr(response, "status", 200) or 200)
        response.headers["X-Request-ID"] = rid
        return response
    except web.HTTPException as exc:
        status = int(exc.status or 500)
        error_type, error = exc.__class__.__name__, str(exc)
        exc.headers["X-Request-ID"] = rid
        raise
    except Exception as exc:
        status = 500
        error_type, error = exc.__class__.__name__, str(exc)
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * MS_PER_S
        request["omnex_duration_ms"] = duration_ms
        _emit_request_log(request, status=status, duration_ms=duration_ms, error=error, error_type=error_type)
        request_id_var.reset(token)


def ensure_observability(app: web.Application) -> None:
    """
    Install middleware once.
    """
    if app.get(_APPKEY_OBS_INSTALLED):
        return
    app[_APPKEY_OBS_INSTALLED] = True
    app.middlewares.append(request_context_middleware)
