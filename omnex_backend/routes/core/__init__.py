"""
Core utilities for route handlers.
"""
from .context import APP_KEY_SETTINGS, get_settings, serving_base_url
from .response import CORS_HEADERS, _export_response, _html_response, _json_response, _sanitize_json_payload

__all__ = [
    "APP_KEY_SETTINGS",
    "CORS_HEADERS",
    "get_settings",
    "serving_base_url",
    "_json_response",
    "_export_response",
    "_html_response",
    "_sanitize_json_payload",
]
