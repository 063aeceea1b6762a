"""
Per-app state shared with handlers.
"""

from aiohttp import web

from omnex_backend.config import STATIC_PREFIX, Settings

APP_KEY_SETTINGS: web.AppKey[Settings] = web.AppKey("omnex_settings", Settings)


def get_settings(request: web.Request) -> Settings:
    return request.app[APP_KEY_SETTINGS]


def serving_base_url(request: web.Request, settings: Settings) -> str:
    """
    Base URL under which the serve root is reachable.

    A configured public base URL wins; otherwise it is derived from the
    request so links work behind whatever host the client used.
    """
    if settings.public_base_url:
        return settings.public_base_url.rstrip("/")
    return f"{request.scheme}://{request.host}{STATIC_PREFIX}"
