"""
aiohttp application factory and command-line entry point.
"""

from __future__ import annotations

import argparse
import logging
import sys

from aiohttp import web

from omnex_shared import get_logger, log_success
from omnex_shared.log import set_level
from .config import AssetRootError, Settings, load_settings, validate_settings
from .routes import register_routes
from .routes.core import APP_KEY_SETTINGS

logger = get_logger(__name__)


def create_app(settings: Settings) -> web.Application:
    """
    Build the web application for already-validated `settings`.

    The asset root is published under `settings.static_mount` so every
    `web_url` produced by a scan resolves against this server.
    """
    app = web.Application()
    app[APP_KEY_SETTINGS] = settings
    register_routes(app)
    if settings.serve_static:
        app.router.add_static(settings.static_mount, settings.asset_root, follow_symlinks=False)
    return app


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Serve the Omnex asset explorer.")
    p.add_argument("--serve-root", type=str, default=None, help="Serving directory (default: OMNEX_SERVE_ROOT or cwd)")
    p.add_argument("--assets", type=str, default=None, help="Asset root, relative to the serve root (default: Assets)")
    p.add_argument("--host", type=str, default=None, help="Bind address")
    p.add_argument("--port", type=int, default=None, help="Bind port")
    p.add_argument("--public-base-url", type=str, default=None, help="Fixed base URL for asset links")
    p.add_argument("--no-static", action="store_true", help="Do not publish the asset root as static content")
    p.add_argument("--debug", action="store_true", help="Verbose logging and detailed error messages")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    settings = load_settings(
        serve_root=args.serve_root,
        assets_dir=args.assets,
        host=args.host,
        port=args.port,
        public_base_url=args.public_base_url,
        serve_static=False if args.no_static else None,
        debug=True if args.debug else None,
    )
    if settings.debug:
        set_level(logging.DEBUG)

    try:
        settings = validate_settings(settings)
    except AssetRootError as exc:
        logger.critical("%s", exc)
        return 1

    app = create_app(settings)
    logger.info("Serve root: %s", settings.serve_root)
    logger.info("Asset root: %s", settings.asset_root)
    if settings.serve_static:
        logger.info("Static assets mounted at %s", settings.static_mount)
    log_success(logger, f"Browse at http://{settings.host}:{settings.port}/omnex/browse")
    web.run_app(app, host=settings.host, port=settings.port, print=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
