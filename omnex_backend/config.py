"""
Configuration for the Omnex asset explorer.

Values come from CLI overrides, then `OMNEX_*` environment variables, then
defaults. Invalid environment values are logged and replaced by the default.
"""
import logging
import os
import re
from dataclasses import dataclass, replace
from pathlib import Path

from .path_utils import is_within_root, relative_posix
from .utils import env_bool

logger = logging.getLogger(__name__)

API_PREFIX = "/omnex/"
STATIC_PREFIX = "/omnex/static"

DEFAULT_ASSETS_DIR_NAME = "Assets"
DEFAULT_ACCENT = "d946ef"
DEFAULT_PAGE_SIZE = 20
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8780

ACCENT_RE = re.compile(r"^[a-fA-F0-9]{6}$")


class AssetRootError(RuntimeError):
    """The configured asset root is unusable; nothing can be served."""


def _env_raw(*names: str, default: str | None = None) -> str | None:
    for name in names:
        if not name:
            continue
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return str(val).strip()
    return default


def _env_int(default: int, *names: str, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid integer for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


def _env_bool(default: bool, *names: str) -> bool:
    for name in names:
        if name and name in os.environ:
            return env_bool(name, default)
    return default


def _resolve_dir(value: str | os.PathLike, *, relative_to: Path | None = None) -> Path:
    path = Path(value).expanduser()
    if relative_to is not None and not path.is_absolute():
        path = relative_to / path
    try:
        return path.resolve(strict=False)
    except (OSError, RuntimeError):
        return path.absolute()


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration shared by every request."""

    serve_root: Path
    asset_root: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    public_base_url: str = ""
    serve_static: bool = True
    default_accent: str = DEFAULT_ACCENT
    default_page_size: int = DEFAULT_PAGE_SIZE
    debug: bool = False

    @property
    def static_mount(self) -> str:
        """URL prefix under which the asset root is published as static content."""
        rel = relative_posix(self.asset_root, self.serve_root)
        if not rel:
            return STATIC_PREFIX
        return f"{STATIC_PREFIX}/{rel}"


def load_settings(
    *,
    serve_root: str | os.PathLike | None = None,
    assets_dir: str | os.PathLike | None = None,
    host: str | None = None,
    port: int | None = None,
    public_base_url: str | None = None,
    serve_static: bool | None = None,
    debug: bool | None = None,
) -> Settings:
    """Build `Settings` from explicit overrides and the environment (no filesystem checks)."""
    serve_raw = serve_root if serve_root is not None else _env_raw("OMNEX_SERVE_ROOT")
    serve_path = _resolve_dir(serve_raw) if serve_raw else _resolve_dir(Path.cwd())

    assets_raw = assets_dir if assets_dir is not None else _env_raw("OMNEX_ASSETS_DIR", default=DEFAULT_ASSETS_DIR_NAME)
    asset_path = _resolve_dir(assets_raw or DEFAULT_ASSETS_DIR_NAME, relative_to=serve_path)

    accent = str(_env_raw("OMNEX_DEFAULT_ACCENT", default=DEFAULT_ACCENT) or DEFAULT_ACCENT)
    if not ACCENT_RE.match(accent):
        logger.warning("Invalid accent colour for OMNEX_DEFAULT_ACCENT=%r, using default=%s", accent, DEFAULT_ACCENT)
        accent = DEFAULT_ACCENT

    return Settings(
        serve_root=serve_path,
        asset_root=asset_path,
        host=host or str(_env_raw("OMNEX_HOST", default=DEFAULT_HOST)),
        port=port if port is not None else _env_int(DEFAULT_PORT, "OMNEX_PORT", min_value=1, max_value=65535),
        public_base_url=(public_base_url if public_base_url is not None else str(_env_raw("OMNEX_PUBLIC_BASE_URL", default="")))
        .strip()
        .rstrip("/"),
        serve_static=serve_static if serve_static is not None else _env_bool(True, "OMNEX_SERVE_STATIC"),
        default_accent=accent.lower(),
        default_page_size=_env_int(DEFAULT_PAGE_SIZE, "OMNEX_DEFAULT_PAGE_SIZE", min_value=1, max_value=10_000),
        debug=debug if debug is not None else _env_bool(False, "OMNEX_DEBUG"),
    )


def validate_settings(settings: Settings) -> Settings:
    """
    Enforce the startup contract and return settings with canonical paths.

    Raises:
        AssetRootError: the asset root is missing, not a directory, or not
            inside the serve root.
    """
    asset_root = settings.asset_root
    if not asset_root.is_dir():
        raise AssetRootError(
            f"The asset directory '{asset_root}' does not exist. Create it or point OMNEX_ASSETS_DIR at one."
        )
    try:
        serve_root = settings.serve_root.resolve(strict=True)
        asset_root = asset_root.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise AssetRootError(f"Cannot canonicalize configured directories: {exc}") from exc

    if not is_within_root(asset_root, serve_root):
        raise AssetRootError(
            f"The asset directory '{asset_root}' must be inside the serve root '{serve_root}'."
        )
    return replace(settings, serve_root=serve_root, asset_root=asset_root)
