"""
Request parameters -> canonical QueryState.

Decoding never fails: every malformed or missing parameter falls back to its
default, and unusable paths fall back to the asset root.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from omnex_shared import OutputFormat, get_logger
from ..config import ACCENT_RE, DEFAULT_ACCENT, DEFAULT_PAGE_SIZE
from ..path_utils import RootEntry, relative_posix, resolve_roots, resolve_within
from ..utils import parse_bool, parse_int, split_csv
from ..features.browser.scanner import normalize_extensions

logger = get_logger(__name__)

PARAM_FOLDER = "folder"
PARAM_VIEW = "view"
PARAM_FORMAT = "format"
PARAM_TYPE = "type"
PARAM_SHOW_ALL = "showAll"
PARAM_PAGE = "page"
PARAM_LIMIT = "limit"
PARAM_COLOR = "color"


@dataclass(frozen=True)
class QueryState:
    """
    Decoded request. `params` keeps the raw parameters so links can be
    rebuilt from them; every other field is derived.
    """

    params: tuple[tuple[str, str], ...]
    asset_root: Path
    roots: tuple[RootEntry, ...]
    view_path: str
    format: OutputFormat
    type_filter: frozenset[str]
    recursive: bool
    page: int
    page_size: int
    accent_color: str
    virtual_root: bool
    scan_target: Path | None
    current_path: str

    @property
    def raw(self) -> dict[str, str]:
        return dict(self.params)

    @property
    def type_param(self) -> str:
        return self.raw.get(PARAM_TYPE, "")


def first_values(params: Mapping[str, Any]) -> dict[str, str]:
    """Collapse a (multi)mapping to its first value per key, preserving key order."""
    out: dict[str, str] = {}
    for key in params:
        if key not in out:
            out[str(key)] = str(params[key])
    return out


def parse_format(value: str | None) -> OutputFormat:
    """Missing -> html; anything other than exactly html/json/xml -> csv."""
    if value is None:
        return OutputFormat.HTML
    try:
        return OutputFormat(str(value))
    except ValueError:
        return OutputFormat.CSV


def parse_accent(value: str | None, default: str = DEFAULT_ACCENT) -> str:
    if value is not None and ACCENT_RE.match(str(value)):
        return str(value).lower()
    return default


def _scan_target(asset_root: Path, roots: list[RootEntry], view: str) -> Path:
    if view:
        res = resolve_within(asset_root, view)
        if res.ok and res.data is not None:
            return res.data
        logger.debug("Ignoring view %r: %s", view, res.code)
    return roots[0].path


def decode_query(
    params: Mapping[str, Any],
    asset_root: Path,
    *,
    default_accent: str = DEFAULT_ACCENT,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> QueryState:
    """
    Decode raw request parameters against `asset_root`.

    Virtual-root mode is active when several roots survive resolution and no
    `view` is given; otherwise the scan target is `view` (resolved under the
    asset root) or the first root.
    """
    raw = first_values(params)
    roots = resolve_roots(asset_root, raw.get(PARAM_FOLDER))
    view = raw.get(PARAM_VIEW, "")
    fmt = parse_format(raw.get(PARAM_FORMAT))
    # API consumers always get the full tree.
    recursive = parse_bool(raw.get(PARAM_SHOW_ALL), False) if fmt is OutputFormat.HTML else True

    virtual_root = len(roots) > 1 and not view
    scan_target: Path | None = None
    current_path = ""
    if not virtual_root:
        scan_target = _scan_target(asset_root, roots, view)
        try:
            root_resolved = asset_root.resolve(strict=False)
        except (OSError, RuntimeError):
            root_resolved = asset_root
        current_path = relative_posix(scan_target, root_resolved)

    return QueryState(
        params=tuple(raw.items()),
        asset_root=asset_root,
        roots=tuple(roots),
        view_path=view,
        format=fmt,
        type_filter=normalize_extensions(split_csv(raw.get(PARAM_TYPE))),
        recursive=recursive,
        page=parse_int(raw.get(PARAM_PAGE, 1), 1, min_value=1),
        page_size=parse_int(raw.get(PARAM_LIMIT, default_page_size), default_page_size, min_value=1),
        accent_color=parse_accent(raw.get(PARAM_COLOR), default_accent),
        virtual_root=virtual_root,
        scan_target=scan_target,
        current_path=current_path,
    )
