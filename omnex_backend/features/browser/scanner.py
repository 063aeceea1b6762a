"""
Directory scanner producing the AssetNode tree for one directory.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from omnex_shared import get_logger
from ...path_utils import relative_posix
from .mime import guess_content_type
from .models import AssetNode, file_extension

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScanContext:
    """
    Per-request inputs shared by every level of a scan.

    `asset_root` keys navigation (`relative_path`); `serve_root` and
    `base_url` build the public `web_url`. An empty `extensions` set disables
    filtering.
    """

    asset_root: Path
    serve_root: Path
    base_url: str
    extensions: frozenset[str] = frozenset()

    def web_url_for(self, path: Path) -> str:
        rel = relative_posix(path, self.serve_root)
        # Undecodable name bytes go out as their raw %XX escapes.
        return f"{self.base_url.rstrip('/')}/{quote(rel, errors='surrogateescape')}"

    def allows(self, extension: str) -> bool:
        return not self.extensions or extension in self.extensions


def normalize_extensions(values: Iterable[str]) -> frozenset[str]:
    """Lowercase, trim and strip a leading dot; empty tokens are ignored."""
    out = set()
    for value in values:
        ext = str(value or "").strip().lower().lstrip(".")
        if ext:
            out.add(ext)
    return frozenset(out)


def display_text(name: str) -> str:
    """
    Text-safe form of an OS-decoded name.

    Names that are not valid in the filesystem encoding arrive with
    surrogate escapes, which no text encoder accepts; those bytes become U+FFFD.
    """
    return os.fsencode(name).decode("utf-8", errors="replace")


def _entry_is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def _entry_size(entry: os.DirEntry) -> int:
    try:
        return int(entry.stat().st_size)
    except OSError as exc:
        logger.debug("Cannot stat %s: %s", entry.path, exc)
        return 0


def _build_node(entry: os.DirEntry, ctx: ScanContext, recursive: bool) -> AssetNode | None:
    entry_path = Path(entry.path)
    is_dir = _entry_is_dir(entry)

    name = display_text(entry.name)
    if name != entry.name:
        logger.debug("Undecodable file name under %s", display_text(str(entry_path.parent)))

    if not is_dir and not ctx.allows(file_extension(name)):
        return None

    relative_path = display_text(relative_posix(entry_path, ctx.asset_root))
    web_url = ctx.web_url_for(entry_path)

    if is_dir:
        children = tuple(scan_directory(entry_path, ctx, recursive=True)) if recursive else None
        return AssetNode.directory(
            name,
            relative_path=relative_path,
            web_url=web_url,
            children=children,
        )

    return AssetNode.file(
        name,
        relative_path=relative_path,
        web_url=web_url,
        mime_type=guess_content_type(entry_path),
        size_bytes=_entry_size(entry),
    )


def scan_directory(path: Path, ctx: ScanContext, *, recursive: bool) -> list[AssetNode]:
    """
    List `path` as AssetNodes in native enumeration order.

    Files whose extension is not in `ctx.extensions` are skipped; directories
    are always kept. With `recursive`, every directory node carries its
    children; without it, none does. A missing or unreadable directory yields
    an empty list. Symlinked directories are followed without cycle detection.
    """
    try:
        if not path.is_dir():
            return []
    except OSError:
        return []

    nodes: list[AssetNode] = []
    try:
        with os.scandir(path) as it:
            for entry in it:
                node = _build_node(entry, ctx, recursive)
                if node is not None:
                    nodes.append(node)
    except OSError as exc:
        logger.debug("Cannot list %s: %s", path, exc)
    return nodes
