"""
Listing and export-tree assembly on top of the scanner.

Both entry points share one scan path; they differ only in what happens in
virtual-root mode and in recursion (decided by the QueryState).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from omnex_shared import ErrorCode, Result, get_logger, timer
from ...path_utils import RootEntry, relative_posix
from .models import AssetNode
from .scanner import ScanContext, scan_directory

if TYPE_CHECKING:
    from ...query.state import QueryState

logger = get_logger(__name__)


@dataclass(frozen=True)
class Listing:
    """The single directory level shown by the UI."""

    nodes: list[AssetNode]
    virtual_root: bool
    current_path: str


def _check_asset_root(state: QueryState) -> Result[None]:
    try:
        if state.asset_root.is_dir():
            return Result.Ok(None)
    except OSError:
        pass
    logger.error("Asset root is no longer available: %s", state.asset_root)
    return Result.Err(ErrorCode.CONFIG_ERROR, "The asset directory is not available")


def root_pseudo_node(root: RootEntry, ctx: ScanContext) -> AssetNode:
    """A root shown as a navigation entry: no size, no MIME, never expanded."""
    return AssetNode.directory(
        root.name,
        relative_path=relative_posix(root.path, ctx.asset_root),
        web_url="",
    )


def build_listing(state: QueryState, ctx: ScanContext) -> Result[Listing]:
    """
    Build the UI listing: the roots themselves in virtual-root mode, otherwise
    one scan of the target (recursive only with `showAll`).
    """
    check = _check_asset_root(state)
    if not check.ok:
        return Result.Err(check.code, check.error or "Asset root unavailable")

    if state.virtual_root:
        nodes = [root_pseudo_node(root, ctx) for root in state.roots]
        return Result.Ok(Listing(nodes=nodes, virtual_root=True, current_path=""))

    target = state.scan_target or state.roots[0].path
    with timer(f"scan {state.current_path or '/'}", logger):
        nodes = scan_directory(target, ctx, recursive=state.recursive)
    return Result.Ok(Listing(nodes=nodes, virtual_root=False, current_path=state.current_path))


def build_export_tree(state: QueryState, ctx: ScanContext) -> Result[list[AssetNode]]:
    """
    Build the tree for API formats. In virtual-root mode the scans of every
    root are concatenated in root order.
    """
    check = _check_asset_root(state)
    if not check.ok:
        return Result.Err(check.code, check.error or "Asset root unavailable")

    targets = [root.path for root in state.roots] if state.virtual_root else [state.scan_target or state.roots[0].path]
    tree: list[AssetNode] = []
    for target in targets:
        with timer(f"export scan {relative_posix(target, ctx.asset_root) or '/'}", logger):
            tree.extend(scan_directory(target, ctx, recursive=state.recursive))
    return Result.Ok(tree, roots=len(targets))
