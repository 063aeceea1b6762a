"""
Path normalization, containment and resolution helpers.

Every user-supplied path segment (root selectors and navigation targets) goes
through `resolve_within`, which canonicalizes the joined path the same way the
OS does and only accepts existing directories inside the base directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from omnex_shared import ErrorCode, Result, get_logger
from .utils import split_csv

logger = get_logger(__name__)

DEFAULT_ROOT_NAME = "Root"


@dataclass(frozen=True)
class RootEntry:
    """One named starting point for a scan."""

    path: Path
    name: str


def _path_relative_to(candidate: Path, root: Path) -> bool:
    # Component-wise: "/a/AssetsEvil" is not inside "/a/Assets".
    return candidate == root or candidate.is_relative_to(root)


def is_within_root(candidate: Path, root: Path) -> bool:
    try:
        root_resolved = root.resolve(strict=True)
        cand_resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return False
    return _path_relative_to(cand_resolved, root_resolved)


def relative_posix(path: Path, root: Path) -> str:
    """
    Forward-slash path of `path` relative to `root`, without a leading slash.

    Returns "" when both are the same directory.
    """
    try:
        rel = path.relative_to(root)
    except ValueError:
        rel = Path(os.path.relpath(str(path), str(root)))
    text = rel.as_posix()
    return "" if text == "." else text.lstrip("/")


def resolve_within(base: Path, segment: str) -> Result[Path]:
    """
    Resolve a user-controlled relative `segment` against the trusted `base`.

    Either separator is accepted and leading separators are ignored, so
    "/Images" and "Images" name the same folder. The result is Ok only when the
    canonical path exists, is a directory, and equals `base` or lies below it.
    """
    raw = str(segment or "")
    if "\x00" in raw:
        return Result.Err(ErrorCode.INVALID_INPUT, "Invalid path segment")
    rel = raw.replace("\\", "/").lstrip("/")

    try:
        base_resolved = base.resolve(strict=True)
        candidate = (base_resolved / rel).resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return Result.Err(ErrorCode.DIR_NOT_FOUND, f"Path not found: {raw}")

    if not _path_relative_to(candidate, base_resolved):
        return Result.Err(ErrorCode.OUTSIDE_ROOT, f"Path escapes the asset root: {raw}")
    if not candidate.is_dir():
        return Result.Err(ErrorCode.DIR_NOT_FOUND, f"Not a directory: {raw}")
    return Result.Ok(candidate)


def resolve_roots(base: Path, folder_param: str | None) -> list[RootEntry]:
    """
    Resolve a comma-separated root selector into named roots.

    Invalid segments are dropped; when nothing survives (or nothing was asked
    for) the single default root pointing at `base` is returned.
    """
    roots: list[RootEntry] = []
    for part in split_csv(folder_param):
        res = resolve_within(base, part)
        if not res.ok or res.data is None:
            logger.debug("Dropping root selector %r: %s", part, res.code)
            continue
        roots.append(RootEntry(path=res.data, name=part))

    if not roots:
        try:
            default_path = base.resolve(strict=False)
        except (OSError, RuntimeError):
            default_path = base
        roots.append(RootEntry(path=default_path, name=DEFAULT_ROOT_NAME))
    return roots
