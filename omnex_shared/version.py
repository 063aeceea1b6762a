from __future__ import annotations

import os
import re
from importlib import metadata
from pathlib import Path
from typing import TypedDict


class VersionInfo(TypedDict):
    version: str
    branch: str


_DISTRIBUTION = "omnex-asset-explorer"
_NIGHTLY_KEYWORDS = ("nightly", "dev", "alpha", "experimental")


def _find_pyproject_version() -> str:
    try:
        root = Path(__file__).resolve().parent.parent
        pyproject_path = root / "pyproject.toml"
        if not pyproject_path.exists():
            return ""
        raw = pyproject_path.read_text(encoding="utf-8")
        match = re.search(r'^version\s*=\s*"(.*?)"', raw, flags=re.MULTILINE)
        if match:
            return match.group(1).strip()
    except OSError:
        pass
    return ""


def _find_installed_version() -> str:
    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return ""


def _resolve_branch_from_env() -> str:
    for key in ("OMNEX_BRANCH", "OMNEX_CHANNEL"):
        value = os.environ.get(key)
        if value:
            return value.strip()
    return ""


def _looks_nightly(value: str) -> bool:
    lowered = str(value or "").strip().lower()
    return any(k in lowered for k in _NIGHTLY_KEYWORDS)


def get_version_info() -> VersionInfo:
    version = _find_pyproject_version() or _find_installed_version() or "0.0.0"
    branch = _resolve_branch_from_env() or "main"
    if _looks_nightly(version) or _looks_nightly(branch):
        return {"version": "nightly", "branch": "nightly"}
    return {
        "version": version,
        "branch": branch,
    }
