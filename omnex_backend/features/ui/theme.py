"""
Accent colour helpers and breadcrumbs for the HTML view.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from ...config import ACCENT_RE, DEFAULT_ACCENT


@dataclass(frozen=True)
class AccentPalette:
    hex: str
    glow: str
    border: str
    selection: str


@dataclass(frozen=True)
class Crumb:
    name: str
    path: str


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    if not ACCENT_RE.match(str(value or "")):
        value = DEFAULT_ACCENT
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def accent_palette(accent: str) -> AccentPalette:
    """CSS colours derived from a 6-hex accent; invalid input uses the default accent."""
    r, g, b = hex_to_rgb(accent)
    hex_value = f"{r:02x}{g:02x}{b:02x}"
    return AccentPalette(
        hex=hex_value,
        glow=f"rgba({r}, {g}, {b}, 0.15)",
        border=f"rgba({r}, {g}, {b}, 0.4)",
        selection=f"rgba({r}, {g}, {b}, 0.3)",
    )


def folder_hue(name: str) -> str:
    """Stable 6-hex colour for a folder name (first six digits of its MD5)."""
    return hashlib.md5(str(name).encode("utf-8")).hexdigest()[:6]


def breadcrumbs(current_path: str, *, virtual_root: bool = False) -> list[Crumb]:
    if virtual_root or not current_path:
        return []
    crumbs: list[Crumb] = []
    acc: list[str] = []
    for part in str(current_path).split("/"):
        if not part:
            continue
        acc.append(part)
        crumbs.append(Crumb(name=part, path="/".join(acc)))
    return crumbs
