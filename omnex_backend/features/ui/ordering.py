"""
Display-only ordering and pagination of one listing level.

Nothing here mutates its input: API exports keep the scanner's native order.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..browser.models import AssetNode

T = TypeVar("T")

_DIGITS_RE = re.compile(r"(\d+)")


def natural_key(name: str) -> tuple:
    """Case-insensitive key where digit runs compare numerically ("img2" < "img10")."""
    parts = _DIGITS_RE.split(str(name).casefold())
    return tuple((0, int(part), "") if part.isdigit() else (1, 0, part) for part in parts if part != "")


def sort_for_display(nodes: Sequence[AssetNode]) -> list[AssetNode]:
    """Directories first, then natural filename order. Returns a new list."""
    return sorted(nodes, key=lambda node: (0 if node.is_dir else 1, natural_key(node.filename)))


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(items: Sequence[T], page: int, page_size: int) -> Page[T]:
    """
    Slice one page out of `items`.

    `total_pages` is at least 1 so an empty listing still has a page, and the
    requested page is clamped into `[1, total_pages]`.
    """
    size = max(1, int(page_size))
    total = len(items)
    total_pages = max(1, math.ceil(total / size))
    current = min(max(1, int(page)), total_pages)
    start = (current - 1) * size
    return Page(
        items=list(items[start:start + size]),
        page=current,
        page_size=size,
        total_items=total,
        total_pages=total_pages,
    )
