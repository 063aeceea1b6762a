"""
Depth-first flattening of a node tree for tabular exports.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import AssetNode


def flatten_tree(nodes: Iterable[AssetNode]) -> list[AssetNode]:
    """Pre-order list of every node, each copied without its `children`."""
    flat: list[AssetNode] = []
    stack: list[AssetNode] = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        flat.append(node.without_children())
        if node.children:
            stack.extend(reversed(node.children))
    return flat


def count_nodes(nodes: Iterable[AssetNode]) -> int:
    total = 0
    for node in nodes:
        total += 1
        if node.children:
            total += count_nodes(node.children)
    return total
