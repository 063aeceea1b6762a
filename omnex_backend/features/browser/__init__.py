"""
Browser feature: filesystem scan into AssetNode trees.
"""

from .flatten import count_nodes, flatten_tree
from .models import AssetNode, file_extension, format_bytes
from .scanner import ScanContext, normalize_extensions, scan_directory
from .service import Listing, build_export_tree, build_listing, root_pseudo_node

__all__ = [
    "AssetNode",
    "format_bytes",
    "file_extension",
    "ScanContext",
    "normalize_extensions",
    "scan_directory",
    "flatten_tree",
    "count_nodes",
    "Listing",
    "build_listing",
    "build_export_tree",
    "root_pseudo_node",
]
