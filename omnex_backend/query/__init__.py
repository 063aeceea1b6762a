"""
Query-state codec: request parameters <-> QueryState <-> navigation URLs.
"""

from .links import (
    apply_overrides,
    build_api_link,
    build_link,
    build_nav_link,
    build_page_link,
    build_pretty_link,
    parse_pretty_path,
)
from .state import QueryState, decode_query, first_values, parse_accent, parse_format

__all__ = [
    "QueryState",
    "decode_query",
    "first_values",
    "parse_accent",
    "parse_format",
    "apply_overrides",
    "build_link",
    "build_nav_link",
    "build_page_link",
    "build_api_link",
    "parse_pretty_path",
    "build_pretty_link",
]
