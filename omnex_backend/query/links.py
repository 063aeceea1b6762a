"""
QueryState -> URLs.

All builders are pure: they read the state's raw parameters and apply a
sparse set of overrides where None deletes a key and any other value replaces
it. Keys are emitted in sorted order, so the same overrides always give the
same URL regardless of how they were ordered.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from urllib.parse import quote, urlencode

from omnex_shared import OutputFormat
from .state import (
    PARAM_COLOR,
    PARAM_FOLDER,
    PARAM_FORMAT,
    PARAM_PAGE,
    PARAM_SHOW_ALL,
    PARAM_TYPE,
    PARAM_VIEW,
    QueryState,
)

Params = Mapping[str, str] | Iterable[tuple[str, str]]

# Pretty-path form: /<folders>/¬<view>¬/+<type>+/!<showAll>!
_PRETTY_DELIMITERS: dict[str, str] = {PARAM_TYPE: "+", PARAM_VIEW: "¬", PARAM_SHOW_ALL: "!"}
_PRETTY_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (key, re.compile(rf"{re.escape(d)}([^{re.escape(d)}]+){re.escape(d)}")) for key, d in _PRETTY_DELIMITERS.items()
)
_PRETTY_BUILD_ORDER = (PARAM_VIEW, PARAM_TYPE, PARAM_SHOW_ALL)
_PRETTY_KEYS = frozenset({PARAM_FOLDER, PARAM_VIEW, PARAM_TYPE, PARAM_SHOW_ALL})


def apply_overrides(params: Params, overrides: Mapping[str, str | None]) -> dict[str, str]:
    merged = dict(params.items() if isinstance(params, Mapping) else params)
    for key, value in overrides.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = str(value)
    return merged


def build_link(params: Params, overrides: Mapping[str, str | None] | None = None, *, base: str = "") -> str:
    """Render `params` with `overrides` applied as `<base>?<sorted query>`."""
    merged = apply_overrides(params, overrides or {})
    return f"{base}?{urlencode(sorted(merged.items()))}"


def build_nav_link(
    state: QueryState,
    *,
    view: str | None = None,
    type_: str | None = None,
    color: str | None = None,
    base: str = "",
) -> str:
    """
    Link for in-UI navigation.

    Drops `format` and `page`. An empty `view` or `type_` removes that
    parameter; None leaves it as it is.
    """
    overrides: dict[str, str | None] = {PARAM_FORMAT: None, PARAM_PAGE: None}
    if view is not None:
        overrides[PARAM_VIEW] = view or None
    if type_ is not None:
        overrides[PARAM_TYPE] = type_ or None
    if color is not None:
        overrides[PARAM_COLOR] = color
    return build_link(state.params, overrides, base=base)


def build_page_link(state: QueryState, page: int, *, base: str = "") -> str:
    return build_link(state.params, {PARAM_FORMAT: None, PARAM_PAGE: str(max(1, int(page)))}, base=base)


def build_api_link(state: QueryState, fmt: OutputFormat, *, endpoint: str) -> str:
    return build_link(state.params, {PARAM_FORMAT: fmt.value}, base=endpoint)


def parse_pretty_path(tail: str) -> dict[str, str]:
    """
    Decode the pretty-path form into request parameters.

    Marker segments are extracted first; what remains, trimmed of slashes,
    is the folder selector.
    """
    params: dict[str, str] = {}
    rest = str(tail or "")
    for key, pattern in _PRETTY_PATTERNS:
        match = pattern.search(rest)
        if match:
            params[key] = match.group(1)
            rest = pattern.sub("", rest)
    folder = rest.strip("/")
    if folder:
        params[PARAM_FOLDER] = folder
    return params


def build_pretty_link(
    state: QueryState,
    overrides: Mapping[str, str | None] | None = None,
    *,
    base: str,
) -> str:
    """Inverse of `parse_pretty_path`; non-path parameters stay in the query string."""
    merged = apply_overrides(state.params, overrides or {})
    segments: list[str] = []
    folder = merged.get(PARAM_FOLDER, "").strip("/")
    if folder:
        segments.append(quote(folder, safe="/,"))
    for key in _PRETTY_BUILD_ORDER:
        value = merged.get(key, "")
        if value:
            delim = _PRETTY_DELIMITERS[key]
            segments.append(quote(delim + value + delim, safe="/,"))
    url = base.rstrip("/") + "/" + "/".join(segments)
    rest = sorted((k, v) for k, v in merged.items() if k not in _PRETTY_KEYS)
    if rest:
        url += f"?{urlencode(rest)}"
    return url
