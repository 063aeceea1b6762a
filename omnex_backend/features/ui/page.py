"""
HTML browse page.

Renders one listing level: directories first in natural order, paginated,
with sidebar navigation, type-filter groups, breadcrumbs and API links.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from omnex_shared import FILTER_GROUPS, FileKind, OutputFormat, classify_file
from ...query.links import build_api_link, build_nav_link, build_page_link, build_pretty_link
from ..browser.flatten import flatten_tree
from ..browser.models import AssetNode
from .ordering import Page, paginate, sort_for_display
from .theme import AccentPalette, accent_palette, breadcrumbs, folder_hue

if TYPE_CHECKING:
    from ...query.state import QueryState
    from ..browser.service import Listing

APP_NAME = "Omnex"
APP_DESCRIPTION = "The Asset Explorer where everything is accounted for"

_GROUP_ICONS = {
    "3D": "🧊",
    "Images": "🖼️",
    "Video": "🎞️",
    "Audio": "🎵",
    "Code": "💻",
    "Documents": "📄",
}
_API_LABELS = (
    (OutputFormat.JSON, "{JSON}"),
    (OutputFormat.XML, "<XML>"),
    (OutputFormat.CSV, "[CSV]"),
)

_CSS = r"""
* { box-sizing: border-box; }
html, body { height: 100%; }
body {
  margin: 0;
  font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif;
  background: radial-gradient(1100px 600px at 10% -20%, var(--accent_glow), transparent 60%), #171420;
  color: #e7e4f0;
}
::selection { background: var(--selection_bg); }
a { color: inherit; text-decoration: none; }
.app { display: grid; grid-template-columns: 260px 1fr; min-height: 100%; }
.sidebar { padding: 20px 14px; border-right: 1px solid var(--accent_border); background: rgba(255,255,255,0.02); }
.brand .name { display: block; font-weight: 700; font-size: 18px; color: var(--accent); }
.brand .slogan { display: block; font-size: 12px; color: rgba(231,228,240,0.6); margin-bottom: 18px; }
.nav-head { text-transform: uppercase; font-size: 11px; letter-spacing: 0.08em; color: rgba(231,228,240,0.5); margin: 14px 6px 6px; }
.nav-link { display: block; padding: 7px 10px; border-radius: 8px; font-size: 14px; }
.nav-link:hover, .nav-link.active { background: var(--accent_glow); color: var(--accent); }
.folder { border-left: 3px solid var(--folder-hue); }
.content { padding: 20px 24px 60px; }
.top { display: flex; justify-content: space-between; align-items: center; gap: 12px; }
.breadcrumbs { font-size: 14px; }
.breadcrumbs .sep { margin: 0 6px; color: rgba(231,228,240,0.4); }
.btn { display: inline-block; padding: 6px 10px; border: 1px solid var(--accent_border); border-radius: 8px; font-size: 13px; }
.btn:hover { background: var(--accent_glow); }
.grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(150px, 1fr)); gap: 14px; margin-top: 18px; }
.card { position: relative; display: block; padding: 12px; border: 1px solid rgba(255,255,255,0.06); border-radius: 12px; background: rgba(255,255,255,0.03); }
.card:hover { border-color: var(--accent_border); }
.card .icon { height: 96px; display: flex; align-items: center; justify-content: center; font-size: 42px; }
.card img { max-width: 100%; max-height: 96px; object-fit: contain; }
.card .badge { position: absolute; top: 8px; right: 8px; font-size: 10px; text-transform: uppercase; padding: 2px 6px; border-radius: 6px; background: var(--accent_glow); color: var(--accent); }
.card .name { display: block; margin-top: 8px; font-size: 13px; overflow: hidden; text-overflow: ellipsis; white-space: nowrap; }
.card .meta { display: block; font-size: 11px; color: rgba(231,228,240,0.55); }
.empty { margin-top: 28px; color: rgba(231,228,240,0.55); }
.pager { display: flex; gap: 10px; align-items: center; justify-content: center; margin-top: 24px; font-size: 13px; }
"""


def _escape(s: str) -> str:
    return html.escape(s or "", quote=True)


_KIND_ICONS: dict[FileKind, str] = {
    "model3d": "🧊",
    "image": "🖼️",
    "video": "🎞️",
    "audio": "🎵",
    "code": "💻",
    "document": "📄",
    "unknown": "📄",
}


def _display_nodes(state: QueryState, listing: Listing) -> list[AssetNode]:
    # showAll lists every descendant as one flat level.
    nodes = flatten_tree(listing.nodes) if state.recursive and not listing.virtual_root else listing.nodes
    return sort_for_display(nodes)


def _nav_view(node: AssetNode) -> str:
    # A root that is the asset root itself still needs a non-empty view.
    return node.relative_path or "."


def _render_sidebar(state: QueryState, nodes: list[AssetNode], *, endpoint: str, default_accent: str) -> str:
    root_active = " active" if not state.current_path else ""
    folders: list[str] = []
    for node in nodes:
        if not node.is_dir:
            continue
        hue = folder_hue(node.filename)
        href = build_nav_link(state, view=_nav_view(node), color=hue, base=endpoint)
        folders.append(
            f'<a class="nav-link folder" style="--folder-hue: #{hue};" href="{_escape(href)}">📁 {_escape(node.filename)}</a>'
        )

    type_param = state.type_param
    filters = [
        f'<a class="nav-link{" active" if not type_param else ""}" '
        f'href="{_escape(build_nav_link(state, type_="", base=endpoint))}">🗂️ All Files</a>'
    ]
    for group, exts in FILTER_GROUPS.items():
        value = ",".join(exts)
        active = " active" if type_param == value else ""
        href = build_nav_link(state, type_=value, base=endpoint)
        filters.append(f'<a class="nav-link{active}" href="{_escape(href)}">{_GROUP_ICONS[group]} {_escape(group)}</a>')

    root_href = build_nav_link(state, view="", color=default_accent, base=endpoint)
    return f"""
    <aside class="sidebar">
      <div class="brand">
        <span class="name">{_escape(APP_NAME)}</span>
        <span class="slogan">{_escape(APP_DESCRIPTION)}</span>
      </div>
      <nav>
        <div class="nav-head">Navigation</div>
        <a class="nav-link{root_active}" href="{_escape(root_href)}">🏠 Root</a>
      </nav>
      <nav>
        <div class="nav-head">Folders</div>
        {''.join(folders)}
      </nav>
      <nav>
        <div class="nav-head">Filters</div>
        {''.join(filters)}
      </nav>
    </aside>
    """


def _render_card(state: QueryState, node: AssetNode, *, endpoint: str) -> str:
    if node.is_dir:
        href = build_nav_link(state, view=_nav_view(node), color=folder_hue(node.filename), base=endpoint)
        return f"""
        <a class="card" data-name="{_escape(node.filename.lower())}" href="{_escape(href)}">
          <div class="icon">📁</div>
          <span class="name" title="{_escape(node.filename)}">{_escape(node.filename)}</span>
          <span class="meta">Folder</span>
        </a>
        """

    if classify_file(node.extension) == "image":
        icon = f'<img loading="lazy" src="{_escape(node.web_url)}" alt="">'
    else:
        icon = _KIND_ICONS[classify_file(node.extension)]
    badge = f'<div class="badge">{_escape(node.extension)}</div>' if node.extension else ""
    return f"""
    <a class="card" data-name="{_escape(node.filename.lower())}" href="{_escape(node.web_url)}" target="_blank" rel="noopener">
      {badge}
      <div class="icon">{icon}</div>
      <span class="name" title="{_escape(node.filename)}">{_escape(node.filename)}</span>
      <span class="meta">{_escape(node.size_formatted)} · {_escape(node.mime_type)}</span>
    </a>
    """


def _render_pager(state: QueryState, page: Page[AssetNode], *, endpoint: str) -> str:
    if page.total_pages <= 1:
        return ""
    prev_link = (
        f'<a class="btn" href="{_escape(build_page_link(state, page.page - 1, base=endpoint))}">‹ Prev</a>'
        if page.has_prev
        else ""
    )
    next_link = (
        f'<a class="btn" href="{_escape(build_page_link(state, page.page + 1, base=endpoint))}">Next ›</a>'
        if page.has_next
        else ""
    )
    return f"""
    <nav class="pager">
      {prev_link}
      <span>Page {page.page} of {page.total_pages} · {page.total_items} items</span>
      {next_link}
    </nav>
    """


def render_page(
    state: QueryState,
    listing: Listing,
    *,
    endpoint: str,
    default_accent: str,
    pretty_base: str | None = None,
) -> str:
    """
    Render the full browse page for `listing`.

    `endpoint` is the browse URL every navigation, pagination and API link
    points at. With `pretty_base`, a shareable pretty-path permalink of the
    current view is offered as well.
    """
    palette: AccentPalette = accent_palette(state.accent_color)
    nodes = _display_nodes(state, listing)
    page = paginate(nodes, state.page, state.page_size)

    crumbs = [
        f'<span class="sep">/</span><a href="{_escape(build_nav_link(state, view=crumb.path, base=endpoint))}">{_escape(crumb.name)}</a>'
        for crumb in breadcrumbs(listing.current_path, virtual_root=listing.virtual_root)
    ]
    api_links = [
        f'<a class="btn" target="_blank" href="{_escape(build_api_link(state, fmt, endpoint=endpoint))}">{_escape(label)}</a>'
        for fmt, label in _API_LABELS
    ]
    if pretty_base:
        permalink = build_pretty_link(state, {"format": None, "page": None}, base=pretty_base)
        api_links.append(f'<a class="btn" href="{_escape(permalink)}">🔗 Link</a>')
    cards = [_render_card(state, node, endpoint=endpoint) for node in page.items]
    grid = f'<div class="grid">{"".join(cards)}</div>' if cards else '<div class="empty">Nothing here.</div>'
    root_href = build_nav_link(state, view="", color=default_accent, base=endpoint)

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{_escape(APP_NAME)} | {_escape(APP_DESCRIPTION)}</title>
  <style>
    :root {{
      --accent: #{palette.hex};
      --accent_glow: {palette.glow};
      --accent_border: {palette.border};
      --selection_bg: {palette.selection};
    }}
    {_CSS}
  </style>
</head>
<body>
  <div class="app">
    {_render_sidebar(state, nodes, endpoint=endpoint, default_accent=default_accent)}
    <main class="content">
      <header class="top">
        <div class="breadcrumbs"><a href="{_escape(root_href)}">🏠 Root</a>{''.join(crumbs)}</div>
        <div class="api">{' '.join(api_links)}</div>
      </header>
      {grid}
      {_render_pager(state, page, endpoint=endpoint)}
    </main>
  </div>
</body>
</html>
"""
