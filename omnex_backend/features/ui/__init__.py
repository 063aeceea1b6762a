"""
HTML presentation: display ordering, pagination, theme and page rendering.
"""

from .ordering import Page, natural_key, paginate, sort_for_display
from .page import render_page
from .theme import AccentPalette, Crumb, accent_palette, breadcrumbs, folder_hue

__all__ = [
    "Page",
    "natural_key",
    "paginate",
    "sort_for_display",
    "render_page",
    "AccentPalette",
    "Crumb",
    "accent_palette",
    "breadcrumbs",
    "folder_hue",
]
