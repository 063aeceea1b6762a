"""
Export feature: JSON/XML/CSV serializers.
"""

from .renderers import (
    CONTENT_TYPES,
    CSV_HEADER,
    render_csv,
    render_export,
    render_json,
    render_xml,
)

__all__ = [
    "CONTENT_TYPES",
    "CSV_HEADER",
    "render_csv",
    "render_export",
    "render_json",
    "render_xml",
]
