"""
Serializers for the API output formats.

JSON keeps the nested tree. XML lists only the top-level nodes, without
children, even for a recursive scan. CSV works on the pre-order flattened
sequence.
"""

from __future__ import annotations

import csv
import io
import json
import xml.etree.ElementTree as ET
from collections.abc import Sequence

from omnex_shared import OutputFormat
from ..browser.flatten import flatten_tree
from ..browser.models import AssetNode

CSV_HEADER = ("filename", "extension", "type", "mime", "size", "path", "url")
XML_DECLARATION = '<?xml version="1.0"?>\n'
XML_ROOT_TAG = "root"
XML_ENTRY_TAG = "entry"

CONTENT_TYPES: dict[OutputFormat, str] = {
    OutputFormat.JSON: "application/json",
    OutputFormat.XML: "text/xml",
    OutputFormat.CSV: "text/plain",
}


def render_json(nodes: Sequence[AssetNode]) -> str:
    return json.dumps([node.to_dict() for node in nodes], indent=4, ensure_ascii=False)


def render_xml(nodes: Sequence[AssetNode]) -> str:
    """`<root>` with one `<entry>` per top-level node; text is entity-escaped by ElementTree."""
    root = ET.Element(XML_ROOT_TAG)
    for node in (n.without_children() for n in nodes):
        entry = ET.SubElement(root, XML_ENTRY_TAG)
        for key, value in node.to_dict().items():
            field = ET.SubElement(entry, key)
            field.text = str(value)
    ET.indent(root)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def render_csv(nodes: Sequence[AssetNode]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for node in flatten_tree(nodes):
        writer.writerow(
            (
                node.filename,
                node.extension,
                node.kind.value,
                node.mime_type,
                node.size_formatted,
                node.relative_path,
                node.web_url,
            )
        )
    return buf.getvalue()


_RENDERERS = {
    OutputFormat.JSON: render_json,
    OutputFormat.XML: render_xml,
    OutputFormat.CSV: render_csv,
}


def render_export(fmt: OutputFormat, nodes: Sequence[AssetNode]) -> tuple[str, str]:
    """Return `(body, content_type)` for an API format."""
    if not fmt.is_api:
        raise ValueError(f"Not an export format: {fmt.value}")
    return _RENDERERS[fmt](nodes), CONTENT_TYPES[fmt]
