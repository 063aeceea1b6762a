"""
Scan result model.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from omnex_shared import NodeKind

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(size_bytes: int) -> str:
    """
    Human-readable size using base-1024 units and at most two decimals.

    0 -> "0 B", 1023 -> "1023 B", 1024 -> "1 KB", 1572864 -> "1.5 MB".
    """
    if size_bytes <= 0:
        return "0 B"
    value = float(size_bytes)
    i = 0
    while value >= 1024 and i < len(SIZE_UNITS) - 1:
        value /= 1024
        i += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[i]}"


def file_extension(filename: str) -> str:
    """Lowercase text after the last dot, without the dot ("" when there is none)."""
    _, dot, ext = str(filename).rpartition(".")
    return ext.lower() if dot else ""


@dataclass(frozen=True)
class AssetNode:
    """
    One filesystem entry.

    `children` is None when the entry was not expanded (files, and directories
    of a non-recursive scan) and a tuple, possibly empty, when it was.
    """

    filename: str
    kind: NodeKind
    relative_path: str
    web_url: str
    extension: str = ""
    mime_type: str = ""
    size_bytes: int = 0
    children: tuple[AssetNode, ...] | None = None

    def __post_init__(self) -> None:
        if self.kind is NodeKind.FILE and self.children is not None:
            raise ValueError(f"File node cannot have children: {self.relative_path}")

    @classmethod
    def file(
        cls,
        filename: str,
        *,
        relative_path: str,
        web_url: str,
        mime_type: str,
        size_bytes: int,
    ) -> AssetNode:
        return cls(
            filename=filename,
            kind=NodeKind.FILE,
            relative_path=relative_path,
            web_url=web_url,
            extension=file_extension(filename),
            mime_type=mime_type,
            size_bytes=max(0, int(size_bytes)),
        )

    @classmethod
    def directory(
        cls,
        filename: str,
        *,
        relative_path: str,
        web_url: str,
        children: tuple[AssetNode, ...] | None = None,
    ) -> AssetNode:
        return cls(
            filename=filename,
            kind=NodeKind.DIRECTORY,
            relative_path=relative_path,
            web_url=web_url,
            children=children,
        )

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def expanded(self) -> bool:
        return self.children is not None

    @property
    def size_formatted(self) -> str:
        return "" if self.is_dir else format_bytes(self.size_bytes)

    def without_children(self) -> AssetNode:
        if self.children is None:
            return self
        return replace(self, children=None)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "filename": self.filename,
            "extension": self.extension,
            "type": self.kind.value,
            "mime_type": self.mime_type,
            "size_bytes": self.size_bytes,
            "size_formatted": self.size_formatted,
            "relative_path": self.relative_path,
            "web_url": self.web_url,
        }
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data
