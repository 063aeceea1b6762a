"""
Shared types, enums, and constants.
"""
from enum import Enum
from typing import Final, Literal

# File type classifications, one per filter group
FileKind = Literal["model3d", "image", "video", "audio", "code", "document", "unknown"]


# Error codes
class ErrorCode(str, Enum):
    """Standardized error codes (string enum)."""

    # Client / validation
    INVALID_INPUT = "INVALID_INPUT"
    OUTSIDE_ROOT = "OUTSIDE_ROOT"
    DIR_NOT_FOUND = "DIR_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"

    # Server / infrastructure
    CONFIG_ERROR = "CONFIG_ERROR"
    SCAN_FAILED = "SCAN_FAILED"


class NodeKind(str, Enum):
    """Kind of a scanned filesystem entry; the value is the wire `type` field."""

    FILE = "file"
    DIRECTORY = "dir"


class OutputFormat(str, Enum):
    """Response formats of the browse endpoint."""

    HTML = "html"
    JSON = "json"
    XML = "xml"
    CSV = "csv"

    @property
    def is_api(self) -> bool:
        return self is not OutputFormat.HTML


# Named extension groups offered as one-click type filters (display order).
FILTER_GROUPS: Final[dict[str, tuple[str, ...]]] = {
    "3D": ("glb", "gltf", "obj", "fbx"),
    "Images": ("jpg", "jpeg", "png", "gif", "webp", "svg"),
    "Video": ("mp4", "webm", "mov", "mkv"),
    "Audio": ("mp3", "wav", "ogg"),
    "Code": ("js", "ts", "jsx", "tsx", "html", "css", "scss", "sass", "json", "xml"),
    "Documents": ("pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt", "md"),
}

_GROUP_KINDS: Final[dict[str, FileKind]] = {
    "3D": "model3d",
    "Images": "image",
    "Video": "video",
    "Audio": "audio",
    "Code": "code",
    "Documents": "document",
}

# File extensions by kind (lowercase, no leading dot)
EXTENSIONS: Final[dict[FileKind, frozenset[str]]] = {
    _GROUP_KINDS[group]: frozenset(exts) for group, exts in FILTER_GROUPS.items()
}


def classify_file(extension: str) -> FileKind:
    """
    Classify a file by its extension.

    Args:
        extension: Extension without the leading dot (case-insensitive)

    Returns:
        File kind (model3d, image, video, audio, code, document, unknown)
    """
    ext = str(extension or "").lower().lstrip(".")
    for kind, exts in EXTENSIONS.items():
        if ext in exts:
            return kind
    return "unknown"
