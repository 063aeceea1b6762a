"""
Best-effort content-type guessing for scanned files.
"""
import mimetypes
from pathlib import Path

DEFAULT_MIME_TYPE = "application/octet-stream"

# `mimetypes` depends on the host registry (notably on Windows) and misses
# several modern media and 3D formats.
_KNOWN_TYPES = {
    # Images
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".bmp": "image/bmp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".avif": "image/avif",
    # Videos
    ".mp4": "video/mp4",
    ".m4v": "video/x-m4v",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
    ".mkv": "video/x-matroska",
    ".avi": "video/x-msvideo",
    # Audio
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
    # 3D
    ".glb": "model/gltf-binary",
    ".gltf": "model/gltf+json",
    ".obj": "model/obj",
    ".stl": "model/stl",
    ".fbx": DEFAULT_MIME_TYPE,
    # Documents / code
    ".md": "text/markdown",
    ".txt": "text/plain",
    ".json": "application/json",
    ".pdf": "application/pdf",
}


def guess_content_type(path: Path) -> str:
    ext = str(path.suffix or "").lower()
    if ext in _KNOWN_TYPES:
        return _KNOWN_TYPES[ext]
    ct, _ = mimetypes.guess_type(path.name)
    return ct or DEFAULT_MIME_TYPE
