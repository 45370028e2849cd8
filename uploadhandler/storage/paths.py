"""
Helpers for building destination names, object keys and public URLs.
"""

from __future__ import annotations

import mimetypes
import os
import uuid
from pathlib import Path
from typing import Any

DEFAULT_MIME_TYPE = "application/octet-stream"


def unique_token() -> str:
    return uuid.uuid4().hex


def randomize_file_name(file_name: str, token: str | None = None) -> str:
    """Insert a unique token after the first dot-separated segment.

    ``photo.tar.gz`` becomes ``photo-<token>.tar.gz``.
    """
    token = token or unique_token()
    base, dot, rest = file_name.partition(".")
    return f"{base}-{token}{dot}{rest}"


def build_object_key(file_name: str, raw_path: str | None) -> str:
    """Join a configured prefix and a file name into an object key."""
    if raw_path is None:
        return file_name
    prefix = str(raw_path).strip("/")
    if not prefix:
        return file_name
    return f"{prefix}/{file_name}"


def build_local_path(file_name: str, raw_path: str | Path | None) -> Path:
    if raw_path is None:
        return Path(file_name)
    return Path(raw_path) / file_name


def path_info(path: str | Path) -> dict[str, Any]:
    """Describe a filesystem path as dirname/basename/extension/filename."""
    p = Path(path)
    info: dict[str, Any] = {
        "dirname": str(p.parent),
        "basename": p.name,
        "filename": p.stem,
    }
    if p.suffix:
        info["extension"] = p.suffix.lstrip(".")
    return info


def guess_mime_type(file_path: str | os.PathLike[str]) -> str:
    mime, _ = mimetypes.guess_type(str(file_path))
    return mime or DEFAULT_MIME_TYPE
