"""
Value objects passed into and returned from storage providers.

``UploadedFile`` wraps an incoming file independent of the web framework that
received it; ``UploadedResult`` is the normalized outcome of one transfer.
"""

from __future__ import annotations

import io
import os
import shutil
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO

from uploadhandler.exceptions import UploadError

if TYPE_CHECKING:
    from starlette.datastructures import UploadFile

    from uploadhandler.storage import StorageProvider


class UploadErrorCode(IntEnum):
    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES.get(self, "Unknown upload error")


_ERROR_MESSAGES = {
    UploadErrorCode.INI_SIZE: "File too large",
    UploadErrorCode.FORM_SIZE: "File too large",
    UploadErrorCode.PARTIAL: "File was only partially uploaded",
    UploadErrorCode.NO_FILE: "No file was uploaded",
    UploadErrorCode.NO_TMP_DIR: "Missing a temporary folder",
    UploadErrorCode.CANT_WRITE: "Failed to write file to disk",
    UploadErrorCode.EXTENSION: "A server extension stopped the file upload",
}


class UploadedFile:
    """A file received from a client, not yet stored anywhere."""

    def __init__(
        self,
        stream: BinaryIO,
        filename: str | None,
        content_type: str | None = None,
        size: int | None = None,
        error: UploadErrorCode = UploadErrorCode.OK,
    ) -> None:
        self.stream = stream
        self.filename = filename
        self.content_type = content_type
        self.size = size
        self.error = UploadErrorCode(error)
        self._moved = False

    @classmethod
    def from_bytes(
        cls, data: bytes, filename: str, content_type: str | None = None
    ) -> UploadedFile:
        return cls(io.BytesIO(data), filename, content_type, len(data))

    @classmethod
    def from_upload(
        cls, upload: UploadFile, max_bytes: int | None = None
    ) -> UploadedFile:
        """Wrap a Starlette/FastAPI ``UploadFile``."""
        error = UploadErrorCode.OK
        if not upload.filename:
            error = UploadErrorCode.NO_FILE
        uploaded = cls(
            upload.file,
            upload.filename or None,
            upload.content_type,
            getattr(upload, "size", None),
            error,
        )
        if (
            max_bytes is not None
            and error == UploadErrorCode.OK
            and uploaded.get_size() > max_bytes
        ):
            uploaded.error = UploadErrorCode.FORM_SIZE
        return uploaded

    def get_size(self) -> int:
        if self.size is None:
            position = self.stream.tell()
            self.stream.seek(0, os.SEEK_END)
            self.size = self.stream.tell()
            self.stream.seek(position)
        return self.size

    def get_stream(self) -> BinaryIO:
        if self._moved:
            raise UploadError("Uploaded file has already been moved")
        if self.stream.seekable():
            self.stream.seek(0)
        return self.stream

    def move_to(self, target_path: str | Path) -> None:
        """Write the uploaded contents to ``target_path``."""
        stream = self.get_stream()
        with open(target_path, "wb") as f:
            shutil.copyfileobj(stream, f)
        self._moved = True

    def __repr__(self) -> str:
        return (
            f"UploadedFile(filename={self.filename!r}, "
            f"content_type={self.content_type!r}, error={self.error.name})"
        )


@dataclass
class UploadedResult:
    """Outcome of a single upload."""

    handler: StorageProvider
    url: str | None = None
    path: str | None = None
    original_name: str | None = None
    new_name: str | None = None
    mime_type: str | None = None
    size: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    success: bool = False
    error_message: str | None = None

    @classmethod
    def create_error(
        cls, provider: StorageProvider, exc: BaseException
    ) -> UploadedResult:
        return cls(handler=provider, success=False, error_message=str(exc))

    def was_successful(self) -> bool:
        return self.success

    def was_error(self) -> bool:
        return not self.was_successful()

    def get_error_message(self) -> str | None:
        return self.error_message

    def to_dict(self) -> dict[str, Any]:
        if not self.was_successful():
            return {"success": False, "error": self.error_message}

        return {
            "url": self.url,
            "path": self.path,
            "originalName": self.original_name,
            "newName": self.new_name,
            "mimeType": self.mime_type,
            "size": self.size,
            "extra": self.extra,
            "success": self.success,
            "error": self.error_message,
        }
