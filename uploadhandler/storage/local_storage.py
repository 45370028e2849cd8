"""
Local filesystem storage implementation.

Stores uploads in a configured directory on the local disk.
"""

import shutil
from pathlib import Path
from typing import Any

from loguru import logger

from uploadhandler.core.models import UploadedFile, UploadedResult
from uploadhandler.exceptions import UploadConfigError, UploadFileExistsError
from uploadhandler.storage import StorageProvider
from uploadhandler.storage.paths import build_local_path, guess_mime_type, path_info


class LocalStorage(StorageProvider):
    """Local filesystem storage implementation."""

    def setup_complete(self) -> None:
        if not Path(self.config["path"]).is_dir():
            raise UploadConfigError("Path does not exist")

    def get_required_config_keys(self) -> list[str]:
        return ["path"]

    def get_optional_config_keys(self) -> dict[str, Any]:
        return {"appendRandom": True}

    def process_file_from_upload(self, file: UploadedFile) -> UploadedResult:
        file_name = self.get_file_name(file)
        raw_path = self.config["path"]
        destination = self._establish_path(file_name, raw_path)

        file.move_to(destination)

        return UploadedResult(
            handler=self,
            url=None,
            path=str(raw_path),
            original_name=file.filename,
            new_name=file_name,
            mime_type=file.content_type,
            size=file.get_size(),
            extra=path_info(destination),
            success=True,
        )

    def process_file_from_local(self, file_path: Path) -> UploadedResult:
        file_name = self.get_file_name(file_path)
        raw_path = self.config["path"]
        destination = self._establish_path(file_name, raw_path)

        try:
            shutil.copyfile(file_path, destination)
        except shutil.SameFileError:
            logger.debug(f"File {file_path} is already in correct location")

        return UploadedResult(
            handler=self,
            url=None,
            path=str(raw_path),
            original_name=file_path.name,
            new_name=file_name,
            mime_type=guess_mime_type(file_path),
            size=file_path.stat().st_size,
            extra=path_info(destination),
            success=True,
        )

    def _establish_path(self, file_name: str, raw_path: str | None) -> Path:
        destination = build_local_path(file_name, raw_path)
        if not self.overwrite_allowed() and destination.exists():
            raise UploadFileExistsError(f"File already exists: {file_name}")
        return destination
