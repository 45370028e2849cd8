"""Google Cloud Storage implementation.

Authenticates with a service account key file and uploads blobs with a
predefined ACL.
"""

from pathlib import Path
from typing import Any

from google.cloud import storage
from loguru import logger

from uploadhandler.core.models import UploadedFile, UploadedResult
from uploadhandler.exceptions import UploadConfigError, UploadFileExistsError
from uploadhandler.storage import StorageProvider
from uploadhandler.storage.paths import build_object_key, guess_mime_type

GCS_ACL_OPTIONS = (
    "authenticatedRead",
    "bucketOwnerFullControl",
    "bucketOwnerRead",
    "private",
    "projectPrivate",
    "publicRead",
)

GCS_PUBLIC_HOST = "https://storage.googleapis.com"

# blob attribute -> key reported in the result's extra metadata
BLOB_INFO_FIELDS = {
    "id": "id",
    "name": "name",
    "size": "size",
    "content_type": "contentType",
    "md5_hash": "md5Hash",
    "crc32c": "crc32c",
    "etag": "etag",
    "generation": "generation",
    "media_link": "mediaLink",
    "self_link": "selfLink",
    "time_created": "timeCreated",
    "updated": "updated",
}


class GcsStorage(StorageProvider):
    """Google Cloud Storage implementation."""

    def setup_complete(self) -> None:
        if self.config["acl"] not in GCS_ACL_OPTIONS:
            raise UploadConfigError("Invalid ACL option for GCS")

        self.bucket_name: str = self.config["bucket"]
        self.client = storage.Client.from_service_account_json(
            self.config["keyFile"], project=self.config["projectId"]
        )
        self.bucket = self.client.bucket(self.bucket_name)
        logger.debug(
            f"GCS client ready for handler '{self.handler_name}' "
            f"(project={self.config['projectId']}, bucket={self.bucket_name})"
        )

    def get_required_config_keys(self) -> list[str]:
        return ["projectId", "bucket", "acl", "path", "keyFile"]

    def get_optional_config_keys(self) -> dict[str, Any]:
        return {"appendRandom": True}

    def process_file_from_upload(self, file: UploadedFile) -> UploadedResult:
        file_name = self.get_file_name(file)
        raw_path = self.config.get("path")
        cloud_path, blob = self._new_blob(file_name, raw_path)

        blob.upload_from_file(
            file.get_stream(),
            size=file.get_size(),
            content_type=file.content_type,
            predefined_acl=self.config["acl"],
        )

        return UploadedResult(
            handler=self,
            url=self.build_public_url(cloud_path),
            path=raw_path,
            original_name=file.filename,
            new_name=file_name,
            mime_type=file.content_type,
            size=file.get_size(),
            extra=self.blob_info(blob),
            success=True,
        )

    def process_file_from_local(self, file_path: Path) -> UploadedResult:
        file_name = self.get_file_name(file_path)
        raw_path = self.config.get("path")
        cloud_path, blob = self._new_blob(file_name, raw_path)
        mime = guess_mime_type(file_path)

        blob.upload_from_filename(
            str(file_path),
            content_type=mime,
            predefined_acl=self.config["acl"],
        )

        return UploadedResult(
            handler=self,
            url=self.build_public_url(cloud_path),
            path=raw_path,
            original_name=file_path.name,
            new_name=file_name,
            mime_type=mime,
            size=file_path.stat().st_size,
            extra=self.blob_info(blob),
            success=True,
        )

    def _new_blob(
        self, file_name: str, raw_path: str | None
    ) -> tuple[str, storage.Blob]:
        cloud_path = build_object_key(file_name, raw_path)
        blob = self.bucket.blob(cloud_path)
        if not self.overwrite_allowed() and blob.exists():
            raise UploadFileExistsError(f"File already exists: {file_name}")
        return cloud_path, blob

    def build_public_url(self, cloud_path: str) -> str | None:
        if "public" not in self.config["acl"]:
            return None
        return f"{GCS_PUBLIC_HOST}/{self.bucket_name}/{cloud_path}"

    def blob_info(self, blob: storage.Blob) -> dict[str, Any]:
        info: dict[str, Any] = {"bucket": self.bucket_name}
        for attr, key in BLOB_INFO_FIELDS.items():
            value = getattr(blob, attr, None)
            if value is not None:
                info[key] = value
        return info
