"""AWS S3 storage implementation.

Uploads objects with ``put_object`` and reports a public URL for public ACLs.
Works against S3-compatible endpoints (MinIO etc.) through ``endpointUrl``.
"""

from pathlib import Path
from typing import Any, BinaryIO

import boto3
from botocore.exceptions import ClientError
from loguru import logger

from uploadhandler.core.models import UploadedFile, UploadedResult
from uploadhandler.exceptions import (
    UploadConfigError,
    UploadError,
    UploadFileExistsError,
)
from uploadhandler.storage import StorageProvider
from uploadhandler.storage.paths import build_object_key, guess_mime_type

S3_ACL_OPTIONS = (
    "private",
    "public-read",
    "public-read-write",
    "authenticated-read",
    "aws-exec-read",
    "bucket-owner-read",
    "bucket-owner-full-control",
)


class S3Storage(StorageProvider):
    """AWS S3 storage implementation."""

    def setup_complete(self) -> None:
        if self.config["acl"] not in S3_ACL_OPTIONS:
            raise UploadConfigError("Invalid ACL option for S3")

        self.bucket_name: str = self.config["bucket"]
        self.region_name: str = self.config["region"]
        self.endpoint_url: str | None = self.config.get("endpointUrl")

        self.s3_client = boto3.client(
            "s3",
            region_name=self.region_name,
            aws_access_key_id=self.config["accessKey"],
            aws_secret_access_key=self.config["secretKey"],
            endpoint_url=self.endpoint_url,
        )
        logger.debug(
            f"S3 client ready for handler '{self.handler_name}' "
            f"(bucket={self.bucket_name}, region={self.region_name})"
        )

    def get_required_config_keys(self) -> list[str]:
        return ["bucket", "acl", "path", "region", "accessKey", "secretKey"]

    def get_optional_config_keys(self) -> dict[str, Any]:
        return {"appendRandom": True, "endpointUrl": None}

    def process_file_from_upload(self, file: UploadedFile) -> UploadedResult:
        file_name = self.get_file_name(file)
        raw_path = self.config.get("path")
        s3_key = self.get_s3_key(file_name, raw_path)

        return self._put_and_build_result(
            s3_key,
            file.get_stream(),
            name=file.filename or file_name,
            file_name=file_name,
            mime=file.content_type,
            size=file.get_size(),
            raw_path=raw_path,
        )

    def process_file_from_local(self, file_path: Path) -> UploadedResult:
        file_name = self.get_file_name(file_path)
        raw_path = self.config.get("path")
        s3_key = self.get_s3_key(file_name, raw_path)

        with open(file_path, "rb") as f:
            return self._put_and_build_result(
                s3_key,
                f,
                name=file_path.name,
                file_name=file_name,
                mime=guess_mime_type(file_path),
                size=file_path.stat().st_size,
                raw_path=raw_path,
            )

    def get_s3_key(self, file_name: str, raw_path: str | None) -> str:
        s3_key = build_object_key(file_name, raw_path)
        if not self.overwrite_allowed() and self.object_exists(s3_key):
            raise UploadFileExistsError(f"File already exists: {file_name}")
        return s3_key

    def object_exists(self, s3_key: str) -> bool:
        try:
            self.s3_client.head_object(Bucket=self.bucket_name, Key=s3_key)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] in ("404", "NoSuchKey", "NotFound"):
                return False
            raise

    def build_public_url(self, s3_key: str) -> str | None:
        if "public" not in self.config["acl"]:
            return None
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{s3_key}"
        host = f"{self.bucket_name}.s3.{self.region_name}.amazonaws.com"
        return f"https://{host}/{s3_key}"

    def _put_and_build_result(
        self,
        s3_key: str,
        body: BinaryIO,
        *,
        name: str,
        file_name: str,
        mime: str | None,
        size: int,
        raw_path: str | None,
    ) -> UploadedResult:
        params: dict[str, Any] = {
            "Bucket": self.bucket_name,
            "Key": s3_key,
            "Body": body,
            "ACL": self.config["acl"],
            "ContentLength": size,
        }
        if mime:
            params["ContentType"] = mime

        response = self.s3_client.put_object(**params)

        status_code = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if status_code != 200:
            logger.error(f"S3 put_object for {s3_key} returned status {status_code}")
            raise UploadError(f"Failed to upload file: {file_name}")

        return UploadedResult(
            handler=self,
            url=self.build_public_url(s3_key),
            path=raw_path,
            original_name=name,
            new_name=file_name,
            mime_type=mime,
            size=size,
            extra=dict(response),
            success=True,
        )
