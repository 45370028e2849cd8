"""
Unit tests for the Google Cloud Storage module.
"""

from unittest.mock import MagicMock, patch

import pytest
from google.api_core.exceptions import Forbidden

from uploadhandler.core.models import UploadedFile
from uploadhandler.exceptions import UploadConfigError, UploadFileExistsError
from uploadhandler.storage.gcs_storage import GcsStorage

GCS_CONFIG = {
    "projectId": "demo-project",
    "bucket": "assets",
    "acl": "publicRead",
    "path": "docs",
    "keyFile": "/secrets/key.json",
    "appendRandom": False,
}


class TestGcsStorage:
    """Test cases for the GcsStorage class."""

    @pytest.fixture
    def gcs(self):
        with patch("uploadhandler.storage.gcs_storage.storage.Client") as mock_client:
            client = MagicMock()
            bucket = MagicMock()
            blob = MagicMock()
            blob.exists.return_value = False
            blob.id = "assets/docs/a.txt/1"
            blob.md5_hash = "abc=="
            blob.generation = 1
            bucket.blob.return_value = blob
            client.bucket.return_value = bucket
            mock_client.from_service_account_json.return_value = client
            yield mock_client, client, bucket, blob

    def _storage(self, **overrides):
        return GcsStorage("documents", {**GCS_CONFIG, **overrides})

    def test_client_configuration(self, gcs):
        mock_client, client, _, _ = gcs
        self._storage()
        mock_client.from_service_account_json.assert_called_once_with(
            "/secrets/key.json", project="demo-project"
        )
        client.bucket.assert_called_once_with("assets")

    def test_missing_key_file(self, gcs):
        config = {k: v for k, v in GCS_CONFIG.items() if k != "keyFile"}
        with pytest.raises(UploadConfigError, match="Missing keyFile from config"):
            GcsStorage("documents", config)

    def test_invalid_acl(self, gcs):
        with pytest.raises(UploadConfigError, match="Invalid ACL option for GCS"):
            self._storage(acl="public-read")

    def test_upload_success(self, gcs):
        _, _, bucket, blob = gcs
        file = UploadedFile.from_bytes(b"content", "a.txt", "text/plain")

        result = self._storage().handle(file)

        bucket.blob.assert_called_once_with("docs/a.txt")
        blob.upload_from_file.assert_called_once()
        kwargs = blob.upload_from_file.call_args.kwargs
        assert kwargs["predefined_acl"] == "publicRead"
        assert kwargs["content_type"] == "text/plain"
        assert kwargs["size"] == len(b"content")
        assert result.was_successful()
        assert result.url == "https://storage.googleapis.com/assets/docs/a.txt"
        assert result.extra["bucket"] == "assets"
        assert result.extra["md5Hash"] == "abc=="
        assert result.extra["generation"] == 1

    def test_local_file_success(self, gcs, source_file):
        _, _, _, blob = gcs
        result = self._storage().handle(source_file)

        blob.upload_from_filename.assert_called_once_with(
            str(source_file), content_type="text/plain", predefined_acl="publicRead"
        )
        assert result.original_name == source_file.name
        assert result.mime_type == "text/plain"

    def test_private_acl_has_no_url(self, gcs):
        result = self._storage(acl="private").handle(
            UploadedFile.from_bytes(b"x", "a.txt")
        )
        assert result.url is None

    def test_overwrite_disabled_existing_blob(self, gcs):
        _, _, _, blob = gcs
        blob.exists.return_value = True

        storage = self._storage(overwrite=False)
        with pytest.raises(UploadFileExistsError, match="File already exists: a.txt"):
            storage.handle(UploadedFile.from_bytes(b"x", "a.txt"))
        blob.upload_from_file.assert_not_called()

    def test_sdk_error_suppressed(self, gcs):
        _, _, _, blob = gcs
        blob.upload_from_file.side_effect = RuntimeError("403 Forbidden")

        result = self._storage(suppressExceptions=True).handle(
            UploadedFile.from_bytes(b"x", "a.txt")
        )

        assert result.was_error()
        assert result.get_error_message() == "403 Forbidden"

    def test_local_file_overwrite_disabled_existing_blob(self, gcs, source_file):
        _, _, bucket, blob = gcs
        blob.exists.return_value = True

        storage = self._storage(overwrite=False)
        with pytest.raises(
            UploadFileExistsError, match=f"File already exists: {source_file.name}"
        ):
            storage.handle(source_file)
        bucket.blob.assert_called_once_with(f"docs/{source_file.name}")
        blob.upload_from_filename.assert_not_called()

    def test_sdk_error_propagates(self, gcs):
        _, _, _, blob = gcs
        blob.upload_from_file.side_effect = Forbidden("403 Forbidden")

        with pytest.raises(Forbidden):
            self._storage().handle(UploadedFile.from_bytes(b"x", "a.txt"))
