"""
Unit tests for the upload value objects.
"""

import io
from unittest.mock import MagicMock

import pytest

from uploadhandler.core.models import UploadedFile, UploadedResult, UploadErrorCode
from uploadhandler.exceptions import UploadError


class TestUploadedFile:
    """Test cases for UploadedFile."""

    def test_from_bytes(self):
        file = UploadedFile.from_bytes(b"abc", "a.txt", "text/plain")
        assert file.filename == "a.txt"
        assert file.content_type == "text/plain"
        assert file.get_size() == 3
        assert file.error == UploadErrorCode.OK

    def test_size_measured_from_stream(self):
        stream = io.BytesIO(b"0123456789")
        stream.seek(4)
        file = UploadedFile(stream, "digits.bin")
        assert file.get_size() == 10
        # position is restored
        assert stream.tell() == 4

    def test_move_to_writes_contents(self, tmp_path):
        file = UploadedFile.from_bytes(b"payload", "a.bin")
        file.stream.read()
        target = tmp_path / "a.bin"
        file.move_to(target)
        assert target.read_bytes() == b"payload"

    def test_move_twice_raises(self, tmp_path):
        file = UploadedFile.from_bytes(b"payload", "a.bin")
        file.move_to(tmp_path / "first.bin")
        with pytest.raises(UploadError, match="already been moved"):
            file.move_to(tmp_path / "second.bin")

    def test_from_upload_without_filename_is_no_file(self):
        upload = MagicMock()
        upload.filename = ""
        upload.file = io.BytesIO(b"")
        upload.content_type = None
        upload.size = 0
        file = UploadedFile.from_upload(upload)
        assert file.error == UploadErrorCode.NO_FILE

    def test_from_upload_over_limit_is_form_size(self):
        upload = MagicMock()
        upload.filename = "big.bin"
        upload.file = io.BytesIO(b"x" * 20)
        upload.content_type = "application/octet-stream"
        upload.size = 20
        file = UploadedFile.from_upload(upload, max_bytes=10)
        assert file.error == UploadErrorCode.FORM_SIZE
        assert file.filename == "big.bin"

    def test_error_messages(self):
        assert UploadErrorCode.PARTIAL.message == "File was only partially uploaded"
        assert UploadErrorCode.NO_TMP_DIR.message == "Missing a temporary folder"
        assert UploadErrorCode.INI_SIZE.message == UploadErrorCode.FORM_SIZE.message


class TestUploadedResult:
    """Test cases for UploadedResult."""

    def test_successful_to_dict(self):
        provider = MagicMock()
        result = UploadedResult(
            handler=provider,
            url="https://example.com/a.txt",
            path="docs",
            original_name="a.txt",
            new_name="a-123.txt",
            mime_type="text/plain",
            size=3,
            extra={"etag": "x"},
            success=True,
        )
        assert result.was_successful()
        assert not result.was_error()
        assert result.to_dict() == {
            "url": "https://example.com/a.txt",
            "path": "docs",
            "originalName": "a.txt",
            "newName": "a-123.txt",
            "mimeType": "text/plain",
            "size": 3,
            "extra": {"etag": "x"},
            "success": True,
            "error": None,
        }

    def test_create_error(self):
        provider = MagicMock()
        result = UploadedResult.create_error(provider, RuntimeError("boom"))
        assert result.handler is provider
        assert result.was_error()
        assert result.get_error_message() == "boom"
        assert result.url is None and result.new_name is None
        assert result.to_dict() == {"success": False, "error": "boom"}
