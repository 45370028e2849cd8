"""
uploadhandler: upload files to local disk, AWS S3 or Google Cloud Storage
through named, pre-configured handlers.
"""

from uploadhandler.core.models import UploadedFile, UploadedResult, UploadErrorCode
from uploadhandler.exceptions import (
    UploadConfigError,
    UploadError,
    UploadFileExistsError,
    UploadHandlerError,
)
from uploadhandler.handler import UploadHandler, get_upload_handler
from uploadhandler.storage import StorageProvider, create_storage_provider

__all__ = [
    "StorageProvider",
    "UploadConfigError",
    "UploadError",
    "UploadErrorCode",
    "UploadFileExistsError",
    "UploadHandler",
    "UploadHandlerError",
    "UploadedFile",
    "UploadedResult",
    "create_storage_provider",
    "get_upload_handler",
]
