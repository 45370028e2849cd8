"""
Core value objects for uploadhandler.
"""

from .models import UploadedFile, UploadedResult, UploadErrorCode

__all__ = ["UploadedFile", "UploadedResult", "UploadErrorCode"]
