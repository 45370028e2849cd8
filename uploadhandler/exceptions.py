"""
Exception types raised by uploadhandler.
"""


class UploadHandlerError(Exception):
    """Base class for upload handler errors."""

    def __init__(self, message: str, code: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class UploadConfigError(UploadHandlerError):
    """A handler or provider is misconfigured."""


class UploadError(UploadHandlerError):
    """A file could not be received or transferred."""


class UploadFileExistsError(UploadError):
    """The destination already exists and overwriting is disabled."""
