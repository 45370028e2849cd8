"""
Storage module for uploadhandler.

Provides the abstract provider interface shared by every storage backend and a
factory resolving provider names to implementations. Backends: local disk,
AWS S3 and Google Cloud Storage.
"""

from __future__ import annotations

import importlib
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from loguru import logger

from uploadhandler.core.models import UploadedFile, UploadedResult, UploadErrorCode
from uploadhandler.exceptions import UploadConfigError, UploadError
from uploadhandler.storage.paths import randomize_file_name

DEFAULT_OPTIONS: dict[str, Any] = {
    "appendRandom": True,
    "overwrite": True,
    "suppressExceptions": False,
}

FileInput = UploadedFile | str | os.PathLike


class StorageProvider(ABC):
    """Abstract base class for storage providers.

    A provider is built once per named handler. Construction merges the
    library-wide ``options`` into the handler ``config``, checks the required
    keys, fills optional defaults and then calls :meth:`setup_complete`.
    """

    def __init__(
        self,
        handler_name: str,
        config: Mapping[str, Any],
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self.handler_name = handler_name
        self.config: dict[str, Any] = {}
        self.setup(dict(config), dict(options or {}))

    def setup(self, config: dict[str, Any], options: dict[str, Any]) -> None:
        for key, value in options.items():
            config.setdefault(key, value)

        for key in self.get_required_config_keys():
            if key not in config:
                raise UploadConfigError(
                    f'Missing {key} from config for handler "{self.handler_name}"'
                )

        for key, value in self.get_merged_optional_config_keys().items():
            config.setdefault(key, value)

        self.config = config
        self.setup_complete()

    @abstractmethod
    def get_required_config_keys(self) -> list[str]:
        """Keys that must be present in the handler config."""

    def get_optional_config_keys(self) -> dict[str, Any]:
        """Key to default value for optional config keys."""
        return {}

    def get_merged_optional_config_keys(self) -> dict[str, Any]:
        return {**DEFAULT_OPTIONS, **self.get_optional_config_keys()}

    @abstractmethod
    def setup_complete(self) -> None:
        """Called after the config has been validated."""

    @abstractmethod
    def process_file_from_upload(self, file: UploadedFile) -> UploadedResult:
        """Store a file received from a client."""

    @abstractmethod
    def process_file_from_local(self, file_path: Path) -> UploadedResult:
        """Store a file already present on the local filesystem."""

    def handle(
        self, file_or_files: FileInput | Sequence[FileInput]
    ) -> UploadedResult | list[UploadedResult]:
        """Upload one file, or each file of a list in order."""
        if isinstance(file_or_files, list | tuple):
            return [self._handle_one(item) for item in file_or_files]
        return self._handle_one(file_or_files)

    def _handle_one(self, item: FileInput) -> UploadedResult:
        if not isinstance(item, UploadedFile | str | os.PathLike):
            raise TypeError(f"Cannot upload object of type {type(item).__name__}")

        try:
            if isinstance(item, UploadedFile):
                result = self.process_file_from_upload(self.check_file(item))
            else:
                file_path = Path(item)
                if not file_path.is_file():
                    raise FileNotFoundError(f"File does not exist: {file_path}")
                result = self.process_file_from_local(file_path)
        except Exception as e:
            if self.suppress_exceptions():
                logger.warning(f"{self.handler_name}: upload failed: {e}")
                return UploadedResult.create_error(self, e)
            raise

        logger.info(
            f"{self.handler_name}: stored {result.original_name} as {result.new_name}"
        )
        return result

    def check_file(self, file: UploadedFile) -> UploadedFile:
        if file.error != UploadErrorCode.OK:
            raise UploadError(
                f"{self.handler_name} : {file.error.message}", int(file.error)
            )
        return file

    def get_config(self, key: str, default: Any = None, required: bool = True) -> Any:
        if key not in self.config:
            if not required:
                return default
            raise UploadConfigError(
                f'Missing {key} from config for handler "{self.handler_name}"'
            )
        return self.config[key]

    def get_file_name(self, file: UploadedFile | Path) -> str:
        if isinstance(file, UploadedFile):
            file_name = Path(file.filename or "").name
        else:
            file_name = file.name
        if file_name in ("", ".", ".."):
            raise UploadError("File name was null")

        if self.config.get("appendRandom") is True:
            file_name = randomize_file_name(file_name)
        return file_name

    def overwrite_allowed(self) -> bool:
        return self.get_config("overwrite", True, required=False) is not False

    def suppress_exceptions(self) -> bool:
        return bool(self.config.get("suppressExceptions", False))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(handler_name={self.handler_name!r})"


PROVIDERS: dict[str, str] = {
    "local": "uploadhandler.storage.local_storage:LocalStorage",
    "s3": "uploadhandler.storage.s3_storage:S3Storage",
    "gcs": "uploadhandler.storage.gcs_storage:GcsStorage",
}


def resolve_provider_class(provider: str) -> type[StorageProvider]:
    """Resolve a provider name or dotted class path to a provider class.

    Raises:
        UploadConfigError: If the provider cannot be found
    """
    target = PROVIDERS.get(provider, provider)
    if ":" in target:
        module_name, _, class_name = target.partition(":")
    else:
        module_name, _, class_name = target.rpartition(".")
    if not module_name or not class_name:
        raise UploadConfigError("Provider handler not found")

    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as e:
        if provider in PROVIDERS:
            raise
        raise UploadConfigError("Provider handler not found") from e

    provider_class = getattr(module, class_name, None)
    if not isinstance(provider_class, type) or not issubclass(
        provider_class, StorageProvider
    ):
        raise UploadConfigError("Provider handler not found")
    return provider_class


def create_storage_provider(
    provider: str,
    handler_name: str,
    config: Mapping[str, Any],
    options: Mapping[str, Any] | None = None,
) -> StorageProvider:
    """Create a storage provider for a named handler."""
    provider_class = resolve_provider_class(provider)
    logger.debug(f"Creating {provider_class.__name__} for handler '{handler_name}'")
    return provider_class(handler_name, config, options)
