"""
Dispatcher resolving named handlers to storage providers.

Handlers are declared up front (provider name plus provider config) and the
provider behind each one is only built the first time the handler is used.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger
from pydantic import ValidationError

from uploadhandler.configs.config import config as app_config
from uploadhandler.core.models import UploadedResult
from uploadhandler.exceptions import UploadConfigError
from uploadhandler.schemas.upload import HandlerDefinition, UploadHandlerSettings
from uploadhandler.storage import FileInput, StorageProvider, create_storage_provider


class UploadHandler:
    """Resolve a handler name to its provider and upload through it."""

    _instance: UploadHandler | None = None

    def __init__(
        self,
        handlers: Mapping[str, HandlerDefinition] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self.handlers: dict[str, HandlerDefinition] = dict(handlers or {})
        self.options: dict[str, Any] = dict(options or {})
        self._providers: dict[str, StorageProvider] = {}

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> UploadHandler:
        try:
            settings = UploadHandlerSettings.model_validate(dict(data))
        except ValidationError as e:
            raise UploadConfigError(f"Invalid upload handler config: {e}") from e
        return cls(settings.handlers, settings.options)

    @classmethod
    def create(cls, data: Mapping[str, Any]) -> UploadHandler:
        """Build the process-wide handler returned by ``get_upload_handler``."""
        cls._instance = cls.from_config(data)
        logger.info(
            f"Upload handler configured with handlers: {cls._instance.handler_names()}"
        )
        return cls._instance

    @classmethod
    def instance(cls) -> UploadHandler | None:
        return cls._instance

    @classmethod
    def clear_instance(cls) -> None:
        cls._instance = None

    def handler_names(self) -> list[str]:
        return sorted(self.handlers)

    def get_provider(self, handler_name: str) -> StorageProvider:
        """Return the provider for a handler, building it on first use."""
        if handler_name not in self.handlers:
            raise UploadConfigError(f"Handler not found: {handler_name}")

        provider = self._providers.get(handler_name)
        if provider is None:
            definition = self.handlers[handler_name]
            provider = create_storage_provider(
                definition.provider, handler_name, definition.config, self.options
            )
            self._providers[handler_name] = provider
        return provider

    def handle(
        self, handler_name: str, data: FileInput | Sequence[FileInput]
    ) -> UploadedResult | list[UploadedResult]:
        return self.get_provider(handler_name).handle(data)

    def reset(self) -> None:
        """Drop cached provider instances."""
        self._providers.clear()


def get_upload_handler() -> UploadHandler:
    """Return the process-wide handler, creating it from the environment."""
    handler = UploadHandler.instance()
    if handler is None:
        handler = UploadHandler.create(app_config.load_handlers())
    return handler
