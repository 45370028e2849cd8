"""
Pydantic models for handler definitions and upload responses.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class HandlerDefinition(BaseModel):
    """One named handler: which provider to use and how to configure it."""

    provider: str = Field(..., description="Provider name or dotted class path")
    config: dict[str, Any] = Field(
        default_factory=dict, description="Provider-specific configuration"
    )

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Provider is required")
        return v


class UploadHandlerSettings(BaseModel):
    """Top-level configuration accepted by ``UploadHandler.create``."""

    handlers: dict[str, HandlerDefinition] = Field(default_factory=dict)
    options: dict[str, Any] = Field(default_factory=dict)


class UploadResponse(BaseModel):
    """Results of one upload request, each one as produced by ``to_dict()``."""

    handler: str
    results: list[dict[str, Any]]


class HandlerSummary(BaseModel):
    name: str
    provider: str
