"""
Upload routes exposing the configured handlers over HTTP.

Files posted to ``/api/uploads/{handler_name}`` are wrapped as
``UploadedFile`` objects and passed to the named handler. The provider call is
blocking SDK/filesystem I/O, so it runs in the threadpool.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from loguru import logger

from uploadhandler.configs.config import config
from uploadhandler.core.models import UploadedFile
from uploadhandler.exceptions import (
    UploadConfigError,
    UploadError,
    UploadFileExistsError,
)
from uploadhandler.handler import UploadHandler, get_upload_handler
from uploadhandler.schemas.upload import HandlerSummary, UploadResponse

router = APIRouter(prefix="/api", tags=["upload"])


@router.get("/uploads", response_model=list[HandlerSummary])
async def list_handlers(
    handler: Annotated[UploadHandler, Depends(get_upload_handler)],
) -> list[HandlerSummary]:
    """List configured handlers and the provider behind each."""
    return [
        HandlerSummary(name=name, provider=handler.handlers[name].provider)
        for name in handler.handler_names()
    ]


@router.post("/uploads/{handler_name}", response_model=UploadResponse)
async def upload_files(
    handler_name: str,
    file: Annotated[list[UploadFile], File(...)],
    handler: Annotated[UploadHandler, Depends(get_upload_handler)],
) -> UploadResponse:
    """Upload one or more files through the named handler."""
    if handler_name not in handler.handlers:
        raise HTTPException(status_code=404, detail=f"Unknown handler: {handler_name}")

    uploads = [
        UploadedFile.from_upload(item, max_bytes=config.max_upload_bytes)
        for item in file
    ]

    try:
        results = await run_in_threadpool(handler.handle, handler_name, uploads)
    except UploadFileExistsError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except UploadError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except UploadConfigError as e:
        logger.error(f"Handler '{handler_name}' is misconfigured: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e
    finally:
        for item in file:
            await item.close()

    return UploadResponse.model_validate(
        {"handler": handler_name, "results": [r.to_dict() for r in results]}
    )
