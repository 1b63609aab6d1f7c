"""Endpoints for importing, reporting and erasing listening history."""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile, status
from starlette.concurrency import run_in_threadpool

from streamvault.api.deps import get_current_user_id, get_import_config, get_unit_of_work_factory
from streamvault.api.schemas import (
    BatchImportBody,
    BatchImportResponse,
    DeletedBody,
    DeletedResponse,
    ErrorResponse,
    ImportResultBody,
    ImportResultResponse,
    ImportStatusBody,
    ImportStatusResponse,
)
from streamvault.app import (
    erase_history,
    history_status,
    import_history_payload,
    import_history_uploads,
)
from streamvault.config import ImportConfig
from streamvault.domain.history_import import UnitOfWorkFactory
from streamvault.domain.model import UploadedFile

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/import", tags=["import"])

UserId = Annotated[UUID, Depends(get_current_user_id)]
UowFactory = Annotated[UnitOfWorkFactory, Depends(get_unit_of_work_factory)]
Settings = Annotated[ImportConfig, Depends(get_import_config)]

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.post("/history", response_model=ImportResultResponse, responses=_ERROR_RESPONSES)
async def import_history(
    request: Request,
    user_id: UserId,
    uow_factory: UowFactory,
    settings: Settings,
    file_name: Annotated[str, Query(min_length=1)] = "history.json",
) -> ImportResultResponse:
    """Import one data file sent as the raw JSON array request body."""
    content = await request.body()
    result = await run_in_threadpool(
        import_history_payload,
        user_id=user_id,
        content=content,
        file_name=file_name,
        unit_of_work_factory=uow_factory,
        config=settings,
    )
    return ImportResultResponse(data=ImportResultBody.from_domain(result))


@router.post("/upload", response_model=BatchImportResponse, responses=_ERROR_RESPONSES)
async def import_upload(
    files: Annotated[list[UploadFile], File(description="Data files or export archives")],
    user_id: UserId,
    uow_factory: UowFactory,
    settings: Settings,
) -> BatchImportResponse:
    """Import several files or archives; failures are reported per file."""
    uploads = [
        UploadedFile(name=upload.filename or f"upload-{index}", content=await upload.read())
        for index, upload in enumerate(files)
    ]
    aggregate = await run_in_threadpool(
        import_history_uploads,
        user_id=user_id,
        uploads=uploads,
        unit_of_work_factory=uow_factory,
        config=settings,
    )
    return BatchImportResponse(data=BatchImportBody.from_domain(aggregate))


@router.get("/status", response_model=ImportStatusResponse, responses=_ERROR_RESPONSES)
def import_status(user_id: UserId, uow_factory: UowFactory) -> ImportStatusResponse:
    """Report whether the user has imported data, and over which period."""
    current = history_status(user_id=user_id, unit_of_work_factory=uow_factory)
    return ImportStatusResponse(data=ImportStatusBody.from_domain(current))


@router.delete("/data", response_model=DeletedResponse, responses=_ERROR_RESPONSES)
def delete_data(
    user_id: UserId,
    uow_factory: UowFactory,
    confirm: Annotated[bool, Query(description="Must be true to proceed")] = False,
) -> DeletedResponse:
    """Irreversibly delete every imported play record of the user."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deleting imported data cannot be undone; repeat with confirm=true",
        )
    deleted = erase_history(user_id=user_id, unit_of_work_factory=uow_factory)
    logger.info("Erased %s play records for user %s", deleted, user_id)
    return DeletedResponse(data=DeletedBody(deleted=deleted))
