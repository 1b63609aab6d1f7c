"""FastAPI application exposing the import endpoints."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from streamvault.api.routes.import_history import router as import_router
from streamvault.domain.errors import HistoryImportError, StorageError

logger = logging.getLogger(__name__)

app = FastAPI(title="StreamVault")

app.include_router(import_router)


@app.exception_handler(HistoryImportError)
async def history_import_error_handler(_request: Request, exc: HistoryImportError) -> JSONResponse:
    """Map per-file import failures onto client (400) or storage (503) errors."""
    if isinstance(exc, StorageError):
        logger.warning("Storage failure: %s", exc)
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_400_BAD_REQUEST
    return JSONResponse(status_code=code, content={"error": str(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.get("/health")
def health() -> dict[str, str]:
    """Return a simple liveness check."""
    return {"status": "ok"}
