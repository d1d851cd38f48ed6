"""HTTP translation of ingestion errors."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from domains.carpark.core.constants import INGESTION_ERROR_LOG_KEY
from domains.carpark.core.exceptions import (
    ConstraintError,
    IngestionError,
    ParseError,
    RowValidationError,
    StreamError,
    TransactionError,
)

logger = logging.getLogger(__name__)

INGESTION_ERROR_STATUS: dict[type[IngestionError], int] = {
    StreamError: status.HTTP_400_BAD_REQUEST,
    ParseError: status.HTTP_400_BAD_REQUEST,
    RowValidationError: status.HTTP_400_BAD_REQUEST,
    ConstraintError: status.HTTP_409_CONFLICT,
    TransactionError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def translate_ingestion_error(exc: IngestionError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in INGESTION_ERROR_STATUS:
            return INGESTION_ERROR_STATUS[error_type]
    return status.HTTP_400_BAD_REQUEST


async def ingestion_error_handler(request: Request, exc: IngestionError) -> JSONResponse:
    status_code = translate_ingestion_error(exc)
    logger.warning(
        "Ingestion request failed",
        extra={
            "path": request.url.path,
            "status_code": status_code,
            INGESTION_ERROR_LOG_KEY: exc,
        },
    )
    detail = "CSV ingestion failed" if status_code >= 500 else str(exc)
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(IngestionError, ingestion_error_handler)
