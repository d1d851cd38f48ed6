"""CSV upload handling.

The upload is spooled to ``settings.upload_dir``, ingested, and removed again
whatever the outcome.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from fastapi import Depends, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from domains.carpark.core.config import get_settings
from domains.carpark.core.constants import (
    ALLOWED_UPLOAD_EXTENSIONS,
    ALLOWED_UPLOAD_MIME_TYPES,
)
from domains.carpark.database.session import get_db_session
from domains.carpark.schemas import UploadResponse
from domains.carpark.services.ingestion import ingest

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
NO_FILE_DETAIL = "No file uploaded"
UNSUPPORTED_FILE_DETAIL = f"Only {', '.join(ALLOWED_UPLOAD_EXTENSIONS)} files are supported"


def validate_csv_upload(file: UploadFile | None) -> UploadFile:
    """Reject a missing file part (400) or a non-CSV MIME type or extension (415)."""
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=NO_FILE_DETAIL)
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    extension = Path(file.filename or "").suffix.lower()
    if content_type not in ALLOWED_UPLOAD_MIME_TYPES or extension not in ALLOWED_UPLOAD_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=UNSUPPORTED_FILE_DETAIL,
        )
    return file


class CarparkUploadService:
    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self.session = session
        self.settings = get_settings()

    async def ingest_upload(self, file: UploadFile | None) -> UploadResponse:
        file = validate_csv_upload(file)
        path = await self._spool(file)
        log_ctx = {"upload_filename": file.filename, "spool_path": str(path)}
        try:
            report = await ingest(path, self.session, batch_size=self.settings.ingest_batch_size)
        finally:
            path.unlink(missing_ok=True)
            logger.debug("Removed spooled upload", extra=log_ctx)

        logger.info("CSV upload ingested", extra={**log_ctx, "rows": report.rows})
        return UploadResponse(message="CSV file processed successfully", rows=report.rows)

    async def _spool(self, file: UploadFile) -> Path:
        upload_dir = Path(self.settings.upload_dir)
        upload_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            suffix=".csv",
            dir=upload_dir,
            delete=False,
        ) as spool:
            path = Path(spool.name)
            try:
                while True:
                    chunk = await file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    spool.write(chunk)
            except Exception:
                spool.close()
                path.unlink(missing_ok=True)
                raise
        return path
