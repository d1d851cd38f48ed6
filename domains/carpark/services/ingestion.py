"""Car park CSV ingestion.

Loads a CSV dataset into ``carparks`` inside a single transaction:

1. rows are read lazily from the source
2. the car park type and parking system of each row are resolved with
   find-or-create against their lookup tables
3. records are buffered and upserted on ``car_park_no`` every ``batch_size``
   rows, with a final flush for the remainder
4. the transaction commits once at the end; any failure rolls everything back

Concurrent ingestion runs are not coordinated here. Run one import at a time
per database.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Callable
from uuid import uuid4

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from domains.carpark.core.constants import INGEST_BATCH_SIZE, INGESTION_ERROR_LOG_KEY
from domains.carpark.core.exceptions import (
    ConstraintError,
    IngestionError,
    TransactionError,
)
from domains.carpark.database.dialect import UnsupportedDialectError
from domains.carpark.database.transaction import SqlaTransactionManager
from domains.carpark.repositories import (
    CarparkRepository,
    CarParkTypeRepository,
    ParkingSystemTypeRepository,
    ReferenceRepository,
)
from domains.carpark.services.csv_reader import (
    CarparkRow,
    CsvSource,
    open_source,
    read_carpark_rows,
)

logger = logging.getLogger(__name__)


@dataclass
class IngestionReport:
    """Outcome of a committed ingestion run."""

    rows: int = 0
    flushes: list[int] = field(default_factory=list)
    car_park_types: dict[str, int] = field(default_factory=dict)
    parking_system_types: dict[str, int] = field(default_factory=dict)
    duration_ms: float = 0.0


def describe_source(source: CsvSource) -> str:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    return getattr(source, "name", None) or type(source).__name__


class CarparkIngestor:
    """Transactional batch loader for car park CSV data.

    The session's transaction is owned by the ingestor for the whole run; pass
    a session that has no pending work.
    """

    def __init__(self, session: AsyncSession, batch_size: int = INGEST_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self.session = session
        self.batch_size = batch_size
        self.transaction = SqlaTransactionManager(session)
        self.carpark_repo = CarparkRepository(session)
        self.car_park_type_repo = CarParkTypeRepository(session)
        self.parking_system_type_repo = ParkingSystemTypeRepository(session)

    async def ingest(self, source: CsvSource) -> IngestionReport:
        report = IngestionReport()
        log_ctx = {"source": describe_source(source), "batch_size": self.batch_size}
        started = time.perf_counter()
        logger.info("Carpark ingestion started", extra=log_ctx)

        try:
            await self._load(source, report)
            await self.transaction.commit()
        except IngestionError as exc:
            await self._rollback(log_ctx)
            logger.error(
                "Carpark ingestion failed",
                extra={**log_ctx, INGESTION_ERROR_LOG_KEY: exc},
            )
            raise
        except UnsupportedDialectError as exc:
            await self._rollback(log_ctx)
            logger.error("Carpark ingestion cannot run on this database", extra=log_ctx)
            raise TransactionError(str(exc)) from exc
        except IntegrityError as exc:
            await self._rollback(log_ctx)
            logger.error("Carpark ingestion violated a constraint", extra=log_ctx)
            raise ConstraintError(f"Integrity violation: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            await self._rollback(log_ctx)
            logger.exception("Carpark ingestion database failure", extra=log_ctx)
            raise TransactionError(f"Database failure: {exc}") from exc
        except Exception:
            await self._rollback(log_ctx)
            logger.exception("Carpark ingestion aborted", extra=log_ctx)
            raise

        report.duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            "Carpark ingestion committed",
            extra={
                **log_ctx,
                "rows": report.rows,
                "flushes": len(report.flushes),
                "car_park_types": len(report.car_park_types),
                "parking_system_types": len(report.parking_system_types),
                "duration_ms": report.duration_ms,
            },
        )
        return report

    async def _load(self, source: CsvSource, report: IngestionReport) -> None:
        batch: list[dict[str, Any]] = []
        with open_source(source) as stream:
            for row in read_carpark_rows(stream):
                batch.append(await self._to_record(row, report))
                if len(batch) >= self.batch_size:
                    await self._flush(batch, report)
        if batch:
            await self._flush(batch, report)

    async def _to_record(self, row: CarparkRow, report: IngestionReport) -> dict[str, Any]:
        car_park_type_id = await self._resolve(
            self.car_park_type_repo, report.car_park_types, row.car_park_type
        )
        parking_system_type_id = await self._resolve(
            self.parking_system_type_repo,
            report.parking_system_types,
            row.parking_system_type,
        )
        return {
            "id": uuid4(),
            **row.values,
            "car_park_type_id": car_park_type_id,
            "parking_system_type_id": parking_system_type_id,
        }

    @staticmethod
    async def _resolve(repo: ReferenceRepository, resolved: dict[str, int], name: str) -> int:
        if name not in resolved:
            resolved[name] = await repo.get_or_create_id(name)
        return resolved[name]

    async def _flush(self, batch: list[dict[str, Any]], report: IngestionReport) -> None:
        # One statement may not touch a car_park_no twice; the last record wins.
        unique = {record["car_park_no"]: record for record in batch}
        await self.carpark_repo.upsert_many(list(unique.values()))
        report.flushes.append(len(batch))
        report.rows += len(batch)
        logger.debug(
            "Carpark batch upserted",
            extra={
                "batch_no": len(report.flushes),
                "batch_rows": len(batch),
                "distinct_codes": len(unique),
            },
        )
        batch.clear()

    async def _rollback(self, log_ctx: dict[str, Any]) -> None:
        try:
            await self.transaction.rollback()
        except SQLAlchemyError as exc:
            logger.exception("Carpark ingestion rollback failed", extra=log_ctx)
            raise TransactionError(f"Rollback failed: {exc}") from exc


async def ingest(
    source: CsvSource,
    session: AsyncSession,
    *,
    batch_size: int = INGEST_BATCH_SIZE,
) -> IngestionReport:
    """Ingest ``source`` using ``session``; see :class:`CarparkIngestor`."""
    return await CarparkIngestor(session, batch_size=batch_size).ingest(source)


async def ingest_with_session_factory(
    source: CsvSource,
    session_factory: Callable[[], AsyncSession],
    *,
    batch_size: int = INGEST_BATCH_SIZE,
) -> IngestionReport:
    """Open a dedicated session for one ingestion run."""
    async with session_factory() as session:
        return await ingest(source, session, batch_size=batch_size)
