"""Import a car park CSV dataset into the Carpark database."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from domains.carpark.core import get_settings
from domains.carpark.core.constants import INGESTION_ERROR_LOG_KEY
from domains.carpark.core.exceptions import IngestionError
from domains.carpark.core.logging import configure_logging
from domains.carpark.jobs.init_db import create_tables
from domains.carpark.services.ingestion import ingest_with_session_factory

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Import a car park CSV file (insert new, update existing car_park_no)",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--csv-path", type=Path, required=True, help="Path to the CSV file")
    parser.add_argument(
        "--database-url",
        help="Override CARPARK_DATABASE_URL or DATABASE_URL env variables",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=settings.ingest_batch_size,
        help="Rows per upsert batch",
    )
    return parser.parse_args(argv)


async def import_csv(csv_path: Path, database_url: str, batch_size: int) -> int:
    engine = create_async_engine(database_url, echo=False, pool_pre_ping=True)
    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    try:
        await create_tables(engine)
        report = await ingest_with_session_factory(
            csv_path,
            session_factory,
            batch_size=batch_size,
        )
    finally:
        await engine.dispose()
    return report.rows


async def main(argv: list[str] | None = None) -> int:
    configure_logging(json_format=False)
    args = parse_args(argv)
    csv_path = args.csv_path.resolve()
    database_url = args.database_url or get_settings().database_url

    try:
        total_rows = await import_csv(csv_path, database_url, args.batch_size)
    except IngestionError as exc:
        logger.error(
            "Import failed", extra={"csv_path": str(csv_path), INGESTION_ERROR_LOG_KEY: exc}
        )
        return 1

    logger.info("Imported %d carpark rows from %s", total_rows, csv_path)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
