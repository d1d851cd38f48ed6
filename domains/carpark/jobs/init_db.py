"""Create (or reset) the Carpark service tables."""

from __future__ import annotations

import asyncio
import sys

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from domains.carpark.core import get_settings
from domains.carpark.database.base import Base
from domains.carpark import models  # noqa: F401


def _display_url(database_url: str) -> str:
    return database_url.split("@")[1] if "@" in database_url else database_url


async def create_tables(engine: AsyncEngine, *, reset: bool = False) -> None:
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def init_db(database_url: str | None = None) -> int:
    settings = get_settings()
    url = database_url or settings.database_url
    reset = settings.schema_reset_enabled
    print(f"🔗 Connecting to database: {_display_url(url)}")
    if reset:
        print("⚠️  CARPARK_SCHEMA_RESET_ENABLED is true → dropping existing tables.")
    else:
        print("🛡️  Schema reset guard is active → keeping existing tables.")

    engine = create_async_engine(url, echo=False, pool_pre_ping=True)
    try:
        await create_tables(engine, reset=reset)
        print("✅ Carpark tables initialized successfully!")
        return 0
    except Exception as exc:  # pragma: no cover - diagnostic output
        print(f"❌ Error initializing carpark tables: {exc}")
        import traceback

        traceback.print_exc()
        return 1
    finally:
        await engine.dispose()


def main() -> None:
    """CLI entrypoint."""
    sys.exit(asyncio.run(init_db()))


if __name__ == "__main__":
    main()
