"""Pytest configuration for Carpark domain tests."""

from __future__ import annotations

import csv
import io
import os
import sys
import time
from pathlib import Path
from uuid import UUID, uuid4

import httpx
import pytest
import pytest_asyncio

# Add project root to path for imports
project_root = Path(__file__).resolve().parents[3]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Settings are cached on first import; configure the environment before that.
os.environ["CARPARK_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["CARPARK_JWT_SECRET"] = "test-secret"
os.environ["CARPARK_AUTH_DISABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"
os.environ["LOG_LEVEL"] = "WARNING"

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from domains.carpark.core.constants import CSV_COLUMNS  # noqa: E402
from domains.carpark.database.base import Base  # noqa: E402
from domains.carpark import models  # noqa: E402,F401

TEST_JWT_SECRET = "test-secret"


# ============================================================================
# Database
# ============================================================================


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite shared by every connection of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


# ============================================================================
# CSV builders
# ============================================================================


@pytest.fixture
def carpark_row():
    """Factory fixture for one raw CSV record."""

    def _create(car_park_no: str = "ACB", **overrides: str) -> dict[str, str]:
        row = {
            "car_park_no": car_park_no,
            "address": f"BLK {car_park_no} ALBERT CENTRE BASEMENT CAR PARK",
            "x_coord": "30314.7936",
            "y_coord": "31490.4942",
            "short_term_parking": "WHOLE DAY",
            "free_parking": "NO",
            "night_parking": "YES",
            "car_park_decks": "1",
            "gantry_height": "1.80",
            "car_park_basement": "Y",
            "car_park_type": "BASEMENT CAR PARK",
            "type_of_parking_system": "ELECTRONIC PARKING",
        }
        row.update(overrides)
        return row

    return _create


@pytest.fixture
def build_csv():
    """Factory fixture rendering records as CSV text with a header row."""

    def _build(rows: list[dict[str, str]], columns=CSV_COLUMNS) -> str:
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=list(columns), extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
        return buffer.getvalue()

    return _build


@pytest.fixture
def numbered_rows(carpark_row):
    """Factory fixture for ``count`` records with distinct car park codes."""

    def _create(count: int, **overrides: str) -> list[dict[str, str]]:
        return [carpark_row(f"CP{index:04d}", **overrides) for index in range(1, count + 1)]

    return _create


# ============================================================================
# HTTP
# ============================================================================


@pytest.fixture
def app(session_factory):
    """Application whose request sessions use the test database."""
    from domains.carpark.database.session import get_db_session
    from domains.carpark.main import create_app

    async def _override_get_db_session():
        async with session_factory() as session:
            yield session

    application = create_app()
    application.dependency_overrides[get_db_session] = _override_get_db_session
    return application


@pytest_asyncio.fixture
async def client(app) -> httpx.AsyncClient:
    """Async test client bound to the ASGI app."""
    transport = httpx.ASGITransport(app=app)  # type: ignore[arg-type]
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_token():
    """Factory fixture for signed access tokens."""
    from domains._shared.security import encode_access_token

    def _create(user_id: UUID, username: str = "driver", expires_in: int = 3600, **claims) -> str:
        payload = {
            "sub": str(user_id),
            "username": username,
            "exp": int(time.time()) + expires_in,
            **claims,
        }
        return encode_access_token(payload, secret=TEST_JWT_SECRET)

    return _create


@pytest_asyncio.fixture
async def user(session_factory):
    """A persisted user row."""
    async with session_factory() as session:
        account = models.User(id=uuid4(), username="driver")
        session.add(account)
        await session.commit()
        return account


@pytest.fixture
def auth_headers(user, make_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user.id, user.username)}"}
