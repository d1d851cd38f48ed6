"""Startup behaviour: schema creation and the initial dataset load."""

import pytest
from sqlalchemy import func, select

from domains.carpark import main as main_module
from domains.carpark.core.config import get_settings
from domains.carpark.core.exceptions import RowValidationError
from domains.carpark.models import Carpark


@pytest.fixture
def startup(monkeypatch, engine, session_factory):
    monkeypatch.setattr(main_module, "engine", engine)
    monkeypatch.setattr(main_module, "async_session_factory", session_factory)
    return main_module.lifespan(main_module.create_app())


async def _count(session_factory) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(Carpark))


@pytest.mark.asyncio
async def test_initial_csv_is_loaded(
    startup, monkeypatch, tmp_path, session_factory, build_csv, numbered_rows
) -> None:
    csv_path = tmp_path / "initial.csv"
    csv_path.write_text(build_csv(numbered_rows(4)), encoding="utf-8")
    monkeypatch.setattr(get_settings(), "initial_csv_path", csv_path)

    async with startup:
        assert await _count(session_factory) == 4


@pytest.mark.asyncio
async def test_no_initial_csv_starts_empty(startup, monkeypatch, session_factory) -> None:
    monkeypatch.setattr(get_settings(), "initial_csv_path", None)

    async with startup:
        assert await _count(session_factory) == 0


@pytest.mark.asyncio
async def test_bad_initial_csv_aborts_startup(
    startup, monkeypatch, tmp_path, session_factory, build_csv, carpark_row
) -> None:
    csv_path = tmp_path / "initial.csv"
    csv_path.write_text(build_csv([carpark_row(y_coord="north")]), encoding="utf-8")
    monkeypatch.setattr(get_settings(), "initial_csv_path", csv_path)

    with pytest.raises(RowValidationError):
        async with startup:
            pass

    assert await _count(session_factory) == 0
