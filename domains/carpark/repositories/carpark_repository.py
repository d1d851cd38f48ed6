from __future__ import annotations

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domains.carpark.core.constants import NO_FREE_PARKING
from domains.carpark.database.dialect import upsert_insert
from domains.carpark.models import Carpark

# Kept from the first insert so favorites keep pointing at the same row.
PRESERVED_ON_UPSERT = frozenset({"id", "car_park_no", "created_at", "updated_at"})


class CarparkRepository:
    """Data access helpers for car park records."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert_many(self, rows: Sequence[dict[str, Any]]) -> int:
        """Insert ``rows`` in one statement, overwriting rows whose code exists."""
        if not rows:
            return 0
        stmt = upsert_insert(self.session, Carpark).values(list(rows))
        update_columns = {
            column.name: getattr(stmt.excluded, column.name)
            for column in Carpark.__table__.columns
            if column.name not in PRESERVED_ON_UPSERT
        }
        update_columns["updated_at"] = func.now()
        await self.session.execute(
            stmt.on_conflict_do_update(index_elements=["car_park_no"], set_=update_columns)
        )
        return len(rows)

    async def get_by_id(self, carpark_id: UUID) -> Carpark | None:
        result = await self.session.execute(select(Carpark).where(Carpark.id == carpark_id))
        return result.scalar_one_or_none()

    async def get_by_car_park_no(self, car_park_no: str) -> Carpark | None:
        result = await self.session.execute(
            select(Carpark).where(Carpark.car_park_no == car_park_no)
        )
        return result.scalar_one_or_none()

    async def search(
        self,
        *,
        free_parking: bool | None = None,
        night_parking: bool | None = None,
        min_height: float | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Carpark], int]:
        conditions = []
        if free_parking is True:
            conditions.append(Carpark.free_parking != NO_FREE_PARKING)
        elif free_parking is False:
            conditions.append(Carpark.free_parking == NO_FREE_PARKING)
        if night_parking is not None:
            conditions.append(Carpark.night_parking.is_(night_parking))
        if min_height is not None:
            conditions.append(Carpark.gantry_height >= min_height)

        total = await self.session.scalar(select(func.count(Carpark.id)).where(*conditions))
        result = await self.session.execute(
            select(Carpark)
            .where(*conditions)
            .order_by(Carpark.car_park_no)
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), int(total or 0)

    async def count(self) -> int:
        total = await self.session.scalar(select(func.count(Carpark.id)))
        return int(total or 0)
