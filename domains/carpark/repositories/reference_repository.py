from __future__ import annotations

from typing import ClassVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domains.carpark.database.dialect import upsert_insert
from domains.carpark.models import CarParkType, ParkingSystemType


class ReferenceRepository:
    """Find-or-create access to a lookup table keyed by a unique ``name``."""

    model: ClassVar[type[CarParkType] | type[ParkingSystemType]]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_or_create_id(self, name: str) -> int:
        """Return the id for ``name``, inserting the row when it is absent.

        The insert uses ``ON CONFLICT (name) DO NOTHING``, so a row created
        earlier in the same transaction (or committed by another writer) is
        reused instead of tripping the unique constraint.
        """
        stmt = (
            upsert_insert(self.session, self.model)
            .values(name=name)
            .on_conflict_do_nothing(index_elements=["name"])
        )
        await self.session.execute(stmt)
        result = await self.session.execute(select(self.model.id).where(self.model.name == name))
        return result.scalar_one()

    async def get_by_name(self, name: str):
        result = await self.session.execute(select(self.model).where(self.model.name == name))
        return result.scalar_one_or_none()

    async def list_names(self) -> list[str]:
        result = await self.session.execute(select(self.model.name).order_by(self.model.name))
        return list(result.scalars().all())


class CarParkTypeRepository(ReferenceRepository):
    model = CarParkType


class ParkingSystemTypeRepository(ReferenceRepository):
    model = ParkingSystemType
