from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domains.carpark.database.dialect import upsert_insert
from domains.carpark.models import Carpark, User, UserFavoriteCarpark


class UserRepository:
    """User lookups and favorite car park bookkeeping."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self.session.get(User, user_id)

    async def add_favorite(self, user_id: UUID, carpark_id: UUID) -> None:
        stmt = (
            upsert_insert(self.session, UserFavoriteCarpark)
            .values(user_id=user_id, carpark_id=carpark_id)
            .on_conflict_do_nothing(index_elements=["user_id", "carpark_id"])
        )
        await self.session.execute(stmt)

    async def list_favorites(self, user_id: UUID) -> list[Carpark]:
        result = await self.session.execute(
            select(Carpark)
            .join(UserFavoriteCarpark, UserFavoriteCarpark.carpark_id == Carpark.id)
            .where(UserFavoriteCarpark.user_id == user_id)
            .order_by(UserFavoriteCarpark.id)
        )
        return list(result.scalars().all())
