from __future__ import annotations

import math
from uuid import UUID

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from domains._shared.security import TokenPayload
from domains.carpark.database.session import get_db_session
from domains.carpark.models import Carpark, User
from domains.carpark.repositories import CarparkRepository, UserRepository
from domains.carpark.schemas import (
    CarparkItem,
    CarparkPage,
    FavoriteAddedResponse,
    FavoriteListResponse,
    UserSummary,
)


class CarparkService:
    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self.session = session
        self.carpark_repo = CarparkRepository(session)
        self.user_repo = UserRepository(session)

    async def list_carparks(
        self,
        *,
        free_parking: bool | None,
        night_parking: bool | None,
        min_height: float | None,
        page: int,
        limit: int,
    ) -> CarparkPage:
        carparks, total = await self.carpark_repo.search(
            free_parking=free_parking,
            night_parking=night_parking,
            min_height=min_height,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return CarparkPage(
            total_items=total,
            total_pages=math.ceil(total / limit),
            current_page=page,
            carparks=[self._to_item(carpark) for carpark in carparks],
        )

    async def add_favorite(self, token: TokenPayload, carpark_id: UUID) -> FavoriteAddedResponse:
        carpark = await self.carpark_repo.get_by_id(carpark_id)
        if carpark is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Carpark not found")
        user = await self._get_user(token.user_id)
        await self.user_repo.add_favorite(user.id, carpark.id)
        await self.session.commit()
        return FavoriteAddedResponse(message="Added to favorites", user=self._to_user(user))

    async def list_favorites(self, token: TokenPayload) -> FavoriteListResponse:
        user = await self._get_user(token.user_id)
        favorites = await self.user_repo.list_favorites(user.id)
        return FavoriteListResponse(
            user=self._to_user(user),
            favorites=[self._to_item(carpark) for carpark in favorites],
        )

    async def _get_user(self, user_id: UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    @staticmethod
    def _to_user(user: User) -> UserSummary:
        return UserSummary(id=user.id, username=user.username)

    @staticmethod
    def _to_item(carpark: Carpark) -> CarparkItem:
        return CarparkItem(
            id=carpark.id,
            car_park_no=carpark.car_park_no,
            address=carpark.address,
            x_coord=carpark.x_coord,
            y_coord=carpark.y_coord,
            short_term_parking=carpark.short_term_parking,
            free_parking=carpark.free_parking,
            night_parking=carpark.night_parking,
            car_park_decks=carpark.car_park_decks,
            gantry_height=carpark.gantry_height,
            car_park_basement=carpark.car_park_basement,
            car_park_type=carpark.car_park_type.name,
            type_of_parking_system=carpark.parking_system_type.name,
        )
