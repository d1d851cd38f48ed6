from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CarparkItem(BaseModel):
    id: UUID
    car_park_no: str
    address: str | None
    x_coord: float | None
    y_coord: float | None
    short_term_parking: str | None
    free_parking: str | None
    night_parking: bool | None
    car_park_decks: int | None
    gantry_height: float | None
    car_park_basement: bool | None
    car_park_type: str
    type_of_parking_system: str


class CarparkPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_items: int = Field(alias="totalItems")
    total_pages: int = Field(alias="totalPages")
    current_page: int = Field(alias="currentPage")
    carparks: list[CarparkItem]


class UserSummary(BaseModel):
    id: UUID
    username: str


class FavoriteAddedResponse(BaseModel):
    message: str
    user: UserSummary


class FavoriteListResponse(BaseModel):
    user: UserSummary
    favorites: list[CarparkItem]


class UploadResponse(BaseModel):
    message: str
    rows: int = Field(description="Records inserted or updated by the upload")


class ErrorResponse(BaseModel):
    detail: str
