from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile

from domains.carpark.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from domains.carpark.schemas import (
    CarparkPage,
    ErrorResponse,
    FavoriteAddedResponse,
    FavoriteListResponse,
    UploadResponse,
)
from domains.carpark.security import TokenPayload, access_token_dependency
from domains.carpark.services import CarparkService, CarparkUploadService

router = APIRouter(prefix="/carparks", tags=["carparks"])


@router.get("", response_model=CarparkPage, summary="Get filtered list of carparks")
async def list_carparks(
    free_parking: Optional[bool] = Query(None, alias="freeParking"),
    night_parking: Optional[bool] = Query(None, alias="nightParking"),
    min_height: Optional[float] = Query(
        None,
        alias="minHeight",
        description="Minimum gantry height in meters",
    ),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    _: TokenPayload = Depends(access_token_dependency),
    service: CarparkService = Depends(CarparkService),
):
    return await service.list_carparks(
        free_parking=free_parking,
        night_parking=night_parking,
        min_height=min_height,
        page=page,
        limit=limit,
    )


@router.get(
    "/favorites",
    response_model=FavoriteListResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get authenticated user's favorite carparks",
)
async def list_favorites(
    token: TokenPayload = Depends(access_token_dependency),
    service: CarparkService = Depends(CarparkService),
):
    return await service.list_favorites(token)


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
    },
    summary="Upload a CSV file to insert or update carpark data",
)
async def upload_carparks(
    file: Optional[UploadFile] = File(None, description="CSV file containing carpark data"),
    _: TokenPayload = Depends(access_token_dependency),
    service: CarparkUploadService = Depends(CarparkUploadService),
):
    return await service.ingest_upload(file)


@router.post(
    "/{carpark_id}/favorite",
    response_model=FavoriteAddedResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Add carpark to authenticated user's favorites",
)
async def add_favorite(
    carpark_id: UUID,
    token: TokenPayload = Depends(access_token_dependency),
    service: CarparkService = Depends(CarparkService),
):
    return await service.add_favorite(token, carpark_id)
