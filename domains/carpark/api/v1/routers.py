from fastapi import APIRouter

from domains.carpark.api.v1.endpoints import carparks, health

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(carparks.router)

health_router = APIRouter()
health_router.include_router(health.router)

__all__ = ["api_router", "health_router"]
