"""Health and readiness endpoints."""

from fastapi import APIRouter

from domains.carpark.core.constants import SERVICE_NAME

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Liveness check."""
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/ready")
async def readiness():
    """Readiness check."""
    return {"status": "ready", "service": SERVICE_NAME}
