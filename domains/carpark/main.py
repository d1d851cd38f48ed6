"""Carpark API Application

FastAPI application setup, middleware and startup data load.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from domains.carpark.api.errors import register_exception_handlers
from domains.carpark.api.v1.routers import api_router, health_router
from domains.carpark.core.config import get_settings
from domains.carpark.core.constants import SERVICE_VERSION
from domains.carpark.core.logging import configure_logging
from domains.carpark.database import Base, async_session_factory, engine
from domains.carpark.services.ingestion import ingest_with_session_factory

configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and load the initial dataset before serving."""
    settings = get_settings()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.initial_csv_path is not None:
        report = await ingest_with_session_factory(
            settings.initial_csv_path,
            async_session_factory,
            batch_size=settings.ingest_batch_size,
        )
        logger.info(
            "Initial carpark dataset loaded",
            extra={"source": str(settings.initial_csv_path), "rows": report.rows},
        )
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Car park facility search, favorites and CSV data loading",
        version=SERVICE_VERSION,
        docs_url="/api/v1/carparks/docs",
        openapi_url="/api/v1/carparks/openapi.json",
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
