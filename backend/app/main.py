from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.api.v1 import climate, performance, yield_calc
from app.core.logging import RequestLoggingMiddleware, setup_logging
from app.services.climate_store import get_climate_store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    setup_logging(json_format=settings.log_json, level=settings.log_level)
    get_climate_store()
    yield


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        description="Photovoltaic yield estimation (Liu & Jordan, NOCT, IEC 61724-1)",
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(climate.router, prefix="/api/v1", tags=["climate"])
    application.include_router(yield_calc.router, prefix="/api/v1", tags=["yield"])
    application.include_router(performance.router, prefix="/api/v1", tags=["performance"])

    @application.get("/health")
    async def health_check() -> dict:
        snap = get_climate_store().snapshot()
        return {
            "status": "ok",
            "services": {"climate_store": {"version": snap.version, "regions": len(snap.records)}},
        }

    return application


app = create_app()
