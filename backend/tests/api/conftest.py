"""API test infrastructure: async httpx client with a fresh climate store."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.services.climate_store import ClimateStore, get_climate_store


@pytest_asyncio.fixture
async def store() -> ClimateStore:
    """In-memory store seeded with the built-in regions."""
    return ClimateStore()


# ---------------------------------------------------------------------------
# FastAPI app with overridden dependencies
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def app(store):
    from app.main import create_app

    application = create_app()
    application.dependency_overrides[get_climate_store] = lambda: store

    yield application

    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
