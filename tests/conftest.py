"""Shared pytest fixtures and configuration.

This module provides common fixtures used across all test types.
"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Import models to register them with Base.metadata
import ayra.models  # noqa: F401
from ayra.models.base import Base


@pytest.fixture(scope="function")
def test_database_url(tmp_path: Path) -> str:
    """Provide test database URL.

    Uses file-based SQLite for testing to avoid in-memory connection issues,
    or PostgreSQL if configured.
    """
    db_url = os.getenv("TEST_DATABASE_URL")
    if db_url:
        return db_url
    return f"sqlite+aiosqlite:///{tmp_path}/test_ayra.db"


@pytest.fixture(scope="function")
async def async_db_session(test_database_url: str) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session for testing.

    Creates tables before each test and drops them after.
    """
    engine = create_async_engine(test_database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def seeded_db_session(async_db_session: AsyncSession) -> AsyncSession:
    """Provide a session over a database loaded with the sample data."""
    from ayra.services.seeder import seed_database

    await seed_database(async_db_session)
    await async_db_session.commit()
    return async_db_session


@pytest.fixture(scope="function")
async def api_client(test_database_url: str) -> AsyncGenerator[AsyncClient, None]:
    """Provide an HTTP client bound to the app over a fresh seeded database.

    The ASGI transport does not run the lifespan, so the database is
    initialized here the same way startup does it.
    """
    from ayra.api.main import app
    from ayra.services.database import initialize_database, shutdown_database
    from ayra.services.seeder import seed_database

    db_manager = initialize_database(test_database_url)
    await db_manager.initialize_async()
    await db_manager.create_tables()
    async with db_manager.get_async_session() as session:
        await seed_database(session)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    await db_manager.drop_tables()
    await shutdown_database()


@pytest.fixture(scope="function")
async def auth_headers(api_client: AsyncClient) -> dict[str, str]:
    """Bearer headers for the seeded user joao@example.com."""
    response = await api_client.post(
        "/auth/login",
        json={"email": "joao@example.com", "password": "senha123"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
