"""Integration test fixtures for database and HTTP client operations.

Every test gets a fresh in-memory SQLite database behind a StaticPool, so
the app, the repositories and the fixtures all see the same data.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.projecthub.core.config import get_settings
from src.projecthub.core.db import (
    build_engine,
    build_session_factory,
    create_tables,
    drop_tables,
)
from src.projecthub.main import create_app
from src.projecthub.repositories import ProjectRepository
from src.projecthub.services import DashboardService, ProjectService


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create a test database engine with the projects table in place."""
    test_engine = build_engine(get_settings())
    await create_tables(test_engine)

    yield test_engine

    await drop_tables(test_engine)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does NOT auto-commit. Tests must call `await session.commit()`
    (or use tests.helpers.persist) to make rows visible to other sessions.
    """
    async with build_session_factory(engine)() as session:
        yield session


@pytest.fixture
def project_repo(db_session: AsyncSession) -> ProjectRepository:
    return ProjectRepository(db_session)


@pytest.fixture
def project_service(project_repo: ProjectRepository, db_session: AsyncSession) -> ProjectService:
    return ProjectService(project_repo, db_session)


@pytest.fixture
def dashboard_service(project_repo: ProjectRepository) -> DashboardService:
    return DashboardService(project_repo)


@pytest.fixture
def app(engine: AsyncEngine) -> FastAPI:
    """Application wired to the test engine."""
    return create_app(engine=engine)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Unauthenticated HTTP client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def auth_client(
    app: FastAPI, auth_headers: dict[str, str]
) -> AsyncGenerator[AsyncClient]:
    """HTTP client carrying a valid bearer token."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=auth_headers,
    ) as c:
        yield c
