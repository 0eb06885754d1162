"""Table bootstrap for development databases and tests.

Production schemas are managed outside this service.
"""

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel

# Register table models on SQLModel.metadata
from src.projecthub.models import Project  # noqa: F401


async def create_tables(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)


async def drop_tables(engine: AsyncEngine) -> None:
    """Drop all tables. For tests and ``seed --reset``."""
    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.drop_all)
