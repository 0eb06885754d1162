"""Test helper functions for common data creation patterns."""

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.db import session_scope
from src.projecthub.models import Project


async def persist(session: AsyncSession, *projects: Project) -> list[Project]:
    """Insert projects and commit.

    Args:
        session: Database session
        *projects: Unsaved Project instances (e.g. from ProjectFactory.build())

    Returns:
        The same projects, refreshed from the database
    """
    session.add_all(projects)
    await session.commit()
    for project in projects:
        await session.refresh(project)
    return list(projects)


async def persist_via_app(app: FastAPI, *projects: Project) -> list[Project]:
    """Insert projects through the app's own session factory."""
    async with session_scope(app.state.session_factory) as session:
        return await persist(session, *projects)
