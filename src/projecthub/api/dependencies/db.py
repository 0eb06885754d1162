"""Database session dependencies.

Sessions come from the factory stored on ``app.state`` by ``create_app``.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.api.dependencies.auth import CurrentPrincipal
from src.projecthub.core.db import session_scope


async def get_db_session(
    request: Request, _principal: CurrentPrincipal
) -> AsyncGenerator[AsyncSession]:
    """Per-request session for an authenticated caller."""
    async with session_scope(request.app.state.session_factory) as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_dashboard_session(
    request: Request, _principal: CurrentPrincipal
) -> AsyncGenerator[AsyncSession]:
    """Per-request session for the dashboard read-set.

    Uses ``settings.dashboard_isolation_level`` when configured so all
    aggregate queries read one snapshot.
    """
    settings = request.app.state.settings
    async with session_scope(
        request.app.state.session_factory,
        isolation_level=settings.dashboard_isolation_level,
    ) as session:
        yield session


DashboardDBSession = Annotated[AsyncSession, Depends(get_dashboard_session)]
