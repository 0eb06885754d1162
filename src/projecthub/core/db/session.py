"""Database session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the per-application session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
    isolation_level: str | None = None,
) -> AsyncGenerator[AsyncSession]:
    """Open a session for one unit of work.

    Args:
        session_factory: Factory bound to the application engine.
        isolation_level: If given, the session's transaction is started at this
            level (e.g. "REPEATABLE READ") so every read in the scope sees one
            snapshot.

    Yields:
        AsyncSession. Uncommitted work is rolled back on exit.
    """
    async with session_factory() as session:
        if isolation_level is not None:
            await session.connection(execution_options={"isolation_level": isolation_level})
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()
