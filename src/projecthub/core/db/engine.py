"""Database engine construction.

The engine is built once per application (see ``create_app``) and passed
to whatever needs it; there is no module-level engine.
"""

import ssl
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from src.projecthub.core.config import Settings


def _get_connect_args(settings: Settings) -> dict[str, Any]:
    """Get driver connection arguments including SSL configuration."""
    if settings.is_sqlite:
        return {"check_same_thread": False}

    connect_args: dict[str, Any] = {}
    ssl_mode = settings.database_ssl_mode
    if ssl_mode != "disable":
        ssl_context = ssl.create_default_context()
        if ssl_mode == "prefer" or ssl_mode == "require":
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
        elif ssl_mode in ("verify-ca", "verify-full"):
            ssl_context.check_hostname = ssl_mode == "verify-full"
            ssl_context.verify_mode = ssl.CERT_REQUIRED
        connect_args["ssl"] = ssl_context

    return connect_args


def build_engine(settings: Settings) -> AsyncEngine:
    """Create an async engine for the configured database.

    SQLite URLs get a StaticPool so an in-memory database survives across
    sessions; everything else gets a sized, pre-pinged pool.
    """
    if settings.is_sqlite:
        return create_async_engine(
            settings.database_url,
            echo=settings.database_echo,
            poolclass=StaticPool,
            connect_args=_get_connect_args(settings),
        )

    return create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        connect_args=_get_connect_args(settings),
    )
