from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from src.projecthub.api.middlewares import setup_middlewares
from src.projecthub.api.v1.router import api_router
from src.projecthub.core.config import Settings, get_settings
from src.projecthub.core.db import build_engine, build_session_factory, create_tables
from src.projecthub.core.exceptions import setup_exception_handlers
from src.projecthub.core.health import setup_health, setup_metrics
from src.projecthub.core.logging import get_logger, setup_logging
from src.projecthub.core.rate_limit import configure_limiter, limiter
from src.projecthub.core.shutdown import request_tracker

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings: Settings = app.state.settings
    engine: AsyncEngine = app.state.engine
    logger.info("app_starting", app_name=settings.app_name, env=settings.app_env)

    if settings.database_auto_create:
        await create_tables(engine)
        logger.info("tables_created")

    yield

    if not await request_tracker.drain(timeout=settings.shutdown_grace_period):
        logger.warning("shutdown_incomplete", in_flight=request_tracker.in_flight_count)

    if app.state.owns_engine:
        await engine.dispose()
    logger.info("shutdown_complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Project CRUD and listing"},
    {"name": "dashboard", "description": "Aggregate statistics and chart data"},
]


def create_app(settings: Settings | None = None, engine: AsyncEngine | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use; defaults to ``get_settings()``.
        engine: Pre-built engine (tests pass their own). When omitted one is
            built from settings and disposed on shutdown.
    """
    settings = settings or get_settings()
    setup_logging(settings.debug, settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Project management dashboard API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    app.state.settings = settings
    app.state.owns_engine = engine is None
    app.state.engine = engine if engine is not None else build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    setup_exception_handlers(app)

    app.state.limiter = limiter
    configure_limiter(settings)

    setup_middlewares(app, settings)

    app.include_router(api_router)
    setup_metrics(app, settings)
    setup_health(app)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn (the `projecthub-api` script)."""
    settings = get_settings()
    uvicorn.run(
        "src.projecthub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_config=None,
    )
