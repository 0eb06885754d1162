"""Liveness/readiness probe and Prometheus metrics."""

import secrets
import time
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from src.projecthub.core.config import Settings
from src.projecthub.core.logging import get_logger
from src.projecthub.core.shutdown import request_tracker

logger = get_logger(__name__)

HEALTH_CACHE_TTL = 10.0  # seconds
PROBE_PATHS = ["/health", "/metrics"]


class HealthCache:
    """Remembers the last database check so probes don't hit the pool every time."""

    def __init__(self, ttl: float = HEALTH_CACHE_TTL) -> None:
        self.ttl = ttl
        self.result: dict[str, Any] | None = None
        self.taken_at = 0.0

    def fresh(self, now: float) -> bool:
        return self.result is not None and now - self.taken_at < self.ttl

    def store(self, result: dict[str, Any], now: float) -> None:
        self.result = result
        self.taken_at = now

    def clear(self) -> None:
        self.result = None
        self.taken_at = 0.0


async def check_database(engine: AsyncEngine) -> str:
    """``"healthy"`` or ``"unhealthy: <ErrorType>"``. Driver messages are not exposed."""
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("health_database_unreachable", error=type(e).__name__)
        return f"unhealthy: {type(e).__name__}"
    return "healthy"


def _respond(body: dict[str, Any]) -> JSONResponse:
    return JSONResponse(content=body, status_code=200 if body["status"] == "healthy" else 503)


def setup_health(app: FastAPI) -> None:
    """Register ``/health`` (unauthenticated, excluded from the OpenAPI schema)."""
    cache = HealthCache()
    app.state.health_cache = cache

    @app.get("/health", include_in_schema=False)
    async def health(request: Request) -> JSONResponse:
        if request_tracker.is_shutting_down:
            return JSONResponse(
                content={
                    "status": "draining",
                    "in_flight_requests": request_tracker.in_flight_count,
                },
                status_code=503,
            )

        now = time.time()
        if cache.fresh(now) and cache.result is not None:
            return _respond(
                {
                    **cache.result,
                    "cached": True,
                    "cache_age_seconds": round(now - cache.taken_at, 1),
                }
            )

        database = await check_database(request.app.state.engine)
        result = {
            "status": "healthy" if database == "healthy" else "unhealthy",
            "database": database,
            "timestamp": now,
        }
        cache.store(result, now)
        return _respond({**result, "cached": False})


def setup_metrics(app: FastAPI, settings: Settings) -> None:
    """Instrument request metrics and expose them on ``/metrics``.

    When ``metrics_api_key`` is configured the endpoint requires a matching
    ``X-Metrics-Key`` header.
    """
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        excluded_handlers=PROBE_PATHS,
    ).instrument(app)

    dependencies = []
    if settings.metrics_api_key:
        expected_key = settings.metrics_api_key
        key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def require_metrics_key(api_key: str | None = Depends(key_header)) -> None:
            if api_key is None or not secrets.compare_digest(api_key, expected_key):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        dependencies.append(Depends(require_metrics_key))

    instrumentator.expose(
        app, endpoint="/metrics", include_in_schema=False, dependencies=dependencies
    )
