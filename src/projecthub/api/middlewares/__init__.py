"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.projecthub.core.config import Settings

from .logging_context import logging_context_middleware
from .request_tracking import request_tracking_middleware
from .security_headers import build_security_headers, security_headers_middleware

__all__ = [
    "setup_middlewares",
    "build_security_headers",
    "logging_context_middleware",
    "request_tracking_middleware",
    "security_headers_middleware",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Install middlewares. Starlette runs the last one added first.

    Resulting order, outermost first: correlation id, CORS, security
    headers, logging context, request tracking.
    """

    @app.middleware("http")
    async def _request_tracking(request, call_next):  # type: ignore[no-untyped-def]
        return await request_tracking_middleware(request, call_next)

    @app.middleware("http")
    async def _logging_context(request, call_next):  # type: ignore[no-untyped-def]
        return await logging_context_middleware(request, call_next)

    headers = build_security_headers(settings)

    @app.middleware("http")
    async def _security_headers(request, call_next):  # type: ignore[no-untyped-def]
        return await security_headers_middleware(request, call_next, headers)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(CorrelationIdMiddleware)
