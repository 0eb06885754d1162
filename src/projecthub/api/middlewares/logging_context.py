"""Per-request log context and the request_completed access line."""

import time

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.projecthub.core.logging import bind_request_context, clear_request_context, get_logger

ACCESS_LOGGER = "projecthub.access"


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind request_id, method and path for the request, then log its outcome."""
    clear_request_context()
    bind_request_context(correlation_id.get(), method=request.method, path=request.url.path)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        get_logger(ACCESS_LOGGER).info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response
    finally:
        clear_request_context()
