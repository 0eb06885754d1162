"""Domain errors and the exception handlers that render them.

Every failure leaves the API as ``{"success": false, "error": ..., "details"?: ...}``
with the request_id attached.
"""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.projecthub.core.logging import get_logger

logger = get_logger(__name__)


class ProjectHubError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationFailedError(ProjectHubError):
    """Malformed or out-of-range input. Raised before any store mutation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class NotFoundError(ProjectHubError):
    """The operation target does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource"):
        self.resource = resource
        super().__init__(f"{resource} not found")


class UnauthorizedError(ProjectHubError):
    """Missing or invalid bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class StorageError(ProjectHubError):
    """The underlying store failed. The message never includes driver details."""

    default_message = "Storage failure"


def error_payload(error: str, details: Any = None) -> dict[str, Any]:
    """Build the error envelope."""
    content: dict[str, Any] = {
        "success": False,
        "error": error,
        "request_id": correlation_id.get(),
    }
    if details is not None:
        content["details"] = details
    return content


def flatten_validation_errors(errors: list[dict[str, Any]]) -> dict[str, list[str]]:
    """Group pydantic error messages by field name.

    ``loc`` entries look like ``("body", "budget")`` or ``("query", "page")``;
    the source prefix is dropped. Model-level errors are keyed ``_root``.
    """
    fields: dict[str, list[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if not isinstance(part, int)]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        key = ".".join(loc) or "_root"
        fields.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return fields


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that render the error envelope."""

    @app.exception_handler(ProjectHubError)
    async def projecthub_error_handler(request: Request, exc: ProjectHubError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_payload(
                ValidationFailedError.default_message,
                flatten_validation_errors(list(exc.errors())),
            ),
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        logger.warning("rate_limit_exceeded", path=request.url.path, limit=str(exc.detail))
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=error_payload("Rate limit exceeded", {"limit": str(exc.detail)}),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_payload("Internal server error"),
        )
