"""Response security headers.

Every response gets the static header set; responses under ``/api/`` are
additionally marked ``no-store`` because they carry project data.
"""

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.projecthub.core.config import Settings

API_PREFIX = "/api/"

# Swagger UI and ReDoc load inline scripts and assets from jsDelivr
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "img-src 'self' data: cdn.jsdelivr.net; "
    "frame-ancestors 'none'"
)
API_ONLY_CSP = "default-src 'none'; frame-ancestors 'none'"

BASE_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}


def build_security_headers(settings: Settings) -> dict[str, str]:
    """Headers for this deployment. The CSP is relaxed only while docs are served."""
    csp = DOCS_CSP if settings.enable_openapi else API_ONLY_CSP
    return {**BASE_HEADERS, "Content-Security-Policy": csp}


async def security_headers_middleware(
    request: Request, call_next: RequestResponseEndpoint, headers: dict[str, str]
) -> Response:
    response = await call_next(request)
    response.headers.update(headers)
    if request.url.path.startswith(API_PREFIX):
        response.headers["Cache-Control"] = "no-store"
    return response
