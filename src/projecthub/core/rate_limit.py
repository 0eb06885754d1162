"""Rate limiting for mutating endpoints.

Uses slowapi with its in-memory storage, so limits are per process. The
limiter is shared by every app in the process; ``create_app`` points it at
that app's settings through ``configure_limiter``.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.projecthub.core.config import Settings, get_settings

_mutation_limit = get_settings().mutation_rate_limit


def get_rate_limit_key(request: Request) -> str:
    """Key on client IP only. Never on caller-controlled headers."""
    return get_remote_address(request) or "unknown"


def mutation_limit() -> str:
    """Limit string for create/update/delete, read at request time."""
    return _mutation_limit


def configure_limiter(settings: Settings) -> None:
    """Apply ``settings`` to the shared limiter. Disabled under testing."""
    global _mutation_limit
    _mutation_limit = settings.mutation_rate_limit
    limiter.enabled = not settings.is_testing


limiter = Limiter(
    key_func=get_rate_limit_key,
    enabled=not get_settings().is_testing,
    headers_enabled=False,
)
