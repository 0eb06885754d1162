"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
# In-memory SQLite; every test builds its own engine and tables
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DATABASE_SSL_MODE", "disable")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Callable
from datetime import timedelta

import pytest
from jose import jwt

from src.projecthub.core.config import get_settings
from src.projecthub.core.shutdown import request_tracker
from src.projecthub.models.base import utc_now

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_request_tracker() -> None:
    """Keep shutdown state from leaking between tests."""
    request_tracker.reset()
    yield
    request_tracker.reset()


# --- Token Fixtures ---


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Build signed access tokens the way the auth provider issues them."""

    def _make_token(
        sub: str | None = "user-123",
        email: str | None = "pm@example.com",
        token_type: str | None = "access",
        expires_in: timedelta = timedelta(minutes=15),
        secret: str | None = None,
    ) -> str:
        settings = get_settings()
        claims: dict = {"exp": utc_now() + expires_in}
        if sub is not None:
            claims["sub"] = sub
        if email is not None:
            claims["email"] = email
        if token_type is not None:
            claims["type"] = token_type
        return jwt.encode(
            claims,
            secret or settings.jwt_secret_key.get_secret_value(),
            algorithm=settings.jwt_algorithm,
        )

    return _make_token


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> dict[str, str]:
    """Authorization header for a valid caller."""
    return {"Authorization": f"Bearer {make_token()}"}
