"""Tests for /health, shutdown draining, rate limiting and the error envelope."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncEngine

from src.projecthub.core.config import get_settings
from src.projecthub.core.rate_limit import configure_limiter, limiter
from src.projecthub.core.shutdown import request_tracker
from src.projecthub.main import create_app

pytestmark = pytest.mark.integration

APP_SECRET = "app-specific-secret-" + "z" * 20


class TestHealth:
    async def test_healthy(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "healthy"
        assert body["cached"] is False

    async def test_second_call_is_cached(self, client: AsyncClient):
        await client.get("/health")

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["cached"] is True
        assert "cache_age_seconds" in response.json()

    async def test_cache_clear_forces_fresh_check(self, app: FastAPI, client: AsyncClient):
        await client.get("/health")
        app.state.health_cache.clear()

        response = await client.get("/health")

        assert response.json()["cached"] is False

    async def test_draining_during_shutdown(self, client: AsyncClient):
        await request_tracker.start_shutdown()

        response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "draining"

    async def test_no_auth_required(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code != 401


class TestErrorRequestId:
    async def test_unknown_route_includes_request_id(self, client: AsyncClient):
        response = await client.get("/api/v1/nonexistent-endpoint")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Not Found"
        assert isinstance(body["request_id"], str)
        assert body["request_id"]

    async def test_unauthorized_includes_request_id(self, client: AsyncClient):
        response = await client.get("/api/v1/projects")

        assert response.status_code == 401
        assert response.json()["request_id"] == response.headers["X-Request-ID"]

    async def test_validation_error_includes_request_id(self, auth_client: AsyncClient):
        response = await auth_client.get("/api/v1/projects", params={"page": 0})

        assert response.status_code == 400
        assert response.json()["request_id"]

    async def test_incoming_request_id_is_propagated(self, client: AsyncClient):
        request_id = "0f8fad5b-d9cb-469f-a165-70867728950e"

        response = await client.get(
            "/api/v1/nonexistent-endpoint", headers={"X-Request-ID": request_id}
        )

        assert response.headers["X-Request-ID"] == request_id
        assert response.json()["request_id"] == request_id

    async def test_different_requests_have_different_ids(self, client: AsyncClient):
        first = await client.get("/api/v1/nonexistent-endpoint")
        second = await client.get("/api/v1/nonexistent-endpoint")

        assert first.json()["request_id"] != second.json()["request_id"]


@pytest.fixture
async def rate_limited_client(
    engine: AsyncEngine, auth_headers: dict[str, str]
) -> AsyncGenerator[AsyncClient]:
    """Client for an app with the mutation limiter on at one request per minute."""
    settings = get_settings().model_copy(
        update={"app_env": "development", "mutation_rate_limit": "1/minute"}
    )
    app = create_app(settings=settings, engine=engine)
    limiter.reset()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test", headers=auth_headers
    ) as c:
        yield c
    configure_limiter(get_settings())
    limiter.reset()


class TestRateLimit:
    async def test_limited_mutation_uses_error_envelope(self, rate_limited_client: AsyncClient):
        payload = {
            "name": "Limited",
            "status": "ACTIVE",
            "deadline": "2030-06-30",
            "assignedTo": "Sarah Johnson",
            "budget": 100,
        }

        first = await rate_limited_client.post("/api/v1/projects", json=payload)
        second = await rate_limited_client.post("/api/v1/projects", json=payload)

        assert first.status_code == 201
        assert second.status_code == 429
        body = second.json()
        assert body["success"] is False
        assert body["error"] == "Rate limit exceeded"
        assert body["request_id"] == second.headers["X-Request-ID"]

    async def test_reads_are_not_limited(self, rate_limited_client: AsyncClient):
        for _ in range(3):
            response = await rate_limited_client.get("/api/v1/projects")
            assert response.status_code == 200


class TestAppSettingsSecret:
    async def test_tokens_checked_against_app_secret(self, engine: AsyncEngine, make_token):
        settings = get_settings().model_copy(
            update={"jwt_secret_key": SecretStr(APP_SECRET)}
        )
        app = create_app(settings=settings, engine=engine)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            own = await c.get(
                "/api/v1/projects",
                headers={"Authorization": f"Bearer {make_token(secret=APP_SECRET)}"},
            )
            env = await c.get(
                "/api/v1/projects", headers={"Authorization": f"Bearer {make_token()}"}
            )

        assert own.status_code == 200
        assert env.status_code == 401
