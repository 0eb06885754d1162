from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_SECRET = "change-this-to-a-secure-random-string"
MIN_SECRET_LENGTH = 32

SslMode = Literal["disable", "prefer", "require", "verify-ca", "verify-full"]


class Settings(BaseSettings):
    """Service configuration, read from the environment and an optional ``.env``."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "ProjectHub API"
    app_env: Literal["development", "testing", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"  # ignored when debug is on
    enable_openapi: bool = True

    database_url: str
    database_pool_size: int = Field(default=5, ge=1)
    database_max_overflow: int = Field(default=10, ge=0)
    database_ssl_mode: SslMode = "prefer"
    database_echo: bool = False
    # Create missing tables at startup; production schemas are managed elsewhere
    database_auto_create: bool = False

    # e.g. "REPEATABLE READ" on PostgreSQL so the dashboard reads one snapshot.
    # Unset keeps the driver default.
    dashboard_isolation_level: str | None = None
    recent_projects_limit: int = Field(default=5, ge=1)

    # Tokens are issued by the auth provider; this service only verifies them
    jwt_secret_key: SecretStr
    jwt_algorithm: str = "HS256"

    mutation_rate_limit: str = "60/minute"  # slowapi notation

    cors_origins: list[str] = ["http://localhost:3000"]
    metrics_api_key: str | None = None  # /metrics requires X-Metrics-Key when set
    shutdown_grace_period: int = 30  # seconds to drain in-flight requests

    @field_validator("jwt_secret_key")
    @classmethod
    def check_secret_strength(cls, v: SecretStr) -> SecretStr:
        secret = v.get_secret_value()
        if secret == PLACEHOLDER_SECRET:
            raise ValueError(
                "JWT_SECRET_KEY must be changed from the example value. "
                "Generate one with: openssl rand -hex 32"
            )
        if len(secret) < MIN_SECRET_LENGTH:
            raise ValueError(f"JWT_SECRET_KEY must be at least {MIN_SECRET_LENGTH} characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def reject_wildcard_origin(cls, v: list[str]) -> list[str]:
        # Credentials are allowed on CORS requests, which browsers refuse with "*"
        if "*" in v:
            raise ValueError(
                "CORS_ORIGINS may not contain the '*' wildcard; list origins explicitly"
            )
        return v

    @field_validator("dashboard_isolation_level")
    @classmethod
    def normalize_isolation_level(cls, v: str | None) -> str | None:
        return (v or "").strip().upper() or None

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_testing(self) -> bool:
        return self.app_env == "testing"


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
