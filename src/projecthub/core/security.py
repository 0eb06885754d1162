"""Bearer token verification.

Tokens are issued by the external auth provider; this module only decodes
and checks them.
"""

from dataclasses import dataclass
from typing import Any

from jose import JWTError, jwt

from src.projecthub.core.config import Settings

ACCESS_TOKEN_TYPE = "access"


@dataclass(frozen=True)
class Principal:
    """Authenticated caller extracted from a verified token."""

    user_id: str
    email: str | None = None


def decode_token(token: str, settings: Settings) -> dict[str, Any] | None:
    """Decode and verify a JWT against the app's secret. Returns None if invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
    return payload  # type: ignore[no-any-return]


def principal_from_authorization(
    authorization: str | None, settings: Settings
) -> Principal | None:
    """Resolve an ``Authorization`` header into a Principal, or None."""
    if not authorization or not authorization.startswith("Bearer "):
        return None

    payload = decode_token(authorization[7:], settings)
    if payload is None:
        return None

    token_type = payload.get("type")
    if token_type is not None and token_type != ACCESS_TOKEN_TYPE:
        return None

    subject = payload.get("sub")
    if not subject:
        return None

    email = payload.get("email")
    return Principal(user_id=str(subject), email=email if isinstance(email, str) else None)
