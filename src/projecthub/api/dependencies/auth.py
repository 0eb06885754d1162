"""Authentication dependencies."""

from typing import Annotated

from fastapi import Depends, Header, Request

from src.projecthub.core.exceptions import UnauthorizedError
from src.projecthub.core.logging import bind_user_context
from src.projecthub.core.security import Principal, principal_from_authorization


async def get_current_principal(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> Principal:
    """Verify the bearer token and return the caller.

    Declared ahead of the session dependencies in every route so an
    unauthenticated request never opens a database session.
    """
    principal = principal_from_authorization(authorization, request.app.state.settings)
    if principal is None:
        raise UnauthorizedError()

    bind_user_context(principal.user_id, principal.email)
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
