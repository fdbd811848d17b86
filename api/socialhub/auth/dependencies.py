"""FastAPI dependencies for authentication."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPBearer

from ..errors.problem_details import UnauthorizedError


# HTTP Bearer security scheme for OpenAPI documentation
security = HTTPBearer(
    scheme_name="bearerApiKey",
    description="API key authentication using Bearer token",
    auto_error=False
)


async def get_current_user_id_from_state(
    request: Request,
    _credentials=Depends(security)
) -> UUID:
    """Get the authenticated user id injected by the authentication middleware.

    Raises:
        UnauthorizedError: If no authenticated user id found in request state
    """
    if not getattr(request.state, "authenticated", False):
        raise UnauthorizedError("Request is not authenticated")

    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        raise UnauthorizedError("No authenticated user found in request")

    return user_id


CurrentUserId = Annotated[UUID, Depends(get_current_user_id_from_state)]
