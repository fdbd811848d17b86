"""Bearer API key authentication middleware."""

import logging
from typing import Iterable, Optional
from uuid import UUID

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from .api_key import validate_api_key
from ..errors.problem_details import ProblemDetailException, UnauthorizedError


logger = logging.getLogger(__name__)

DEFAULT_SKIP_PATHS = ("/health", "/ready", "/live", "/", "/docs", "/redoc", "/openapi.json")


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Resolve ``Authorization: Bearer <key>`` to the owning user.

    On success ``request.state.user_id`` and ``request.state.authenticated``
    are set for :data:`~socialhub.auth.dependencies.CurrentUserId`. Failures
    are answered here with a Problem Details response and never reach the
    route: 401 for a missing or unknown key, 503 when the key store is down.
    Skipped paths and CORS preflight requests pass through untouched.
    """

    def __init__(self, app, skip_paths: Optional[Iterable[str]] = None):
        super().__init__(app)
        self.skip_paths = frozenset(skip_paths if skip_paths is not None else DEFAULT_SKIP_PATHS)

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS" or request.url.path in self.skip_paths:
            return await call_next(request)

        try:
            user_id = await self.authenticate(request)
        except ProblemDetailException as e:
            log = logger.warning if isinstance(e, UnauthorizedError) else logger.error
            log(f"Rejected {request.method} {request.url.path}: {e.status} {e.detail}")
            return e.to_response(request)

        request.state.user_id = user_id
        request.state.authenticated = True
        return await call_next(request)

    async def authenticate(self, request: Request) -> UUID:
        """Return the user id owning the presented key.

        Raises:
            UnauthorizedError: If the header is missing, malformed or the key is unknown
            StorageUnavailableError: If keys cannot be looked up
        """
        authorization = request.headers.get("Authorization")
        if not authorization:
            raise UnauthorizedError("Missing Authorization header")

        token = extract_bearer_token(authorization)
        user_id = await validate_api_key(token)
        if user_id is None:
            raise UnauthorizedError("Invalid or expired bearer token")

        logger.debug(f"Authenticated key {token[:8]}... as user {user_id}")
        return user_id


def extract_bearer_token(authorization: str) -> str:
    """Extract the token from an ``Authorization`` header value.

    Raises:
        UnauthorizedError: If the scheme is not Bearer or the token is empty
    """
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer":
        raise UnauthorizedError("Invalid Authorization header format. Expected 'Bearer <token>'")

    token = token.strip()
    if not token:
        raise UnauthorizedError("Empty bearer token")
    return token
