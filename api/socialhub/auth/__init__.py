"""Authentication module for SocialHub API.

This module provides:
- API key management with secure hashing
- Bearer token authentication middleware
- FastAPI dependencies exposing the authenticated user
"""

from .api_key import (
    generate_api_key,
    hash_api_key,
    verify_api_key,
    create_api_key,
    validate_api_key
)

from .middleware import (
    AuthenticationMiddleware,
    extract_bearer_token
)

from .dependencies import (
    get_current_user_id_from_state,
    CurrentUserId,
    security
)

__all__ = [
    # API key management
    "generate_api_key",
    "hash_api_key",
    "verify_api_key",
    "create_api_key",
    "validate_api_key",

    # Middleware
    "AuthenticationMiddleware",
    "extract_bearer_token",

    # Dependencies
    "get_current_user_id_from_state",
    "CurrentUserId",
    "security"
]
