"""Error handling module for SocialHub API."""

from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    InvalidArgumentError,
    InvalidCursorError,
    NotFoundError,
    UnauthorizedError,
    ServiceUnavailableError,
    StorageUnavailableError,
    create_problem_response
)
from .handlers import register_exception_handlers

__all__ = [
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "InvalidArgumentError",
    "InvalidCursorError",
    "NotFoundError",
    "UnauthorizedError",
    "ServiceUnavailableError",
    "StorageUnavailableError",
    "create_problem_response",
    "register_exception_handlers"
]
