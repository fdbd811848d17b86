"""Problem Details (RFC 9457) responses for SocialHub API."""

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field


PROBLEM_JSON = "application/problem+json"


class ProblemDetail(BaseModel):
    """Problem Details body as defined in RFC 9457.

    Extension members (for example ``allowed`` on an invalid filter value)
    are kept as extra fields.
    """

    type: str = Field(default="about:blank", description="URI reference identifying the problem type")
    title: str = Field(description="Short, human-readable summary of the problem type")
    status: int = Field(description="HTTP status code")
    detail: Optional[str] = Field(default=None, description="Explanation specific to this occurrence")
    instance: Optional[str] = Field(default=None, description="URI reference of this occurrence")

    model_config = ConfigDict(extra="allow")


def create_problem_response(
    status: int,
    title: str,
    detail: Optional[str] = None,
    type_uri: str = "about:blank",
    instance: Optional[str] = None,
    request: Optional[Request] = None,
    **extensions: Any
) -> JSONResponse:
    """Build an ``application/problem+json`` response."""
    if instance is None and request is not None:
        instance = str(request.url.path)

    problem = ProblemDetail(
        type=type_uri,
        title=title,
        status=status,
        detail=detail,
        instance=instance,
        **extensions
    )
    return JSONResponse(
        status_code=status,
        content=problem.model_dump(exclude_none=True),
        headers={"Content-Type": PROBLEM_JSON}
    )


class ProblemDetailException(Exception):
    """Base exception rendered as a Problem Details response.

    Subclasses fix ``status``, ``title`` and ``type_uri`` as class attributes;
    keyword arguments not named here become extension members.
    """

    status: int = 500
    title: str = "Internal Server Error"
    type_uri: str = "about:blank"

    def __init__(
        self,
        detail: Optional[str] = None,
        *,
        status: Optional[int] = None,
        title: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        **extensions: Any
    ):
        if status is not None:
            self.status = status
        if title is not None:
            self.title = title
        if type_uri is not None:
            self.type_uri = type_uri
        self.detail = detail
        self.instance = instance
        self.extensions: Dict[str, Any] = extensions
        super().__init__(detail or self.title)

    def to_problem_detail(self, request: Optional[Request] = None) -> ProblemDetail:
        instance = self.instance
        if instance is None and request is not None:
            instance = str(request.url.path)

        return ProblemDetail(
            type=self.type_uri,
            title=self.title,
            status=self.status,
            detail=self.detail,
            instance=instance,
            **self.extensions
        )

    def to_response(self, request: Optional[Request] = None) -> JSONResponse:
        return create_problem_response(
            status=self.status,
            title=self.title,
            detail=self.detail,
            type_uri=self.type_uri,
            instance=self.instance,
            request=request,
            **self.extensions
        )


class BadRequestError(ProblemDetailException):
    """400 Bad Request error."""

    status = 400
    title = "Bad Request"


class InvalidArgumentError(BadRequestError):
    """A page size, filter value or search text outside its allowed set.

    Never retried; always the caller's fault.
    """

    type_uri = "/problems/invalid-argument"


class InvalidCursorError(InvalidArgumentError):
    """A pagination cursor that cannot be decoded or belongs to another listing."""

    type_uri = "/problems/invalid-cursor"

    def __init__(self, detail: str = "Invalid pagination cursor", **extensions: Any):
        super().__init__(detail, **extensions)


class NotFoundError(ProblemDetailException):
    """404 Not Found error."""

    status = 404
    title = "Not Found"


class UnauthorizedError(ProblemDetailException):
    """401 Unauthorized error."""

    status = 401
    title = "Unauthorized"

    def __init__(self, detail: str = "Authentication required", **extensions: Any):
        super().__init__(detail, **extensions)


class ServiceUnavailableError(ProblemDetailException):
    """503 Service Unavailable error."""

    status = 503
    title = "Service Unavailable"

    def __init__(self, detail: str = "Service temporarily unavailable", **extensions: Any):
        super().__init__(detail, **extensions)


class StorageUnavailableError(ServiceUnavailableError):
    """The backing store could not serve a read (connection, driver error, timeout).

    The detail is fixed so no driver message or connection string reaches
    the client.
    """

    type_uri = "/problems/storage-unavailable"

    def __init__(self, **extensions: Any):
        super().__init__("Storage is temporarily unavailable", **extensions)
