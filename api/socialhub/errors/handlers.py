"""Exception handlers rendering every error as Problem Details."""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .problem_details import ProblemDetailException, create_problem_response


logger = logging.getLogger(__name__)

STATUS_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    422: "Unprocessable Entity",
    429: "Too Many Requests",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Timeout"
}


def _request_context(request: Request, **extra: Any) -> Dict[str, Any]:
    return {"path": str(request.url.path), "method": request.method, **extra}


def _summarize_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce pydantic error dicts to JSON-safe location/message/type entries."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", "")
        }
        for error in errors
    ]


def _format_errors(errors: List[Dict[str, Any]]) -> str:
    return "; ".join(f"{' -> '.join(error['loc'])}: {error['msg']}" for error in errors)


async def problem_detail_exception_handler(
    request: Request,
    exc: ProblemDetailException
) -> JSONResponse:
    """Render a ProblemDetailException; server-side failures log at error level."""
    log = logger.error if exc.status >= 500 else logger.info
    log(
        f"{exc.status} {exc.title}: {exc.detail}",
        extra=_request_context(request, status_code=exc.status, problem_type=exc.type_uri)
    )
    return exc.to_response(request)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors (404, 405) and explicit HTTPExceptions."""
    logger.info(
        f"HTTP {exc.status_code}: {exc.detail}",
        extra=_request_context(request, status_code=exc.status_code)
    )

    response = create_problem_response(
        status=exc.status_code,
        title=STATUS_TITLES.get(exc.status_code, "HTTP Error"),
        detail=str(exc.detail) if exc.detail else None,
        request=request
    )
    for key, value in (exc.headers or {}).items():
        response.headers[key] = value
    return response


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Request parameters or body that FastAPI could not parse."""
    errors = _summarize_errors(exc.errors())
    logger.info(
        f"Request validation failed with {len(errors)} errors",
        extra=_request_context(request, errors=errors)
    )

    return create_problem_response(
        status=422,
        title="Validation Error",
        detail="Validation failed: " + _format_errors(errors),
        request=request,
        validation_errors=errors
    )


async def pydantic_validation_exception_handler(
    request: Request,
    exc: ValidationError
) -> JSONResponse:
    errors = _summarize_errors(exc.errors())
    logger.info(
        f"Data validation failed with {len(errors)} errors",
        extra=_request_context(request, errors=errors)
    )

    return create_problem_response(
        status=400,
        title="Validation Error",
        detail="Data validation failed: " + _format_errors(errors),
        request=request,
        validation_errors=errors
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, return a 500 without internals."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra=_request_context(request, exception_type=type(exc).__name__),
        exc_info=exc
    )

    return create_problem_response(
        status=500,
        title="Internal Server Error",
        detail="An unexpected error occurred",
        request=request
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    handlers = [
        (ProblemDetailException, problem_detail_exception_handler),
        # Also covers fastapi.HTTPException, a subclass
        (StarletteHTTPException, http_exception_handler),
        (RequestValidationError, validation_exception_handler),
        (ValidationError, pydantic_validation_exception_handler),
        (Exception, general_exception_handler),
    ]
    for exc_class, handler in handlers:
        app.add_exception_handler(exc_class, handler)
