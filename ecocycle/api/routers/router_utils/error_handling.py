"""
Error handling for API routes.

Categorised EcoCycleErrors are rendered by one application-level handler
as ``{"success": false, "error", "code", "details"}``. The
``handle_service_errors`` decorator logs route failures and turns anything
uncategorised into a 500.

Dependencies: fastapi, ecocycle.core.exceptions
System role: Uniform error responses across routers
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ecocycle.core.exceptions import (
    AuthenticationError,
    EcoCycleError,
    ErrorCode,
    RateLimitExceededError,
)
from ecocycle.models.common import ErrorResponse
from ecocycle.observability.log_utils import log_context, mask_sensitive_data

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def error_response(error: EcoCycleError) -> JSONResponse:
    body = ErrorResponse(
        error=error.message,
        code=error.code.value,
        details=mask_sensitive_data(error.details) or None,
    )
    headers = {}
    if isinstance(error, AuthenticationError):
        headers["WWW-Authenticate"] = "Bearer"
    if isinstance(error, RateLimitExceededError):
        headers["Retry-After"] = "60"
    return JSONResponse(status_code=error.status_code, content=body.model_dump(), headers=headers or None)


async def ecocycle_error_handler(request: Request, exc: EcoCycleError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Request failed",
        extra=log_context(
            path=request.url.path,
            error_code=exc.code.value,
            status_code=exc.status_code,
            error=exc.message,
            details=exc.details,
        ),
    )
    return error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    body = ErrorResponse(
        error=first.get("msg", "Invalid request"),
        code=ErrorCode.VALIDATION_FAILED.value,
        details={"field": field or None, "errors": len(errors)},
    )
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EcoCycleError, ecocycle_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


def handle_service_errors(func: F) -> F:
    """
    Decorator for route handlers.

    Categorised errors and HTTPExceptions propagate to their handlers;
    any other exception is logged with its traceback and becomes a 500.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except (EcoCycleError, HTTPException):
            raise
        except Exception as e:
            logger.exception(
                "Unexpected failure in route",
                extra=log_context(route=func.__name__, error=e, error_type=type(e).__name__),
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            ) from e

    return wrapper  # type: ignore
