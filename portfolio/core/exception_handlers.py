"""Exception handlers producing the ``{"error": {...}}`` response envelope.

- AppError subclasses map to 400, 401, 404, 409, 429 or 500 via STATUS_BY_ERROR
- Request schema failures are reported as 400 ``validation_error``
- Anything else becomes an opaque 500; the cause only goes to the log

Every body carries the request id bound by the request-id middleware.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from portfolio.core.errors import (
    AppError,
    AuthenticationAppError,
    ConflictAppError,
    NotFoundAppError,
    PersistenceAppError,
    RateLimitAppError,
    ValidationAppError,
)
from portfolio.core.logging import get_request_id

logger = logging.getLogger(__name__)


STATUS_BY_ERROR: dict[type[AppError], int] = {
    ValidationAppError: 400,
    AuthenticationAppError: 401,
    NotFoundAppError: 404,
    ConflictAppError: 409,
    RateLimitAppError: 429,
    PersistenceAppError: 500,
}


def _status_for(exc: AppError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 400


def _rate_limit_headers(exc: RateLimitAppError) -> dict[str, str]:
    details = exc.details or {}
    if "retry_after" not in details:
        return {}
    return {
        "Retry-After": str(details["retry_after"]),
        "X-RateLimit-Limit": str(details.get("limit", "")),
        "X-RateLimit-Remaining": str(details.get("remaining", 0)),
        "X-RateLimit-Reset": str(details.get("reset_at", "")),
    }


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError as ``{"error": {code, message, request_id, details?}}``.

    ``details`` is only echoed for client errors. Throttling errors also get
    ``Retry-After`` and ``X-RateLimit-*`` headers when their details carry
    the numbers.
    """
    status_code = _status_for(exc)
    request_id = get_request_id()

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "http.app_error",
        extra={
            "error_code": exc.code,
            "status_code": status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )

    error_content: dict[str, Any] = {
        "code": exc.code,
        "message": exc.message,
        "request_id": request_id,
    }

    # Server-side failures never echo their context back to the caller
    if exc.details and status_code < 500:
        error_content["details"] = exc.details

    headers = _rate_limit_headers(exc) if isinstance(exc, RateLimitAppError) else None

    return JSONResponse(
        status_code=status_code,
        content={"error": error_content},
        headers=headers or None,
    )


def _field_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        fields.append(
            {
                "field": ".".join(loc) or None,
                "message": err.get("msg", "Invalid value"),
                "type": err.get("type", "value_error"),
            }
        )
    return fields


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Turn request schema failures into the 400 validation error shape."""
    fields = _field_errors(exc)
    logger.info(
        "http.validation_failed",
        extra={
            "path": request.url.path,
            "invalid_fields": [f["field"] for f in fields],
        },
    )
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "validation_error",
                "message": "Request validation failed",
                "request_id": get_request_id(),
                "details": {"fields": fields},
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort 500. The exception and traceback are logged, never returned."""
    logger.error(
        "http.unhandled_exception",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "Something went wrong on our side. Please try again later.",
                "request_id": get_request_id(),
            }
        },
    )


def setup_exception_handlers(app) -> None:
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(RequestValidationError)(request_validation_handler)
    app.exception_handler(Exception)(general_exception_handler)
