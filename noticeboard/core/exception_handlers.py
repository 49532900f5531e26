"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses. Every error body has the same shape:
{error, message, details, retryable}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from noticeboard.core.config import get_settings
from noticeboard.domain.exceptions import NoticeboardException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "INVALID_CREDENTIAL": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "ANNOUNCEMENT_ARCHIVED": 409,
    "AI_QUOTA_EXCEEDED": 402,
    "AI_RATE_LIMITED": 429,
    "AI_UNAVAILABLE": 503,
    "STORE_UNAVAILABLE": 503,
    "UPSTREAM_UNAVAILABLE": 503,
    "STORAGE_PERMISSION_ERROR": 400,
    "STORAGE_UPLOAD_ERROR": 503,
}


def status_for(exc: NoticeboardException) -> int:
    """HTTP status for a domain exception (500 for unmapped codes)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 500)


def _noticeboard_exception_handler(
    request: Request, exc: NoticeboardException
) -> JSONResponse:
    """Return JSON from NoticeboardException.to_dict() with the mapped status code."""
    status = status_for(exc)
    if status >= 500:
        logger.warning("%s: %s", exc.error_code, exc.message)
    headers = {"Retry-After": "60"} if exc.retryable and status in (429, 503) else None
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
            "retryable": False,
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """exc.errors() without non-serializable ctx values."""
    errors = []
    for err in exc.errors():
        item = {k: v for k, v in err.items() if k in ("type", "loc", "msg")}
        errors.append(item)
    return errors


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 in the standard error shape."""
    return JSONResponse(
        status_code=429,
        content={
            "error": "RATE_LIMITED",
            "message": f"Rate limit exceeded: {exc.detail}",
            "details": {},
            "retryable": True,
        },
        headers={"Retry-After": "60"},
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "HTTP_ERROR",
            "message": exc.detail,
            "details": {},
            "retryable": False,
        },
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": detail,
            "details": {},
            "retryable": False,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: NoticeboardException (and
    subclasses), RequestValidationError, RateLimitExceeded,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(NoticeboardException, _noticeboard_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
