"""
Error Handling

Base service error plus the app-level handlers that render every error
response as a flat JSON body: {"error": <message>, "code": <CODE>}.
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for service-layer errors that map to an HTTP status."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


def to_http_exception(e: ServiceError) -> HTTPException:
    """Convert a service error to an HTTPException with a structured detail."""
    return HTTPException(
        status_code=e.status_code,
        detail={
            "error": e.message,
            "code": e.error_code,
        },
    )


def internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "An unexpected error occurred. Please try again later.",
            "code": "INTERNAL_ERROR",
        },
    )


def _format_validation_error(error: dict) -> str:
    """Build a field-specific message from one pydantic error entry."""
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc)

    if error.get("type") == "missing":
        return f"{field} is required" if field else "Request body is required"
    if not field:
        return error.get("msg", "Invalid request")
    return f"{field}: {error.get('msg', 'invalid value')}"


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail, "code": "HTTP_ERROR"}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = _format_validation_error(errors[0]) if errors else "Invalid request"
    logger.debug(f"Request validation failed: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "code": "VALIDATION_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
