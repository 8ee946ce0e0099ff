"""
Custom exception handlers for FastAPI.
Provides clear error messages for validation, configuration and server errors.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.core.observability import sentry_capture_exception
from app.services.errors import ConfigurationError


def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "details": exc.errors(),
        },
    )


def configuration_exception_handler(request: Request, exc: ConfigurationError):
    return JSONResponse(status_code=HTTP_500_INTERNAL_SERVER_ERROR, content=exc.to_dict())


def generic_exception_handler(request: Request, exc: Exception):
    sentry_capture_exception(exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": str(exc),
        },
    )
