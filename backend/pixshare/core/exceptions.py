"""
Application error types and their HTTP translation.

Handlers raise these; the exception handlers registered in main turn them
into a JSON ``{"error": message}`` body with the matching status code.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Something went wrong!"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class PayloadTooLarge(ValidationFailed):
    status_code = 413
    message = "File too large"


class UpstreamFailure(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
    message = "Upstream service failed"


class IdentityExchangeError(UpstreamFailure):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "OAuth exchange failed."


class MediaStorageError(UpstreamFailure):
    message = "Media storage request failed"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, AppError.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
