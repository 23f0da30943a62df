"""HTTP error taxonomy and the handlers that render it as JSON."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIError(StarletteHTTPException):
    """Base class for errors a route reports to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error."

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(
            status_code=status_code or type(self).status_code,
            detail=message or type(self).message,
            headers=headers,
        )


class ValidationError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request."


class ConflictError(APIError):
    status_code = status.HTTP_409_CONFLICT
    message = "Resource already exists."


class AuthError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated."


class ServerError(APIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error."


async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0]["msg"] if errors else ValidationError.message
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": ServerError.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"message": ...}``."""

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
