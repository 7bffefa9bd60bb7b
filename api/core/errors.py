"""
Error taxonomy and global exception handlers.

Every error body has the shape `{"error": "<message>"}`. Storage and
unexpected failures are logged with detail and answered with a generic
message.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .db import StorageError

ROUTE_NOT_FOUND = "route not found"
SERVER_ERROR = "server error"
INVALID_BODY = "invalid request body"

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """
    Client input rejected before any storage access.
    """


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.info("request_rejected path=%s reason=%s", request.url.path, exc)
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("request_rejected path=%s errors=%s", request.url.path, exc.errors())
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_BODY)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error(
            "storage_failed method=%s path=%s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown paths and unsupported methods on known paths both fall through
        # to the catch-all.
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error(status.HTTP_404_NOT_FOUND, ROUTE_NOT_FOUND)
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_exception method=%s path=%s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR)
