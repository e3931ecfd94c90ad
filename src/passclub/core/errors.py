"""Exception taxonomy and the FastAPI handlers that render it."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Username and password are required! 🤔"
SERVER_HICCUP_MESSAGE = "Server had a hiccup! Try again later 🤒"


class PassclubError(Exception):
    """Base exception carrying an HTTP status and a client-safe message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = SERVER_HICCUP_MESSAGE

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationFailure(PassclubError):
    """Raised when a registration request fails input validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = MISSING_FIELDS_MESSAGE


class StoreError(PassclubError):
    """Raised when the record store cannot serve a query or insert."""


class AuditLogError(PassclubError):
    """Raised when the audit file cannot be read, parsed or written."""


def failure_body(message: str) -> dict[str, object]:
    """Return the JSON body shared by every failed request."""
    return {"success": False, "message": message}


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers that render known failures as ``{success, message}`` bodies."""

    @app.exception_handler(PassclubError)
    async def passclub_error_handler(request: Request, exc: PassclubError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc
            )
        return JSONResponse(failure_body(exc.message), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.debug("Rejected malformed request body: %s", exc.errors())
        return JSONResponse(
            failure_body(MISSING_FIELDS_MESSAGE),
            status_code=status.HTTP_400_BAD_REQUEST,
        )


__all__ = [
    "AuditLogError",
    "MISSING_FIELDS_MESSAGE",
    "PassclubError",
    "SERVER_HICCUP_MESSAGE",
    "StoreError",
    "ValidationFailure",
    "failure_body",
    "register_exception_handlers",
]
