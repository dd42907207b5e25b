"""
Global error handling for the FastAPI application.

Catches EchoNoteError subclasses, routing misses, request validation
errors, and unhandled exceptions, converting them into a consistent
``{"error": message}`` JSON body.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from echonote.core.exceptions import EchoNoteError, RouteNotFoundError
from echonote.core.models import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application.

    Registers four handlers:
    1. ``EchoNoteError``: maps domain errors to their status and message.
    2. ``HTTPException``: unmatched routes and methods become 404 "Route not found".
    3. ``RequestValidationError``: malformed input becomes 400.
    4. ``Exception``: catch-all for unexpected server errors (500).

    Args:
        app: The FastAPI application instance to register handlers on.
    """

    @app.exception_handler(EchoNoteError)
    async def echonote_error_handler(request: Request, exc: EchoNoteError) -> JSONResponse:
        """Convert domain-specific errors into the JSON error body."""
        logger.info(
            "%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.code
        )
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Routing misses (404/405) are reported uniformly as an unknown route."""
        if exc.status_code in (404, 405):
            not_found = RouteNotFoundError()
            return _error_response(not_found.status_code, not_found.detail)
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation errors (malformed body/params)."""
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error_response(400, message)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler for unexpected server errors."""
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return _error_response(500, "Internal server error")
