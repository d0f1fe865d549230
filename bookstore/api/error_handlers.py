"""
Global exception handlers for the bookstore API.

Every error leaves the API in the same envelope:

    {"error": {"message": ..., "status": ...}}

- BookError -> its own http_status (400 / 404 / 500)
- RequestValidationError (unparseable body) -> 400
- Starlette HTTPException (unknown route, wrong method) -> its status
- Exception (catch-all) -> 500, never leaks internal details
"""

import logging
from typing import Any, List, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.domain.errors import BookError

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An unexpected error occurred"


def format_error(message: Union[str, List[str]], status_code: int) -> dict:
    """Build the error envelope for a message (or list of messages)."""
    return {"error": {"message": message, "status": status_code}}


def error_response(message: Union[str, List[str]], status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=format_error(message, status_code))


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_book_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_book_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BookError)
    async def book_error_handler(request: Request, exc: BookError):
        """Handle all bookstore domain/infrastructure errors."""
        if exc.http_status >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}", exc_info=exc)
            return error_response(GENERIC_SERVER_ERROR, exc.http_status)

        logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Handle bodies FastAPI could not decode before the route ran."""
        messages = _describe_request_errors(exc.errors())
        logger.warning(f"Validation error on {request.url.path}: {messages}")
        return error_response(messages, status.HTTP_400_BAD_REQUEST)


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Reshape framework errors such as 404 for unknown routes."""
        logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}")
        return error_response(str(exc.detail), exc.status_code)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=exc,
        )
        return error_response(GENERIC_SERVER_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)


def _describe_request_errors(errors: List[dict[str, Any]]) -> List[str]:
    messages = []
    for e in errors:
        # Drop the leading "body" segment FastAPI adds to every location
        loc = [str(part) for part in e.get("loc", ()) if part != "body"]
        messages.append(f"{'.'.join(loc) or 'body'}: {e['msg']}")
    return messages
