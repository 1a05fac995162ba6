"""
Application error kinds and the handlers that turn them into JSON responses.

Every error leaves the API as ``{"error": "<message>"}``. Messages are safe
to show to clients; anything internal is logged, never returned.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .logging import get_logger

logger = get_logger("errors")


class NotekeeperError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class UnauthenticatedError(NotekeeperError):
    """No bearer token, or a header that doesn't carry one."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class ForbiddenError(NotekeeperError):
    """A token was presented but failed verification."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class NotFoundError(NotekeeperError):
    """Resource is absent or belongs to someone else; the two are not distinguished."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(NotekeeperError):
    # 400 rather than 409 to keep the published contract for duplicate emails
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class ValidationError(NotekeeperError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class InternalError(NotekeeperError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def _error_body(message: str, details: Optional[Any] = None) -> dict:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error-kind handlers to ``app``."""

    @app.exception_handler(NotekeeperError)
    async def handle_notekeeper_error(request: Request, exc: NotekeeperError):
        if exc.status_code >= 500:
            logger.error(
                "Request failed", extra={"path": request.url.path, "error": exc.message}
            )
        headers = None
        if isinstance(exc, UnauthenticatedError):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.details),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Validation failed", details),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(InternalError.default_message),
        )


@contextmanager
def store_errors(action: str, message: Optional[str] = None) -> Iterator[None]:
    """Turn store failures inside the block into ``InternalError``.

    The original exception is logged with its traceback; the client only
    sees ``message``.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Store failure", exc_info=exc, extra={"action": action})
        raise InternalError(message) from exc
