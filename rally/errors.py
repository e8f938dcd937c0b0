"""
Application error types and their HTTP mapping.

Expected failures raised by request handlers derive from ``RallyError``
and are rendered as JSON by the handlers registered here. Anything else
is left to the recovery middleware.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rally.models.validation import FieldError, ValidationErrorResponse

logger = logging.getLogger(__name__)


class RallyError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    message: str = "internal error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UsernameTakenError(RallyError):
    status_code = 409
    message = "username already taken"


class InvalidCredentialsError(RallyError):
    status_code = 401
    message = "invalid credentials"


class AccountLockedError(RallyError):
    status_code = 423
    message = "account is locked"


class ValidationFailed(RallyError):
    """A request body broke one or more field rules."""

    status_code = 422
    message = "Validation failed"

    def __init__(self, errors: list[FieldError]):
        super().__init__()
        self.errors = errors


class DatabaseConnectionError(RallyError):
    """The database could not be reached at startup. Not recoverable."""

    message = "could not connect to the database"


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

async def rally_error_handler(request: Request, exc: RallyError) -> JSONResponse:
    logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    if isinstance(exc, ValidationFailed):
        content = ValidationErrorResponse(detail=exc.message, errors=exc.errors).model_dump()
    else:
        content = {"detail": exc.message}
    return JSONResponse(status_code=exc.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every ``RallyError`` raised by a route as structured JSON."""
    app.add_exception_handler(RallyError, rally_error_handler)
