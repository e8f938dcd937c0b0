"""
Last-resort error handling for request processing.
"""

import logging
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "An internal server error occurred. Please try again later."


class RecoveryMiddleware(BaseHTTPMiddleware):
    """Turn an unhandled exception into a generic 500 JSON response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"detail": INTERNAL_ERROR_DETAIL})
