"""
Cross-origin headers.

Any ``Origin`` is reflected back with credentials allowed. Preflight
(OPTIONS) requests also learn the allowed methods and headers and may be
cached by the browser for a day.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

ALLOW_METHODS = "GET,PUT,POST,DELETE,HEAD,PATCH"
ALLOW_HEADERS = "authorization,content-type,content-length"
MAX_AGE = "86400"


class CORSMiddleware(BaseHTTPMiddleware):
    """Reflect the request ``Origin`` into the response headers."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        origin = request.headers.get("origin")
        response = await call_next(request)
        if not origin:
            return response

        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        if request.method == "OPTIONS":
            response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
            response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
            response.headers["Access-Control-Max-Age"] = MAX_AGE
        return response
