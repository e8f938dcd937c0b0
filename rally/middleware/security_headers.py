"""
Security headers added to every response.

The Content-Security-Policy value is configurable; frame and content-type
hardening headers are fixed.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from rally.config import DEFAULT_CSP


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set CSP, frame and content-type hardening headers on every response."""

    def __init__(self, app: ASGIApp, csp: str = DEFAULT_CSP):
        super().__init__(app)
        self.csp = csp or DEFAULT_CSP

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers["Content-Security-Policy"] = self.csp
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response
