"""
Middleware registration for the application.
"""

import logging

from fastapi import FastAPI

from rally.config import SecurityHeadersConfig
from rally.middleware.cors import CORSMiddleware
from rally.middleware.recovery import RecoveryMiddleware
from rally.middleware.request_logging import RequestLoggingMiddleware
from rally.middleware.security_headers import SecurityHeadersMiddleware


def install_middleware(app: FastAPI, logger: logging.Logger, security: SecurityHeadersConfig) -> None:
    """
    Register the middleware stack on *app*.

    Starlette wraps the most recently added middleware outermost, so the
    resulting order from the outside in is: request logging, security
    headers, CORS, recovery. A recovered 500 therefore still carries the
    security and CORS headers and is logged.
    """
    app.add_middleware(RecoveryMiddleware)
    app.add_middleware(CORSMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, csp=security.default_src)
    app.add_middleware(RequestLoggingMiddleware, logger=logger)
