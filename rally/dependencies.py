"""
FastAPI dependencies shared by route modules.
"""

from fastapi import Request

from rally.validation.validator import Validator


def get_validator(request: Request) -> Validator:
    """Return the validator built for this application instance."""
    return request.app.state.validator
