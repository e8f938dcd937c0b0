"""
Pydantic models describing validation results returned to clients.
"""

from pydantic import BaseModel, ConfigDict, Field


class FieldError(BaseModel):
    """A single field that failed validation."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(..., description="Name of the offending field.")
    message: str = Field(..., description="Human-readable description of the failure.")


class ValidationErrorResponse(BaseModel):
    """Body of a 422 response produced by a rejected request."""

    detail: str = Field(default="Validation failed")
    errors: list[FieldError] = Field(default_factory=list)
