"""
Request models for account endpoints.
"""

from typing import Annotated

from pydantic import BaseModel, Field

from rally.validation.rules import PASSWORD_MIN_LENGTH, USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH
from rally.validation.validator import equals_field, required, rule

Username = Annotated[
    str,
    Field(min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH),
    required(),
    rule("username"),
]
Email = Annotated[str, required(), rule("email")]
Password = Annotated[str, Field(min_length=PASSWORD_MIN_LENGTH), required(), rule("strong_password")]


class SignUpRequest(BaseModel):
    """Incoming body for creating an account."""

    username: Username = Field(..., examples=["john_doe-1"])
    email: Email = Field(..., examples=["john.doe@mail.ru"])
    password: Password
    password_confirm: Annotated[str, required(), equals_field("password")]
