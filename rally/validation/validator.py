"""
Request-body validation.

Generic constraints (missing fields, length limits) come from pydantic;
``required()`` additionally rejects empty strings.

Rules that pydantic does not know about live in a registry owned by a
``Validator`` instance; models reference them by tag through ``rule()``
and the instance is handed to pydantic as validation context, so there is
no process-wide validator state.

Failures are collected as ``FieldError`` items rather than raised, and
every failure is translated into a catalog message by its rule tag.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, TypeVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ValidationError, ValidationInfo
from pydantic_core import PydanticCustomError

from rally.errors import ValidationFailed
from rally.models.validation import FieldError
from rally.validation.messages import error_message
from rally.validation.rules import is_email, is_strong_password, is_valid_username

logger = logging.getLogger(__name__)

Predicate = Callable[[str], bool]
ModelT = TypeVar("ModelT", bound=BaseModel)

CONTEXT_KEY = "validator"
INPUT_KEY = "input"

# pydantic error types that correspond to catalog tags
_PYDANTIC_TAGS = {
    "missing": "required",
    "string_too_short": "min",
    "too_short": "min",
    "string_too_long": "max",
    "too_long": "max",
}


class Validator:
    """Registry of named field rules plus the entry points that apply them."""

    def __init__(self) -> None:
        self._rules: dict[str, Predicate] = {}
        self.register_rule("email", is_email)
        self.register_rule("username", is_valid_username)
        self.register_rule("strong_password", is_strong_password)

    def register_rule(self, tag: str, predicate: Predicate) -> None:
        """Make *predicate* available to models under *tag*."""
        self._rules[tag] = predicate

    def check(self, tag: str, value: str) -> bool:
        """
        Run the rule registered as *tag* against *value*.

        Raises:
            KeyError: If no rule is registered under *tag*.
        """
        return self._rules[tag](value)

    def parse(self, schema: type[ModelT], data: Any) -> ModelT:
        """
        Validate *data* against *schema* and return the model instance.

        Raises:
            ValidationFailed: Carrying one ``FieldError`` per failed field.
        """
        try:
            return schema.model_validate(data, context={CONTEXT_KEY: self, INPUT_KEY: data})
        except ValidationError as exc:
            errors = [_to_field_error(error) for error in exc.errors()]
            logger.debug("%s rejected: %d field error(s)", schema.__name__, len(errors))
            raise ValidationFailed(errors) from exc

    def validate(self, schema: type[BaseModel], data: Any) -> list[FieldError]:
        """Return the field errors for *data*; an empty list means it is valid."""
        try:
            self.parse(schema, data)
        except ValidationFailed as exc:
            return exc.errors
        return []


def _to_field_error(error: dict) -> FieldError:
    field = ".".join(str(part) for part in error["loc"])
    ctx = error.get("ctx") or {}
    tag = _PYDANTIC_TAGS.get(error["type"], error["type"])

    if tag == "min":
        param = ctx.get("min_length", "")
    elif tag == "max":
        param = ctx.get("max_length", "")
    else:
        param = ctx.get("param", "")

    return FieldError(field=field, message=error_message(tag, str(param)))


# ---------------------------------------------------------------------------
# Field annotations
# ---------------------------------------------------------------------------

def rule(tag: str) -> AfterValidator:
    """
    Annotation that applies the registry rule *tag* to a string field.

    The model must be validated through ``Validator.parse`` or
    ``Validator.validate``; plain ``model_validate`` raises RuntimeError.
    """

    def check(value: str, info: ValidationInfo) -> str:
        validator = (info.context or {}).get(CONTEXT_KEY)
        if validator is None:
            raise RuntimeError(f"Rule '{tag}' requires validation through a Validator instance.")
        if not validator.check(tag, value):
            raise PydanticCustomError(tag, "Value does not satisfy rule '{tag}'", {"tag": tag})
        return value

    return AfterValidator(check)


def required() -> BeforeValidator:
    """Annotation rejecting a zero value (``None`` or an empty string)."""

    def check(value: Any) -> Any:
        if value is None or value == "":
            raise PydanticCustomError("required", "Field is required")
        return value

    return BeforeValidator(check)


def equals_field(other: str) -> AfterValidator:
    """
    Annotation requiring the field to equal field *other* of the raw input.

    The comparison uses the submitted value of *other*, so it holds even
    when *other* failed its own rules.
    """

    def check(value: Any, info: ValidationInfo) -> Any:
        raw = (info.context or {}).get(INPUT_KEY)
        if isinstance(raw, Mapping):
            expected = raw.get(other)
        else:
            expected = info.data.get(other)
        if expected != value:
            raise PydanticCustomError("eqfield", "Value must match field '{param}'", {"param": other})
        return value

    return AfterValidator(check)
