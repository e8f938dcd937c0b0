"""
Application configuration managed via environment variables.

Uses pydantic-settings for typed configuration groups and python-dotenv
for the optional local ``.env`` file. Missing or malformed values never
fail startup: every lookup falls back to its default.
"""

import os
import re
from pathlib import Path
from typing import Any, TypeVar

from dotenv import load_dotenv
from pydantic import (
    Field,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

T = TypeVar("T")

DEFAULT_CSP = "default-src 'self'; frame-ancestors 'self'; base-uri 'self'; form-action 'self'"

# Plain decimal integers only: "2.0", " 2" and "1e3" are rejected
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Environment helpers
# ---------------------------------------------------------------------------

def init_env(path: str | os.PathLike = ".env") -> bool:
    """
    Load variables from a local dotenv file into the process environment.

    Variables that are already set are left untouched.

    Returns:
        True if the file was found and loaded, False if it does not exist.
    """
    if not Path(path).is_file():
        return False
    load_dotenv(path, override=False)
    return True


def _load(key: str, default: T, type_: type[T]) -> T:
    value = os.getenv(key)
    if not value:
        return default
    if type_ is int and not _INTEGER_RE.fullmatch(value):
        return default
    try:
        return TypeAdapter(type_).validate_python(value)
    except ValidationError:
        return default


def get_string(key: str, default: str) -> str:
    """Return the variable *key*, or *default* when it is unset or empty."""
    return _load(key, default, str)


def get_int(key: str, default: int) -> int:
    """Return the variable *key* as an integer, or *default* if unset or unparsable."""
    return _load(key, default, int)


def get_bool(key: str, default: bool) -> bool:
    """Return the variable *key* as a boolean, or *default* if unset or unparsable."""
    return _load(key, default, bool)


# ---------------------------------------------------------------------------
# Settings groups
# ---------------------------------------------------------------------------

class LenientSettings(BaseSettings):
    """Frozen settings group whose fields fall back to defaults on bad input."""

    model_config = SettingsConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    @field_validator("*", mode="wrap")
    @classmethod
    def _fall_back_to_default(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        default = cls.model_fields[info.field_name].default
        if value is None or value == "":
            return default
        if cls.model_fields[info.field_name].annotation is int and isinstance(value, str):
            if not _INTEGER_RE.fullmatch(value):
                return default
        try:
            return handler(value)
        except ValidationError:
            return default


class LogConfig(LenientSettings):
    """Logger verbosity and output format (``LOG_*``)."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: int = 0
    format: str = "json"
    color: bool = True

    @property
    def structured(self) -> bool:
        """True for machine-parseable JSON output, False for readable lines."""
        return self.format == "json"


class DatabaseConfig(LenientSettings):
    """PostgreSQL connection settings (``DB_*``)."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = "postgres"
    name: str = Field(default="rally", validation_alias="DB_DATABASE")
    ssl_mode: str = Field(default="disable", validation_alias="DB_SSLMODE")


class SecurityHeadersConfig(LenientSettings):
    """Value of the Content-Security-Policy header (``CSP_DEFAULT_SRC``)."""

    model_config = SettingsConfigDict(env_prefix="CSP_")

    default_src: str = DEFAULT_CSP
