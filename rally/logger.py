"""
Logging setup for the service.

Builds a root handler that writes either one JSON object per line
(machine-parseable) or a compact colorized line for local development.
Structured fields passed through ``extra=`` end up in both formats.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from rally.config import LogConfig

APP_LOGGER_NAME = "rally"

# Integer verbosity as used by the deployment environment:
# -1 trace, 0 debug, 1 info, 2 warn, 3 error, 4 fatal, 5 panic, 6+ off.
_LEVELS = {
    -1: logging.DEBUG,
    0: logging.DEBUG,
    1: logging.INFO,
    2: logging.WARNING,
    3: logging.ERROR,
    4: logging.CRITICAL,
    5: logging.CRITICAL,
}
_DISABLED = logging.CRITICAL + 10

# Attributes every LogRecord carries; anything else came in via ``extra=``.
_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

_SHORT_LEVELS = {
    "DEBUG": "DBG",
    "INFO": "INF",
    "WARNING": "WRN",
    "ERROR": "ERR",
    "CRITICAL": "FTL",
}
_COLORS = {
    "DEBUG": "\x1b[33m",
    "INFO": "\x1b[32m",
    "WARNING": "\x1b[31m",
    "ERROR": "\x1b[1;31m",
    "CRITICAL": "\x1b[1;31m",
}
_DIM = "\x1b[2m"
_RESET = "\x1b[0m"


def to_logging_level(level: int) -> int:
    """Translate the integer verbosity into a :mod:`logging` level."""
    if level < -1:
        return logging.DEBUG
    return _LEVELS.get(level, _DISABLED)


def _extra_fields(record: logging.LogRecord) -> dict:
    return {key: value for key, value in record.__dict__.items() if key not in _RESERVED}


class JSONLogFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


class ReadableFormatter(logging.Formatter):
    """Render ``HH:MM:SS LVL message key=value`` lines, optionally colorized."""

    def __init__(self, color: bool = True):
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        level = _SHORT_LEVELS.get(record.levelname, record.levelname[:3])
        fields = " ".join(f"{key}={value}" for key, value in _extra_fields(record).items())

        if self.color:
            timestamp = f"{_DIM}{timestamp}{_RESET}"
            level = f"{_COLORS.get(record.levelname, '')}{level}{_RESET}"
            if fields:
                fields = f"{_DIM}{fields}{_RESET}"

        line = " ".join(part for part in (timestamp, level, record.getMessage(), fields) if part)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(config: LogConfig) -> logging.Logger:
    """
    Install the root handler described by *config*.

    Structured output goes to stderr, readable output to stdout. Calling
    this again replaces the previously installed handler.

    Returns:
        The application logger.
    """
    if config.structured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JSONLogFormatter())
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ReadableFormatter(color=config.color))

    logging.basicConfig(level=to_logging_level(config.level), handlers=[handler], force=True)
    return logging.getLogger(APP_LOGGER_NAME)
