"""
Logging setup for the chaincfg command-line tool.

Library modules log through `logging.getLogger(__name__)` and pass structured
fields with `extra={...}`; this module only installs the root handler that
renders those fields as `[key:value]` suffixes.
"""

import logging
import sys
from typing import Any, TextIO

from .exceptions import ChainConfigError


class LogConstants:
    """Constants for the logging system."""

    DEFAULT_FORMAT: str = "[%(asctime)s] [%(levelname).1s] %(message)s"
    DEFAULT_DATEFMT: str = "%Y-%m-%d %H:%M:%S"

    LEVEL_NAMES: dict[str, int | bool] = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG,
        "false": False,  # Special value to disable all logging
    }


class InvalidLogLevelError(ChainConfigError):
    """Raised when an invalid log level is specified."""

    def __init__(self, level: Any) -> None:
        self.level = level
        super().__init__(f"Invalid log level: {level}")


# Attributes every LogRecord carries; anything else arrived through `extra`
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


def resolve_level(s: str | int | bool) -> int | bool:
    """
    Resolve log level from string, numeric value, or boolean.

    Args:
        s: Log level as string name, numeric value, or False to disable logging

    Returns:
        Numeric log level or False to disable logging

    Raises:
        InvalidLogLevelError: If the log level is invalid
    """
    if isinstance(s, bool):
        return s
    if str(s).isnumeric():
        return int(s)
    if isinstance(s, str) and s.lower() in LogConstants.LEVEL_NAMES:
        return LogConstants.LEVEL_NAMES[s.lower()]
    raise InvalidLogLevelError(s)


def _format_extra(record: logging.LogRecord) -> str:
    """Render extra fields as ' [key:value] ...'."""
    parts = []
    for key, value in record.__dict__.items():
        if key in _RECORD_ATTRS or key.startswith("_"):
            continue
        if isinstance(value, BaseException):
            parts.append(f"[{key}:{value.__class__.__name__}] {value}")
        else:
            parts.append(f"[{key}:{value}]")
    return " " + " ".join(parts) if parts else ""


class ExtraFormatter(logging.Formatter):
    """Formatter that appends structured `extra` fields to the message."""

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(
            fmt or LogConstants.DEFAULT_FORMAT,
            datefmt or LogConstants.DEFAULT_DATEFMT,
        )

    def format(self, record: logging.LogRecord) -> str:
        return super().format(record) + _format_extra(record)


def setup_logging(
    level: str | int | bool = "warning", stream: TextIO | None = None
) -> logging.Logger:
    """
    Install a single stream handler on the root logger.

    Repeated calls replace the handler installed by a previous call rather
    than stacking another one.

    Args:
        level: Level name, number, or False to silence logging
        stream: Destination stream (default: stderr)

    Returns:
        The configured root logger
    """
    resolved = resolve_level(level)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, ExtraFormatter):
            root.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(ExtraFormatter())
    root.addHandler(handler)
    if resolved is False:
        root.setLevel(logging.CRITICAL + 1)
    else:
        root.setLevel(logging.INFO if resolved is True else resolved)
    return root
