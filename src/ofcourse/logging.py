"""Logging for ofcourse and for the resources built on it.

Two kinds of logging live here:

1. ``Logger``, the leveled logger handed to a resource's check, in and out
   callbacks. It writes colored lines to stderr, never stdout, since stdout
   carries the JSON result Concourse reads. A pipeline chooses the level with
   the ``log_level`` key of the resource's source configuration, one of
   "error", "warn", "info" or "debug" in any case. Anything else means "info".

2. Library logging for the ``ofcourse`` command itself, set up once with
   ``setup_logging`` and obtained per module with ``get_logger(__name__)``.

Usage:
    from ofcourse.logging import Logger, LogLevel

    logger = Logger.from_source({"log_level": "debug"})
    logger.debug("Version: %s", version)

    quiet = Logger(LogLevel.WARN)
    quiet.info("not shown")
"""

from __future__ import annotations

import logging
import sys
from enum import IntEnum
from typing import IO, Any

import click

from ofcourse.constants import (
    DEBUG_LEVEL,
    ERROR_LEVEL,
    INFO_LEVEL,
    LEVEL_COLORS,
    LIBRARY_LOGGER,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LOG_LEVEL_KEY,
    WARN_LEVEL,
)


class LogLevel(IntEnum):
    """Verbosity ranks of a resource Logger, least to most verbose.

    SILENT is never selected from a pipeline's source configuration; it exists
    so tests of resource code can run without output.
    """

    SILENT = -1
    ERROR = 0
    WARN = 1
    INFO = 2
    DEBUG = 3

    @classmethod
    def parse(cls, value: Any) -> LogLevel:
        """Return the level named by value, or INFO if it names none.

        Args:
            value: A level name such as "warn" or "DEBUG". Non-strings are
                treated as unrecognized.

        Returns:
            The matching LogLevel.
        """
        if isinstance(value, str):
            return _NAMED_LEVELS.get(value.lower(), cls.INFO)
        return cls.INFO


_NAMED_LEVELS: dict[str, LogLevel] = {
    ERROR_LEVEL: LogLevel.ERROR,
    WARN_LEVEL: LogLevel.WARN,
    INFO_LEVEL: LogLevel.INFO,
    DEBUG_LEVEL: LogLevel.DEBUG,
}

_STDLIB_LEVELS: dict[LogLevel, int] = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}

_STDLIB_COLORS: dict[int, str] = {
    logging.ERROR: LEVEL_COLORS[ERROR_LEVEL],
    logging.WARNING: LEVEL_COLORS[WARN_LEVEL],
    logging.INFO: LEVEL_COLORS[INFO_LEVEL],
    logging.DEBUG: LEVEL_COLORS[DEBUG_LEVEL],
}


class ColorFormatter(logging.Formatter):
    """A formatter that colors each line by its level.

    Error lines are red, warnings yellow, info green and debug blue.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        return click.style(message, fg=_STDLIB_COLORS.get(record.levelno), bold=True)


class Logger:
    """Leveled logger passed to Resource callbacks.

    Each instance owns a private stdlib logger and handler, so loggers of
    different levels can coexist in one process without sharing state.

    Args:
        level: The most verbose rank this logger emits.
        stream: Where lines are written. Defaults to sys.stderr.
    """

    def __init__(self, level: LogLevel | int = LogLevel.INFO, stream: IO[str] | None = None) -> None:
        self.level = LogLevel(level)

        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(ColorFormatter("%(message)s"))

        # Unregistered: no parent logger and no shared handlers
        self._logger = logging.Logger("ofcourse.resource", level=logging.DEBUG)
        self._logger.propagate = False
        self._logger.addHandler(handler)

    @classmethod
    def from_source(cls, source: dict[str, Any], stream: IO[str] | None = None) -> Logger:
        """Create a logger at the level named by the source's log_level key."""
        return cls(LogLevel.parse(source.get(LOG_LEVEL_KEY)), stream=stream)

    def __repr__(self) -> str:
        return f"Logger(level={self.level.name})"

    def enabled_for(self, level: LogLevel) -> bool:
        """Whether a call at the given rank would be emitted."""
        return self.level >= level

    def _emit(self, level: LogLevel, message: str, args: tuple[Any, ...]) -> None:
        if self.enabled_for(level):
            self._logger.log(_STDLIB_LEVELS[level], message, *args)

    def error(self, message: str, *args: Any) -> None:
        """Log a red line at error level."""
        self._emit(LogLevel.ERROR, message, args)

    def warn(self, message: str, *args: Any) -> None:
        """Log a yellow line at warn level."""
        self._emit(LogLevel.WARN, message, args)

    warning = warn

    def info(self, message: str, *args: Any) -> None:
        """Log a green line at info level."""
        self._emit(LogLevel.INFO, message, args)

    def debug(self, message: str, *args: Any) -> None:
        """Log a blue line at debug level."""
        self._emit(LogLevel.DEBUG, message, args)


# =============================================================================
# LIBRARY LOGGING
# =============================================================================

# Attributes every LogRecord carries; anything else on a record came from `extra`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


class StructuredFormatter(logging.Formatter):
    """A formatter that appends a record's ``extra`` fields as key=value pairs.

    Example output:
        DEBUG    | ofcourse.scaffold | Wrote template [path=s3/Dockerfile template=Dockerfile]
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = sorted(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        if not fields:
            return message
        return message + " [" + " ".join(f"{key}={value}" for key, value in fields) + "]"


def setup_logging(
    level: int = logging.INFO,
    *,
    include_timestamp: bool = True,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Send the ofcourse package's own log records to stderr.

    Only the ``ofcourse`` logger is configured, never the root logger, so a
    host application's logging setup is left alone. Calling it again replaces
    the handler installed by the previous call.

    Args:
        level: The logging level (default: INFO).
        include_timestamp: Whether to include timestamps in output.
        stream: Where records are written. Defaults to sys.stderr.

    Returns:
        The installed handler.
    """
    fmt = LOG_FORMAT if include_timestamp else LOG_FORMAT.removeprefix("%(asctime)s | ")
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(StructuredFormatter(fmt, datefmt=LOG_DATE_FORMAT))

    package_logger = logging.getLogger(LIBRARY_LOGGER)
    for old in package_logger.handlers[:]:
        package_logger.removeHandler(old)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False

    return handler


def get_logger(name: str) -> logging.Logger:
    """Get the library logger for a module, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)
