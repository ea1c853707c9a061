"""Custom exceptions for ofcourse.

This module defines the hierarchy of exceptions raised by the dispatcher and
the scaffolding command. All exceptions inherit from OfcourseError, so the
entry points can catch every terminal failure in one place.

Exception Hierarchy:
    OfcourseError (base)
    ├── ArgumentError - Missing or extra positional directory argument
    ├── ReadError - Standard input could not be read
    ├── DecodeError - Input is not a conforming JSON envelope
    ├── CallbackError - The resource implementation raised
    ├── EncodeError - The resource's result cannot be serialized
    ├── WriteError - Standard output could not be written
    ├── ConfigError - Configuration loading/validation failures
    └── ScaffoldError - Project generation failures
"""

from typing import Any


class OfcourseError(Exception):
    """Base exception for all ofcourse errors.

    Args:
        message: Human-readable error message.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ArgumentError(OfcourseError):
    """Raised when `in` or `out` is not given exactly one directory argument."""


class ReadError(OfcourseError):
    """Raised when standard input cannot be read to completion."""


class DecodeError(OfcourseError):
    """Raised when standard input is not a conforming input envelope.

    Examples:
        - Invalid JSON syntax
        - A JSON value other than an object
        - A version value that is not a string
    """


class CallbackError(OfcourseError):
    """Raised when a Resource's check, in or out callback raises.

    The message is the callback exception's message, unchanged, so the
    pipeline shows exactly what the resource author wrote.

    Args:
        message: The callback's error message.
        command: The command whose callback failed.
    """

    def __init__(self, message: str, command: str) -> None:
        super().__init__(message)
        self.command = command


class EncodeError(OfcourseError):
    """Raised when a callback's result does not fit the output envelope."""


class ConfigError(OfcourseError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Invalid YAML syntax in .ofcourse.yaml
        - A configuration value of the wrong type
    """


class ScaffoldError(OfcourseError):
    """Raised when a new resource project cannot be generated.

    Examples:
        - The project directory already exists
        - The import path is not a dotted Python identifier
        - A required value is missing
    """


class WriteError(OfcourseError):
    """Raised when the encoded result cannot be written to standard output."""
