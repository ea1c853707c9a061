"""Command dispatch for Concourse resource executables.

Each of /opt/resource/check, /opt/resource/in and /opt/resource/out is a
short-lived process that calls one entry point of this module with the
resource implementation:

    # check
    ofcourse.check(MyResource())

    # in, invoked as `in <output directory>`
    ofcourse.in_(MyResource())

    # out, invoked as `out <input directory>`
    ofcourse.out(MyResource())

An invocation runs these steps in order, and the first failing step ends it:

1. Require exactly one directory argument (in and out only)
2. Read stdin to the end
3. Decode the command's input envelope
4. Build the Logger from the source's log_level, and the Environment
5. Call the resource
6. Encode the result
7. Write the result to stdout

On failure a single red line is written to stderr through the fallback
logger, nothing is written to stdout, and the process exits with status 1.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

from ofcourse.codec import decode, encode_output, encode_versions
from ofcourse.constants import COMMAND_CHECK, COMMAND_IN, COMMAND_OUT, EXIT_FAILURE, EXIT_SUCCESS
from ofcourse.environment import Environment
from ofcourse.exceptions import ArgumentError, CallbackError, OfcourseError, ReadError, WriteError
from ofcourse.logging import Logger, LogLevel, get_logger
from ofcourse.models import CheckInput, InInput, OutInput

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ofcourse.resource import Resource

logger = get_logger(__name__)

COMMANDS = (COMMAND_CHECK, COMMAND_IN, COMMAND_OUT)


# =============================================================================
# PIPELINE
# =============================================================================


def _callback_error(command: str, exc: Exception) -> CallbackError:
    return CallbackError(str(exc) or type(exc).__name__, command=command)


def handle_check(
    resource: Resource,
    data: bytes | str,
    *,
    environment: Environment | None = None,
    log_stream: IO[str] | None = None,
) -> bytes:
    """Decode check input, call resource.check and encode its versions.

    Args:
        resource: The resource implementation.
        data: The contents of stdin.
        environment: Environment for the callback. Defaults to a snapshot of
            the process environment.
        log_stream: Stream for the resource's Logger. Defaults to stderr.

    Returns:
        The JSON array to write to stdout.

    Raises:
        DecodeError, CallbackError, EncodeError: On the respective failure.
    """
    check_input = decode(CheckInput, data)

    resource_logger = Logger.from_source(check_input.source, stream=log_stream)
    env = environment if environment is not None else Environment()
    logger.debug(
        "Invoking check",
        extra={"log_level": resource_logger.level.name, "first_check": check_input.version is None},
    )

    try:
        versions = resource.check(check_input.source, check_input.version, env, resource_logger)
        # A generator only runs its body here
        versions = list(versions or [])
    except Exception as e:
        raise _callback_error(COMMAND_CHECK, e) from e

    return encode_versions(versions)


def handle_in(
    resource: Resource,
    directory: Path,
    data: bytes | str,
    *,
    environment: Environment | None = None,
    log_stream: IO[str] | None = None,
) -> bytes:
    """Decode in input, call resource.in_ and encode its version and metadata.

    Args:
        resource: The resource implementation.
        directory: The output directory given on the command line.
        data: The contents of stdin.
        environment: Environment for the callback. Defaults to a snapshot of
            the process environment.
        log_stream: Stream for the resource's Logger. Defaults to stderr.

    Returns:
        The JSON object to write to stdout.
    """
    in_input = decode(InInput, data)

    resource_logger = Logger.from_source(in_input.source, stream=log_stream)
    env = environment if environment is not None else Environment()
    logger.debug("Invoking in", extra={"directory": str(directory)})

    try:
        version, metadata = resource.in_(
            directory, in_input.source, in_input.params, in_input.version, env, resource_logger
        )
    except Exception as e:
        raise _callback_error(COMMAND_IN, e) from e

    return encode_output(version, metadata)


def handle_out(
    resource: Resource,
    directory: Path,
    data: bytes | str,
    *,
    environment: Environment | None = None,
    log_stream: IO[str] | None = None,
) -> bytes:
    """Decode out input, call resource.out and encode its version and metadata.

    Args:
        resource: The resource implementation.
        directory: The input directory given on the command line.
        data: The contents of stdin.
        environment: Environment for the callback. Defaults to a snapshot of
            the process environment.
        log_stream: Stream for the resource's Logger. Defaults to stderr.

    Returns:
        The JSON object to write to stdout.
    """
    out_input = decode(OutInput, data)

    resource_logger = Logger.from_source(out_input.source, stream=log_stream)
    env = environment if environment is not None else Environment()
    logger.debug("Invoking out", extra={"directory": str(directory)})

    try:
        version, metadata = resource.out(
            directory, out_input.source, out_input.params, env, resource_logger
        )
    except Exception as e:
        raise _callback_error(COMMAND_OUT, e) from e

    return encode_output(version, metadata)


# =============================================================================
# PROCESS I/O
# =============================================================================


def _directory_argument(command: str, argv: Sequence[str]) -> Path:
    kind = "output" if command == COMMAND_IN else "input"
    if not argv:
        raise ArgumentError(f"missing {kind} directory argument")
    if len(argv) > 1:
        raise ArgumentError(f"expected one {kind} directory argument, got {len(argv)}")
    return Path(argv[0])


def _single_line(message: str) -> str:
    """Join a multi-line failure message so it is reported as one line."""
    lines = [line.strip() for line in message.splitlines() if line.strip()]
    return "; ".join(lines) if lines else message


def _read_input(stdin: IO[Any]) -> bytes | str:
    try:
        return stdin.read()
    except (OSError, ValueError) as e:
        raise ReadError(f"failed to read input: {e}") from e


def _write_output(stdout: IO[bytes], output: bytes) -> None:
    try:
        stdout.write(output)
        stdout.flush()
    except (OSError, ValueError) as e:
        raise WriteError(f"failed to write output: {e}") from e


def run(
    command: str,
    resource: Resource,
    *,
    argv: Sequence[str] | None = None,
    stdin: IO[Any] | None = None,
    stdout: IO[bytes] | None = None,
    environment: Environment | None = None,
    fallback_logger: Logger | None = None,
) -> int:
    """Run one resource command and return the process exit status.

    Args:
        command: "check", "in" or "out".
        resource: The resource implementation.
        argv: Positional arguments, without the program name. Defaults to
            sys.argv[1:].
        stdin: Binary stream to read the input envelope from. Defaults to
            sys.stdin.buffer.
        stdout: Binary stream to write the result to. Defaults to
            sys.stdout.buffer.
        environment: Environment for the callback. Defaults to a snapshot of
            the process environment.
        fallback_logger: Logger for the failure line. Defaults to a new
            error-level Logger on stderr.

    Returns:
        0 on success, 1 on any failure.
    """
    if command not in COMMANDS:
        raise ValueError(f"unknown command: {command!r}")

    fallback = fallback_logger if fallback_logger is not None else Logger(LogLevel.ERROR)
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        directory = _directory_argument(command, args) if command != COMMAND_CHECK else None
        data = _read_input(stdin if stdin is not None else sys.stdin.buffer)

        if command == COMMAND_CHECK:
            output = handle_check(resource, data, environment=environment)
        elif command == COMMAND_IN:
            output = handle_in(resource, directory, data, environment=environment)
        else:
            output = handle_out(resource, directory, data, environment=environment)

        _write_output(stdout if stdout is not None else sys.stdout.buffer, output)
    except OfcourseError as e:
        logger.debug("Command failed", extra={"command": command, "error": type(e).__name__})
        fallback.error("%s", _single_line(str(e)))
        return EXIT_FAILURE

    return EXIT_SUCCESS


# =============================================================================
# ENTRY POINTS
# =============================================================================


def _exit_on_failure(status: int) -> None:
    if status != EXIT_SUCCESS:
        sys.exit(status)


def check(resource: Resource, **kwargs: Any) -> None:
    """Entry point of /opt/resource/check.

    Accepts the keyword arguments of ``run``. Returns on success; exits the
    process with status 1 on failure.
    """
    _exit_on_failure(run(COMMAND_CHECK, resource, **kwargs))


def in_(resource: Resource, **kwargs: Any) -> None:
    """Entry point of /opt/resource/in, run as `in <output directory>`.

    Accepts the keyword arguments of ``run``. Returns on success; exits the
    process with status 1 on failure.
    """
    _exit_on_failure(run(COMMAND_IN, resource, **kwargs))


def out(resource: Resource, **kwargs: Any) -> None:
    """Entry point of /opt/resource/out, run as `out <input directory>`.

    Accepts the keyword arguments of ``run``. Returns on success; exits the
    process with status 1 on failure.
    """
    _exit_on_failure(run(COMMAND_OUT, resource, **kwargs))
