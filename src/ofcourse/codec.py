"""JSON codec for the resource protocol envelopes.

Decoding turns the bytes read from stdin into one of the input envelope
models. Encoding turns a callback's result into the exact bytes Concourse
expects on stdout: compact JSON, an array for check and a
``{"version": ..., "metadata": [...]}`` object for in and out.

Example:
    envelope = decode(CheckInput, b'{"source": {}, "version": null}')
    encode_versions([{"count": "1"}])  # b'[{"count":"1"}]'
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from ofcourse.exceptions import DecodeError, EncodeError
from ofcourse.models import InOutOutput, Metadata, Version

EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)

_VERSIONS_ADAPTER: TypeAdapter[list[Version]] = TypeAdapter(list[Version])


def _describe(exc: Exception) -> str:
    """Condense a validation or serialization error into a single line."""
    if not isinstance(exc, ValidationError):
        return str(exc).splitlines()[0] if str(exc) else type(exc).__name__

    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"].splitlines()[0] if error["msg"] else error["type"]
        problems.append(f"{location}: {message}" if location else message)
    return "; ".join(problems)


def decode(model: type[EnvelopeT], data: bytes | str) -> EnvelopeT:
    """Decode an input envelope from JSON.

    Args:
        model: The envelope model to decode into (CheckInput, InInput, OutInput).
        data: The full contents of standard input.

    Returns:
        The decoded envelope.

    Raises:
        DecodeError: If data is not a JSON object matching the envelope.
    """
    try:
        return model.model_validate_json(data)
    except ValidationError as e:
        raise DecodeError(f"invalid input: {_describe(e)}") from e


def encode_versions(versions: Sequence[Version] | None) -> bytes:
    """Encode the result of a check as a JSON array.

    Args:
        versions: Versions returned by the resource, in order. None encodes
            as an empty array.

    Returns:
        Compact JSON bytes.

    Raises:
        EncodeError: If a version is not a mapping of strings to strings.
    """
    try:
        validated = _VERSIONS_ADAPTER.validate_python(list(versions or []))
        return _VERSIONS_ADAPTER.dump_json(validated)
    except (ValidationError, PydanticSerializationError, TypeError) as e:
        raise EncodeError(f"invalid check result: {_describe(e)}") from e


def encode_output(version: Version | None, metadata: Metadata | None) -> bytes:
    """Encode the result of an in or out callback.

    Args:
        version: The version, or None for an unknown version.
        metadata: Display metadata. None encodes as an empty array.

    Returns:
        Compact JSON bytes of the form {"version": ..., "metadata": [...]}.

    Raises:
        EncodeError: If the version or metadata does not fit the envelope.
    """
    try:
        output = InOutOutput(version=version, metadata=metadata)
        return output.model_dump_json().encode("utf-8")
    except (ValidationError, PydanticSerializationError) as e:
        raise EncodeError(f"invalid result: {_describe(e)}") from e
