"""Shared fixtures: small Resource implementations for dispatcher tests."""

from __future__ import annotations

import io

import pytest

from ofcourse import Environment, Logger, LogLevel, NameVal, Resource


class StaticResource(Resource):
    """Returns the same version and metadata from every callback."""

    def check(self, source, version, env, logger):
        return [{"c": "d"}]

    def in_(self, output_dir, source, params, version, env, logger):
        return {"c": "d"}, [NameVal(name="e", value="f")]

    def out(self, input_dir, source, params, env, logger):
        return {"c": "d"}, [NameVal(name="e", value="f")]


class EmptyResource(Resource):
    """Returns known-empty versions and empty metadata."""

    def check(self, source, version, env, logger):
        return []

    def in_(self, output_dir, source, params, version, env, logger):
        return {}, []

    def out(self, input_dir, source, params, env, logger):
        return {}, []


class RecordingResource(Resource):
    """Records the arguments of its last call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []

    def check(self, source, version, env, logger):
        self.calls.append(("check", (source, version, env, logger)))
        return [{"count": "1"}]

    def in_(self, output_dir, source, params, version, env, logger):
        self.calls.append(("in", (output_dir, source, params, version, env, logger)))
        return version, None

    def out(self, input_dir, source, params, env, logger):
        self.calls.append(("out", (input_dir, source, params, env, logger)))
        return None, None


@pytest.fixture
def static_resource() -> StaticResource:
    """A resource returning {"c": "d"} and one metadata item."""
    return StaticResource()


@pytest.fixture
def empty_resource() -> EmptyResource:
    """A resource returning empty results."""
    return EmptyResource()


@pytest.fixture
def recording_resource() -> RecordingResource:
    """A resource that records its calls."""
    return RecordingResource()


@pytest.fixture
def env() -> Environment:
    """An empty environment snapshot."""
    return Environment({})


@pytest.fixture
def silent_logger() -> Logger:
    """A logger that emits nothing."""
    return Logger(LogLevel.SILENT)


@pytest.fixture
def log_stream() -> io.StringIO:
    """A stream to capture log lines."""
    return io.StringIO()
