"""The interface a Concourse resource implements.

A resource is a class with three methods, one per Concourse command:

- check: report the versions available since a given version
- in_: fetch a version into a directory (a `get` step)
- out: publish from a directory, producing a version (a `put` step)

The dispatcher in ``ofcourse.dispatch`` decodes stdin, builds the Logger and
Environment, calls the matching method and writes its result to stdout. A
method signals failure by raising; the exception's message is shown in the
build output and the command exits with status 1.

Example:
    class CounterResource(Resource):
        def check(self, source, version, env, logger):
            if version is None:
                return [{"count": "1"}]
            return [{"count": str(int(version["count"]) + 1)}]

        def in_(self, output_dir, source, params, version, env, logger):
            (output_dir / "count").write_text(version["count"])
            return version, [NameVal(name="count", value=version["count"])]

        def out(self, input_dir, source, params, env, logger):
            return {"count": "1"}, []

    # /opt/resource/check
    ofcourse.check(CounterResource())
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from ofcourse.environment import Environment
    from ofcourse.logging import Logger
    from ofcourse.models import Metadata, Params, Source, Version


class Resource(ABC):
    """Abstract base class for Concourse resources.

    Implementation Requirements:
        - Never print to stdout; log through the given Logger
        - Read environment variables through the given Environment
        - Raise an exception to fail the command
        - Treat a version of None (unknown) differently from {} (known, empty)
    """

    @abstractmethod
    def check(
        self,
        source: Source,
        version: Version | None,
        env: Environment,
        logger: Logger,
    ) -> list[Version]:
        """Return the versions available since the given one, oldest first.

        Called by /opt/resource/check, when Concourse checks the resource or
        on `fly check-resource`.

        Args:
            source: The resource's source configuration.
            version: The latest version Concourse knows, or None on the
                first check.
            env: Environment variables of the process.
            logger: Logger at the pipeline's configured level.

        Returns:
            The new versions. With version None this must contain at least
            the current version.
        """
        ...

    @abstractmethod
    def in_(
        self,
        output_dir: Path,
        source: Source,
        params: Params,
        version: Version | None,
        env: Environment,
        logger: Logger,
    ) -> tuple[Version | None, Metadata | None]:
        """Fetch a version of the resource into output_dir.

        Called by /opt/resource/in when a job does a `get` of the resource.

        Args:
            output_dir: Directory to place the fetched content in.
            source: The resource's source configuration.
            params: Parameters of the `get` step.
            version: The version to fetch.
            env: Environment variables of the process.
            logger: Logger at the pipeline's configured level.

        Returns:
            The fetched version and metadata to display. Either may be empty.
        """
        ...

    @abstractmethod
    def out(
        self,
        input_dir: Path,
        source: Source,
        params: Params,
        env: Environment,
        logger: Logger,
    ) -> tuple[Version | None, Metadata | None]:
        """Publish a new version of the resource from input_dir.

        Called by /opt/resource/out when a job does a `put` to the resource.

        Args:
            input_dir: Directory holding the job's inputs and task outputs.
            source: The resource's source configuration.
            params: Parameters of the `put` step.
            env: Environment variables of the process.
            logger: Logger at the pipeline's configured level.

        Returns:
            The created version and metadata to display. Either may be empty.
        """
        ...
