"""Configuration loader for the ofcourse command.

The `ofcourse init` command can take its values from a YAML file instead of
(or in addition to) command line options. Environment variables in values
are expanded; referring to an unset variable is an error.

Example .ofcourse.yaml:
    resource: s3-sync-resource
    docker_registry: ${REGISTRY}/concourse
    import_path: s3_sync_resource

Example:
    config = load_config()
    if config.resource:
        print(f"Resource: {config.resource}")
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from ofcourse.constants import CONFIG_FILE_NAME
from ofcourse.exceptions import ConfigError


class ScaffoldConfig(BaseModel):
    """Values for generating a new resource project.

    Attributes:
        resource: Name of the resource, also the project directory name.
        docker_registry: Registry the resource's image is pushed to.
        import_path: Python package the resource code lives in.
    """

    resource: str | None = Field(default=None, description="Name of the Concourse resource")
    docker_registry: str | None = Field(default=None, description="Docker registry for the image")
    import_path: str | None = Field(default=None, description="Python import path of the resource")

    model_config = {"extra": "forbid"}

    def merged(self, **overrides: str | None) -> ScaffoldConfig:
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return self.model_copy(update=values)


# ${NAME} or $NAME
ENV_VAR_PATTERN = re.compile(r"\$\{(?P<braced>[^}]+)\}|\$(?P<bare>[A-Za-z_][A-Za-z0-9_]*)")

# A directory holding this marks the top of a repository; the search stops there
REPOSITORY_MARKER = ".git"


def expand_env_vars(value: str, environ: Mapping[str, str] | None = None) -> str:
    """Replace ${NAME} and $NAME in value with environment variables.

    Args:
        value: A configuration string.
        environ: Variables to read. Defaults to os.environ.

    Returns:
        The expanded string.

    Raises:
        ConfigError: If a referenced variable is not set.
    """
    variables = os.environ if environ is None else environ
    missing: list[str] = []

    def substitute(match: re.Match[str]) -> str:
        name = match.group("braced") or match.group("bare")
        if name not in variables:
            missing.append(name)
            return match.group(0)
        return variables[name]

    expanded = ENV_VAR_PATTERN.sub(substitute, value)
    if missing:
        raise ConfigError(
            f"Undefined environment variable in {value!r}",
            details={"variables": missing},
        )
    return expanded


def find_config_file(start: Path | None = None) -> Path | None:
    """Find .ofcourse.yaml in start or the directories above it.

    The search ends at the first directory that holds a .git entry, or at the
    filesystem root.

    Args:
        start: Directory to start from. Defaults to the working directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    directory = (start or Path.cwd()).absolute()
    while True:
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if (directory / REPOSITORY_MARKER).exists() or directory.parent == directory:
            return None
        directory = directory.parent


def load_config(config_path: Path | None = None) -> ScaffoldConfig:
    """Load scaffolding configuration from a YAML file.

    Args:
        config_path: Path to config file. If None, searches for .ofcourse.yaml
            from the current directory upwards.

    Returns:
        Loaded configuration with env vars expanded. Empty if no file exists.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, refers to
            an unset environment variable, or holds unknown or mistyped values.
    """
    if config_path is None:
        config_path = find_config_file()

    if config_path is None or not config_path.exists():
        return ScaffoldConfig()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read {config_path}", details={"error": str(e)}) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {config_path}")

    values = {
        key: expand_env_vars(value) if isinstance(value, str) else value
        for key, value in data.items()
    }

    try:
        return ScaffoldConfig.model_validate(values)
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise ConfigError(f"Invalid configuration in {config_path}", details={"fields": fields}) from e
