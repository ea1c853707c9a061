"""CLI entry point for ofcourse.

This module provides the `ofcourse` command, used once to start a new
Concourse resource project. Resource executables themselves do not go through
this command; they call ``ofcourse.check``, ``ofcourse.in_`` and
``ofcourse.out`` directly.

Commands:
    init: Generate a new resource project from the embedded templates

Example:
    ofcourse init -r s3-sync -R registry.example.com/concourse -i s3_sync
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from ofcourse import __version__
from ofcourse.config import load_config
from ofcourse.exceptions import OfcourseError
from ofcourse.logging import setup_logging


def _success(msg: str) -> str:
    """Format success message with green checkmark."""
    return click.style("✓", fg="green") + " " + msg


def _error(msg: str) -> str:
    """Format error message with red X."""
    return click.style("✗", fg="red") + " " + msg


def _info(msg: str) -> str:
    """Format info message with blue arrow."""
    return click.style("→", fg="blue") + " " + msg


@click.group()
@click.version_option(version=__version__, prog_name="ofcourse")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """ofcourse - Concourse resources in Python without the boilerplate."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(logging.DEBUG if verbose else logging.WARNING, include_timestamp=False)


@cli.command()
@click.option("--resource", "-r", default=None, help="Name of Concourse resource")
@click.option(
    "--docker-registry",
    "-R",
    default=None,
    help="Registry where resource docker image will be pushed",
)
@click.option(
    "--import-path",
    "-i",
    default=None,
    help="Python import path where code for resource will be located",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with default values (default: .ofcourse.yaml if present)",
)
@click.pass_context
def init(
    ctx: click.Context,
    resource: str | None,
    docker_registry: str | None,
    import_path: str | None,
    config_path: Path | None,
) -> None:
    """Initialize Concourse resource project."""
    from ofcourse.scaffold import render_project

    verbose = ctx.obj.get("verbose", False)

    try:
        config = load_config(config_path).merged(
            resource=resource,
            docker_registry=docker_registry,
            import_path=import_path,
        )

        # Prompt only for what neither the options nor the config file gave
        resource = config.resource or click.prompt("Resource name")
        docker_registry = config.docker_registry or click.prompt("Docker registry")
        import_path = config.import_path or click.prompt(
            "Python import path", default=resource.replace("-", "_")
        )

        written = render_project(resource, docker_registry, import_path)
    except OfcourseError as e:
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        click.echo(_error(str(e)), err=True)
        sys.exit(1)

    click.echo(_success(f"Created {resource}/ with {len(written)} files"))
    if verbose:
        for path in written:
            click.echo("  " + str(path))

    click.echo()
    click.echo(click.style("Next steps:", bold=True))
    click.echo(f"  cd {resource}")
    click.echo("  pip install -e '.[test]' && pytest")
    click.echo("  " + _info(f"docker build -t {docker_registry.rstrip('/')}/{resource} ."))


def main() -> None:
    """Run the ofcourse command."""
    cli(obj={})


if __name__ == "__main__":
    main()
