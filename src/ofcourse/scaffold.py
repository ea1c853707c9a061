"""Generate the skeleton of a new Concourse resource project.

The templates under ``ofcourse/templates/resource`` are expanded with the
resource name, the Docker registry and the Python import path, and written
into a new directory named after the resource:

    my-resource/
        Dockerfile
        README.md
        pyproject.toml
        src/my_resource/__init__.py
        src/my_resource/commands.py
        src/my_resource/resource.py
        tests/test_resource.py

Templates use ``string.Template`` placeholders such as ``${resource}``; a
literal dollar sign in a template is written ``$$``.
"""

from __future__ import annotations

import keyword
from importlib.resources import files
from pathlib import Path
from string import Template

from ofcourse.constants import TEMPLATE_DIR, TEMPLATE_PACKAGE, TEMPLATE_SUFFIX
from ofcourse.exceptions import ScaffoldError
from ofcourse.logging import get_logger

logger = get_logger(__name__)

# Target path (itself a template) -> template file under templates/resource
TEMPLATES: dict[str, str] = {
    "Dockerfile": "Dockerfile",
    "README.md": "README.md",
    "pyproject.toml": "pyproject.toml",
    "src/${package_dir}/__init__.py": "__init__.py",
    "src/${package_dir}/commands.py": "commands.py",
    "src/${package_dir}/resource.py": "resource.py",
    "tests/test_resource.py": "test_resource.py",
}


def validate_import_path(import_path: str) -> None:
    """Check that import_path is a dotted Python identifier.

    Raises:
        ScaffoldError: If any segment is not an identifier or is a keyword.
    """
    parts = import_path.split(".")
    for part in parts:
        if not part.isidentifier() or keyword.iskeyword(part):
            raise ScaffoldError(
                f"Invalid import path: {import_path!r}",
                details={"segment": part},
            )


def validate_resource_name(resource: str) -> None:
    """Check that resource can be used as a single directory name.

    Raises:
        ScaffoldError: If the name is empty, a relative reference, or contains
            a path separator.
    """
    if not resource or resource in (".", "..") or "/" in resource or "\\" in resource:
        raise ScaffoldError(f"Invalid resource name: {resource!r}")


def template_values(resource: str, docker_registry: str, import_path: str) -> dict[str, str]:
    """Return the placeholder values available to every template."""
    return {
        "resource": resource,
        "docker_registry": docker_registry.rstrip("/"),
        "import_path": import_path,
        "package_dir": import_path.replace(".", "/"),
        "top_package": import_path.split(".")[0],
    }


def load_template(name: str) -> str:
    """Read one embedded template by name."""
    resource = files(TEMPLATE_PACKAGE) / TEMPLATE_DIR / (name + TEMPLATE_SUFFIX)
    return resource.read_text(encoding="utf-8")


def render_template(text: str, values: dict[str, str], *, name: str = "<template>") -> str:
    """Substitute values into a template.

    Raises:
        ScaffoldError: If the template uses an unknown placeholder or a stray $.
    """
    try:
        return Template(text).substitute(values)
    except (KeyError, ValueError) as e:
        raise ScaffoldError(f"Failed to render template {name}", details={"error": str(e)}) from e


def render_project(
    resource: str,
    docker_registry: str,
    import_path: str,
    dest: Path | None = None,
) -> list[Path]:
    """Create a new resource project directory from the embedded templates.

    Args:
        resource: Name of the resource; the project directory gets this name.
        docker_registry: Registry the resource image is pushed to.
        import_path: Dotted Python package for the resource code.
        dest: Directory to create the project in. Defaults to the working
            directory.

    Returns:
        Paths of the files written, in template order.

    Raises:
        ScaffoldError: If a value is missing or invalid, the project directory
            already exists, or a file cannot be written.
    """
    for option, value in (
        ("resource", resource),
        ("docker_registry", docker_registry),
        ("import_path", import_path),
    ):
        if not value:
            raise ScaffoldError(f"Missing value for {option}")

    validate_resource_name(resource)
    validate_import_path(import_path)

    root = (dest or Path.cwd()) / resource
    try:
        root.mkdir()
    except FileExistsError as e:
        raise ScaffoldError(f"Directory already exists: {root}") from e
    except OSError as e:
        raise ScaffoldError(f"Failed to create {root}", details={"error": str(e)}) from e

    values = template_values(resource, docker_registry, import_path)
    written: list[Path] = []

    for target, name in TEMPLATES.items():
        path = root / render_template(target, values, name=target)
        content = render_template(load_template(name), values, name=name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ScaffoldError(f"Failed to write {path}", details={"error": str(e)}) from e
        logger.debug("Wrote template", extra={"template": name, "path": str(path)})
        written.append(path)

    logger.info("Created resource project", extra={"resource": resource, "files": len(written)})
    return written
