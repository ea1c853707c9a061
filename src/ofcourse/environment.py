"""Read-only access to environment variables for resource callbacks.

Concourse passes metadata such as ``BUILD_ID`` and ``ATC_EXTERNAL_URL`` to
resources through the environment. Callbacks read it through an Environment
rather than ``os.environ``, so tests can hand them a fixed snapshot.

Example:
    env = Environment({"BUILD_ID": "42"})
    env.get("BUILD_ID")           # "42"
    env.get("BUILD_NAME")         # ""
    env.get("BUILD_NAME", "dev")  # "dev"
"""

from __future__ import annotations

import os
from collections.abc import Mapping


class Environment:
    """Immutable snapshot of environment variables.

    Args:
        variables: The variables to expose. If None, the process environment
            is copied at construction time.
    """

    __slots__ = ("_variables",)

    def __init__(self, variables: Mapping[str, str] | None = None) -> None:
        source = os.environ if variables is None else variables
        self._variables: dict[str, str] = dict(source)

    def __repr__(self) -> str:
        return f"Environment({len(self._variables)} variables)"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Environment):
            return NotImplemented
        return self._variables == other._variables

    __hash__ = None  # type: ignore[assignment]

    def get(self, name: str, default: str = "") -> str:
        """Return the value of a variable, or default if it is unset."""
        return self._variables.get(name, default)

    def get_all(self) -> dict[str, str]:
        """Return a copy of every variable in the snapshot."""
        return dict(self._variables)
