"""Pydantic models for the Concourse resource protocol.

This module contains the data model shared by the codec, the dispatcher and
resource implementations:

- Type aliases for the protocol's maps (Source, Params, Version)
- Metadata items (NameVal) and the Metadata list
- Input envelopes read from stdin (CheckInput, InInput, OutInput)
- The in/out output envelope written to stdout (InOutOutput)

A Version of ``None`` is an unknown version, which Concourse sends on the
first check of a resource. An empty dict is a known version that happens to
have no fields. The two are kept apart everywhere: version fields are typed
``Version | None`` and are never defaulted to ``{}``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Pipeline-level configuration of a resource, from the `source` block
Source = dict[str, Any]

# Parameters of a `get` or `put` step
Params = dict[str, Any]

# A point in a resource's version history, string keys to string values
Version = dict[str, str]


class NameVal(BaseModel):
    """One item of a Metadata list, shown in the Concourse UI."""

    name: str = Field(..., description="Display name")
    value: str = Field(..., description="Display value")

    model_config = ConfigDict(frozen=True)


# Ordered name/value pairs; duplicate names are allowed
Metadata = list[NameVal]


# =============================================================================
# INPUT ENVELOPES
# =============================================================================


class _InputEnvelope(BaseModel):
    """Common behavior of the three stdin envelopes.

    Unknown fields are ignored. A missing or null ``source``/``params`` reads
    as an empty mapping.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("source", "params", mode="before", check_fields=False)
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class CheckInput(_InputEnvelope):
    """The stdin of an /opt/resource/check command."""

    source: Source = Field(default_factory=dict, description="Resource source configuration")
    version: Version | None = Field(default=None, description="Latest known version, or null")


class InInput(_InputEnvelope):
    """The stdin of an /opt/resource/in command."""

    source: Source = Field(default_factory=dict, description="Resource source configuration")
    params: Params = Field(default_factory=dict, description="Parameters of the get step")
    version: Version | None = Field(default=None, description="Version to fetch")


class OutInput(_InputEnvelope):
    """The stdin of an /opt/resource/out command."""

    source: Source = Field(default_factory=dict, description="Resource source configuration")
    params: Params = Field(default_factory=dict, description="Parameters of the put step")


# =============================================================================
# OUTPUT ENVELOPE
# =============================================================================


class InOutOutput(BaseModel):
    """The stdout of the in and out commands.

    ``version`` is serialized as ``null`` when unknown. ``metadata`` is always
    a list, so a resource returning ``None`` still produces ``[]``.
    """

    version: Version | None = Field(default=None, description="Fetched or created version")
    metadata: Metadata = Field(default_factory=list, description="Display metadata")

    @field_validator("metadata", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value
