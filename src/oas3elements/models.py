"""Pydantic models shared across oas3elements.

**Configuration models** -- loaded from ``./oas3elements.json`` and the
environment, see :mod:`oas3elements.config`:
    :class:`ParseOptions` and :class:`ProjectConfig`.

**Report models** -- flat views of parse results used by the CLI for JSON
and table output:
    :class:`AnnotationRecord` and :class:`ParseSummary`.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ParseOptions(BaseModel):
    """Switches that control what the OpenAPI parser generates.

    Example::

        ParseOptions(generate_message_body=False)
    """

    model_config = ConfigDict(extra="forbid")

    generate_message_body: bool = Field(
        default=True,
        description="Generate a JSON messageBody asset from the schema when a "
        "JSON media type has no example",
    )
    generate_message_body_schema: bool = Field(
        default=True,
        description="Attach the media type schema as a JSON Schema "
        "messageBodySchema asset",
    )


class ProjectConfig(BaseModel):
    """Contents of the project-local ``oas3elements.json`` file."""

    model_config = ConfigDict(extra="allow")

    options: ParseOptions = Field(default_factory=ParseOptions)


class AnnotationRecord(BaseModel):
    """A single warning or error taken from a parse result."""

    severity: str = Field(description="warning or error")
    message: str


class ParseSummary(BaseModel):
    """Counts describing a parse result, printed by ``oas3elements parse``."""

    title: Optional[str] = None
    version: Optional[str] = None
    resources: int = 0
    transitions: int = 0
    data_structures: int = 0
    warnings: int = 0
    errors: int = 0
