"""Validate the ``openapi`` version member."""

from __future__ import annotations

import re

from oas3elements.elements import MemberElement, ParseResult
from oas3elements.parser.annotations import create_error, create_warning
from oas3elements.parser.context import Context
from oas3elements.parser.predicates import is_string
from oas3elements.parser.results import combine

_VERSION = re.compile(r"^3\.(\d+)\.(\d+)$")
_SUPPORTED_MINOR_VERSION = 0


def parse_openapi(context: Context, member: MemberElement) -> ParseResult:
    """Accept ``3.0.x``; warn for other ``3.x.y`` releases; reject anything else."""
    if not is_string(member.value):
        return create_error("'OpenAPI Object' 'openapi' is not a string")

    version = member.value.to_value()
    match = _VERSION.match(version)
    if match is None:
        return create_error("Unsupported OpenAPI version")

    if int(match.group(1)) != _SUPPORTED_MINOR_VERSION:
        return combine(
            ParseResult([member]),
            create_warning(f"Version '{version}' is not fully supported"),
        )

    return ParseResult([member])
