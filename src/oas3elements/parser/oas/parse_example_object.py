"""Example Object -> the example value."""

from __future__ import annotations

from oas3elements.elements import Element, ObjectElement, ParseResult
from oas3elements.parser.annotations import (
    create_invalid_member_warning,
    create_unsupported_member_warning,
    ensure_object,
)
from oas3elements.parser.context import Context
from oas3elements.parser.fields import parse_string
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import always, has_key, has_one_of_keys, is_extension
from oas3elements.parser.results import cond, empty, pipe_parse_result

NAME = "Example Object"
UNSUPPORTED_KEYS = ("externalValue",)


def parse_example_object(context: Context, element: Element) -> ParseResult:
    """Return the ``value`` of an Example Object; empty when it has none."""
    parse_member = cond([
        (has_key("summary"), parse_string(NAME)),
        (has_key("description"), parse_string(NAME)),
        (has_key("value"), lambda member: ParseResult([member])),
        (is_extension, empty),
        (has_one_of_keys(UNSUPPORTED_KEYS), create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    def build(example: ObjectElement) -> ParseResult:
        value = example.get("value")
        return ParseResult([value.clone()] if value is not None else [])

    parse = pipe_parse_result(
        ensure_object(NAME, "warning"),
        parse_object(parse_member),
        build,
    )
    return parse(element)
