"""Components Object -> parsed schemas plus the raw reusable objects.

Schemas are parsed eagerly into data structures (content id = schema name)
and registered on the context for message body generation. Parameters,
responses, request bodies, headers and examples stay raw; Reference Objects
pointing at them are parsed where they are used.
"""

from __future__ import annotations

from oas3elements.elements import Element, MemberElement, ParseResult
from oas3elements.parser.annotations import (
    create_invalid_member_warning,
    create_member_value_warning,
    create_unsupported_member_warning,
    ensure_object,
)
from oas3elements.parser.context import Context
from oas3elements.parser.oas.parse_schema_object import parse_schema_object
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import (
    always,
    has_key,
    has_one_of_keys,
    is_extension,
    is_object,
    key_of,
)
from oas3elements.parser.results import cond, empty, pipe_parse_result

NAME = "Components Object"
REFERENCEABLE_SECTIONS = ("parameters", "responses", "requestBodies", "headers", "examples")
UNSUPPORTED_KEYS = ("securitySchemes", "links", "callbacks")


def parse_components_object(context: Context, element: Element) -> ParseResult:
    def parse_schema_member(member: MemberElement) -> ParseResult:
        name = key_of(member)
        result = parse_schema_object(context, member.value)
        for data_structure in result.content_elements:
            data_structure.content.id = name
            context.state.data_structures[name] = data_structure.content
        return result

    def parse_schemas(member: MemberElement) -> ParseResult:
        if not is_object(member.value):
            return create_member_value_warning(NAME, member, "an object")
        return parse_object(parse_schema_member)(member.value)

    def parse_section(member: MemberElement) -> ParseResult:
        if not is_object(member.value):
            return create_member_value_warning(NAME, member, "an object")
        return ParseResult([member])

    parse_member = cond([
        (has_key("schemas"), parse_schemas),
        (has_one_of_keys(REFERENCEABLE_SECTIONS), parse_section),
        (is_extension, empty),
        (has_one_of_keys(UNSUPPORTED_KEYS), create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    parse = pipe_parse_result(
        ensure_object(NAME, "warning"),
        parse_object(parse_member),
    )
    return parse(element)
