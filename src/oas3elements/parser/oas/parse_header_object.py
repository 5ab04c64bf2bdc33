"""Header Object and ``headers`` maps -> ``httpHeaders`` members."""

from __future__ import annotations

import json

from oas3elements.elements import (
    DataStructure,
    Element,
    HttpHeaders,
    MemberElement,
    ObjectElement,
    ParseResult,
)
from oas3elements.parser.annotations import (
    create_annotation,
    create_invalid_member_warning,
    create_member_value_warning,
    create_unsupported_member_warning,
    ensure_object,
)
from oas3elements.parser.context import Context
from oas3elements.parser.fields import parse_boolean, parse_string
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
from oas3elements.parser.references import parse_reference
from oas3elements.parser.results import combine, cond, empty, pipe_parse_result
from oas3elements.serializers.plain import value_of

NAME = "Header Object"
UNSUPPORTED_KEYS = (
    "deprecated",
    "allowEmptyValue",
    "style",
    "explode",
    "allowReserved",
    "examples",
    "content",
)


def _header_value(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def parse_header_object(context: Context, element: Element, header_name: str) -> ParseResult:
    """Parse a Header Object into a ``header-name: value`` member.

    The value is the ``example`` when present, otherwise the value of the
    schema (its example or default), rendered as a string.
    """
    parse_member = cond([
        (has_key("description"), parse_string(NAME)),
        (has_key("required"), parse_boolean(NAME)),
        (has_key("example"), lambda member: ParseResult([member])),
        (has_key("schema"), lambda member: parse_schema_object(context, member.value)),
        (is_extension, empty),
        (has_one_of_keys(UNSUPPORTED_KEYS), create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    def build(header: ObjectElement) -> MemberElement:
        example = header.get("example")
        schema = header.get("schema")
        if example is not None:
            value = example.to_value()
        elif isinstance(schema, DataStructure):
            value = value_of(schema, context.state.data_structures)
        else:
            value = None

        member = MemberElement(header_name, _header_value(value))
        description = header.get("description")
        if description is not None:
            member.description = description.to_value()
        return member

    parse = pipe_parse_result(
        ensure_object(NAME, "warning"),
        parse_object(parse_member),
        build,
    )
    return parse(element)


def parse_headers(context: Context, name: str, member: MemberElement) -> ParseResult:
    """Parse a ``headers`` map into a single ``httpHeaders`` element.

    A ``Content-Type`` entry is ignored; the media type decides it.
    """
    if not is_object(member.value):
        return create_member_value_warning(name, member, "an object")

    results: list[ParseResult] = []
    for header in member.value.members():
        header_name = str(key_of(header))
        if header_name.lower() == "content-type":
            results.append(
                ParseResult([
                    create_annotation(
                        "warning",
                        f"'{name}' 'headers' contains 'Content-Type' header, "
                        "it is ignored in favour of the media type",
                    )
                ])
            )
            continue
        results.append(
            parse_reference(context, "headers", parse_header_object, header.value, header_name)
        )

    result = combine(*results)
    return ParseResult([HttpHeaders(result.content_elements)] + result.annotations)
