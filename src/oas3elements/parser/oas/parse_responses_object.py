"""Responses Object -> HTTP responses for every declared status code."""

from __future__ import annotations

import re

from oas3elements.elements import ArrayElement, Element, MemberElement, ObjectElement, ParseResult
from oas3elements.parser.annotations import (
    create_invalid_member_warning,
    create_unsupported_member_warning,
    ensure_object,
)
from oas3elements.parser.context import Context
from oas3elements.parser.oas.parse_response_object import parse_response_object
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import always, is_extension, key_of
from oas3elements.parser.references import parse_reference
from oas3elements.parser.results import as_array, cond, empty, pipe_parse_result

NAME = "Responses Object"

_STATUS_CODE = re.compile(r"^[1-5]\d\d$")
_STATUS_RANGE = re.compile(r"^[1-5]XX$")


def is_status_code(member: MemberElement) -> bool:
    # YAML decodes unquoted status codes as integers
    return bool(_STATUS_CODE.match(str(key_of(member))))


def is_unsupported_status(member: MemberElement) -> bool:
    key = str(key_of(member))
    return key == "default" or bool(_STATUS_RANGE.match(key))


def parse_responses_object(context: Context, element: Element) -> ParseResult:
    def parse_status(member: MemberElement) -> ParseResult:
        status_code = str(key_of(member))
        return as_array(
            parse_reference(context, "responses", parse_response_object, member.value, status_code)
        )

    parse_member = cond([
        (is_status_code, parse_status),
        (is_extension, empty),
        (is_unsupported_status, create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    def flatten(responses: ObjectElement) -> ParseResult:
        return ParseResult([
            response
            for group in responses.values()
            if isinstance(group, ArrayElement)
            for response in group
        ])

    parse = pipe_parse_result(
        ensure_object(NAME),
        parse_object(parse_member),
        flatten,
    )
    return parse(element)
