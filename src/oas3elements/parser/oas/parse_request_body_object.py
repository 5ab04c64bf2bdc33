"""Request Body Object -> one HTTP request per media type."""

from __future__ import annotations

from oas3elements.elements import Copy, Element, HttpRequest, ObjectElement, ParseResult
from oas3elements.parser.annotations import (
    create_invalid_member_warning,
    ensure_object,
    validate_object_contains_required_keys,
)
from oas3elements.parser.context import Context
from oas3elements.parser.fields import parse_boolean, parse_copy
from oas3elements.parser.oas.parse_media_type_object import parse_content
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import always, has_key, is_extension
from oas3elements.parser.results import cond, empty, pipe_parse_result

NAME = "Request Body Object"
REQUIRED_KEYS = ("content",)


def parse_request_body_object(context: Context, element: Element) -> ParseResult:
    parse_member = cond([
        (has_key("description"), parse_copy(NAME)),
        (has_key("content"), lambda member: parse_content(context, NAME, HttpRequest, member)),
        (has_key("required"), parse_boolean(NAME)),
        (is_extension, empty),
        (always, create_invalid_member_warning(NAME)),
    ])

    def build(body: ObjectElement) -> ParseResult:
        content = body.get("content")
        requests = list(content) if content is not None else []
        description = body.get("description")
        if isinstance(description, Copy):
            for request in requests:
                request.push(description.clone())
        return ParseResult(requests)

    parse = pipe_parse_result(
        ensure_object(NAME),
        validate_object_contains_required_keys(NAME, REQUIRED_KEYS),
        parse_object(parse_member, REQUIRED_KEYS),
        build,
    )
    return parse(element)
