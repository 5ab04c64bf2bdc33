"""Info Object -> the ``api`` category (title, version, description)."""

from __future__ import annotations

from oas3elements.elements import Category, Copy, Element, ObjectElement, ParseResult
from oas3elements.parser.annotations import (
    create_invalid_member_warning,
    create_unsupported_member_warning,
    ensure_object,
    validate_object_contains_required_keys,
)
from oas3elements.parser.context import Context
from oas3elements.parser.fields import parse_copy, parse_string
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import always, has_key, has_one_of_keys, is_extension
from oas3elements.parser.results import cond, empty, pipe_parse_result

NAME = "Info Object"
REQUIRED_KEYS = ("title", "version")
UNSUPPORTED_KEYS = ("termsOfService", "contact", "license")


def parse_info_object(context: Context, element: Element) -> ParseResult:
    parse_member = cond([
        (has_key("title"), parse_string(NAME, required=True)),
        (has_key("version"), parse_string(NAME, required=True)),
        (has_key("description"), parse_copy(NAME)),
        (is_extension, empty),
        (has_one_of_keys(UNSUPPORTED_KEYS), create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    def build(info: ObjectElement) -> Category:
        api = Category(meta={"classes": ["api"]})
        api.title = info.get("title").to_value()
        api.version = info.get("version").to_value()
        description = info.get("description")
        if isinstance(description, Copy):
            api.push(description)
        return api

    parse = pipe_parse_result(
        ensure_object(NAME),
        validate_object_contains_required_keys(NAME, REQUIRED_KEYS),
        parse_object(parse_member, REQUIRED_KEYS),
        build,
    )
    return parse(element)
