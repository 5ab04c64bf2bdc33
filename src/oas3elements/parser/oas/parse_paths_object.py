"""Paths Object -> resources, one per path, in document order."""

from __future__ import annotations

from oas3elements.elements import Element, MemberElement, ParseResult
from oas3elements.parser.annotations import create_invalid_member_warning, ensure_object
from oas3elements.parser.context import Context
from oas3elements.parser.oas.parse_path_item_object import parse_path_item_object
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import always, is_extension, key_of
from oas3elements.parser.results import cond, empty, pipe_parse_result

NAME = "Paths Object"


def is_path_field(member: MemberElement) -> bool:
    key = key_of(member)
    return isinstance(key, str) and key.startswith("/")


def parse_paths_object(context: Context, element: Element) -> ParseResult:
    parse_member = cond([
        (is_path_field, lambda member: parse_path_item_object(context, member)),
        (is_extension, empty),
        (always, create_invalid_member_warning(NAME)),
    ])

    parse = pipe_parse_result(
        ensure_object(NAME),
        parse_object(parse_member),
        lambda paths: ParseResult(paths.values()),
    )
    return parse(element)
