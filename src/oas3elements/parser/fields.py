"""Parsers for scalar fields shared by several OpenAPI objects."""

from __future__ import annotations

from typing import Callable

from oas3elements.elements import Copy, MemberElement, ParseResult
from oas3elements.parser.annotations import (
    create_member_value_error,
    create_member_value_warning,
)
from oas3elements.parser.predicates import is_boolean, is_string


def parse_string(name: str, required: bool = False) -> Callable[[MemberElement], ParseResult]:
    """Keep a member whose value is a string.

    Anything else is a warning, or an error for *required* members.
    """

    def parse(member: MemberElement) -> ParseResult:
        if is_string(member.value):
            return ParseResult([member])
        if required:
            return create_member_value_error(name, member, "a string")
        return create_member_value_warning(name, member, "a string")

    return parse


def parse_boolean(name: str) -> Callable[[MemberElement], ParseResult]:
    def parse(member: MemberElement) -> ParseResult:
        if is_boolean(member.value):
            return ParseResult([member])
        return create_member_value_warning(name, member, "a boolean")

    return parse


def parse_copy(name: str) -> Callable[[MemberElement], ParseResult]:
    """Turn a string ``description`` member into a ``copy`` element."""

    def parse(member: MemberElement) -> ParseResult:
        if is_string(member.value):
            return ParseResult([Copy(member.value.to_value())])
        return create_member_value_warning(name, member, "a string")

    return parse
