"""Parse every member of an object element through a dispatch function."""

from __future__ import annotations

from typing import Callable, Sequence

from oas3elements.elements import Element, MemberElement, ObjectElement, ParseResult
from oas3elements.parser.predicates import key_of
from oas3elements.parser.results import to_parse_result


def parse_object(
    parse_member: Callable[[MemberElement], object],
    required_keys: Sequence[str] = (),
    ordered_keys: Sequence[str] = (),
) -> Callable[[ObjectElement], ParseResult]:
    """Return a step that parses each member of an object.

    *parse_member* receives a member and returns a parse result (or an
    element). Content that is not already a member is wrapped in a member
    carrying the original key; a member whose result is empty is dropped.

    A member whose result holds an error and no content is dropped; its
    annotations are kept. When that member is one of *required_keys*, the whole object fails
    and the result holds only annotations.

    Members listed in *ordered_keys* are parsed first, in that order, so that
    later members can rely on state they set up (``components`` before
    ``paths``). The output object keeps the original member order.
    """

    def order(member: MemberElement) -> int:
        key = key_of(member)
        return ordered_keys.index(key) if key in ordered_keys else len(ordered_keys)

    def parse(element: ObjectElement) -> ParseResult:
        members = element.members()
        parsed: dict[int, list[Element]] = {}
        annotations: list[Element] = []

        for index in sorted(range(len(members)), key=lambda i: order(members[i])):
            member = members[index]
            result = to_parse_result(parse_member(member))
            annotations.extend(result.annotations)

            if result.has_errors and not result.content_elements:
                if key_of(member) in required_keys:
                    return ParseResult(annotations)
                continue

            parsed[index] = [
                value if isinstance(value, MemberElement) else MemberElement(member.key.clone(), value)
                for value in result.content_elements
            ]

        output = ObjectElement(
            [value for index in sorted(parsed) for value in parsed[index]]
        )
        return ParseResult([output] + annotations)

    return parse
