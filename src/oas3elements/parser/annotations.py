"""Warning and error annotations.

Every message follows the same shape so consumers can match on them: the
OpenAPI object name in single quotes, optionally followed by the offending
key, then the problem::

    'Operation Object' contains unsupported key 'tags'
    'Info Object' is missing required property 'title'
    'Media Type Object' 'examples' is not an object
"""

from __future__ import annotations

from typing import Callable

from oas3elements.elements import Annotation, Element, MemberElement, ObjectElement, ParseResult
from oas3elements.parser.predicates import is_object, key_of


def create_annotation(class_name: str, message: str) -> Annotation:
    return Annotation(message, meta={"classes": [class_name]})


def create_warning(message: str) -> ParseResult:
    """A parse result holding a single warning."""
    return ParseResult([create_annotation("warning", message)])


def create_error(message: str) -> ParseResult:
    """A parse result holding a single error."""
    return ParseResult([create_annotation("error", message)])


def create_unsupported_member_warning(name: str) -> Callable[[MemberElement], ParseResult]:
    def warn(member: MemberElement) -> ParseResult:
        return create_warning(f"'{name}' contains unsupported key '{key_of(member)}'")

    return warn


def create_invalid_member_warning(name: str) -> Callable[[MemberElement], ParseResult]:
    def warn(member: MemberElement) -> ParseResult:
        return create_warning(f"'{name}' contains invalid key '{key_of(member)}'")

    return warn


def create_member_value_warning(name: str, member: MemberElement, expected: str) -> ParseResult:
    """``'<name>' '<key>' is not <expected>`` as a warning."""
    return create_warning(f"'{name}' '{key_of(member)}' is not {expected}")


def create_member_value_error(name: str, member: MemberElement, expected: str) -> ParseResult:
    """``'<name>' '<key>' is not <expected>`` as an error."""
    return create_error(f"'{name}' '{key_of(member)}' is not {expected}")


def validate_object_contains_required_keys(
    name: str, required_keys: tuple[str, ...] | list[str]
) -> Callable[[ObjectElement], Element]:
    """Return a step that errors for every required key missing from an object."""

    def validate(element: ObjectElement) -> Element:
        missing = [key for key in required_keys if not element.has_key(key)]
        if not missing:
            return element
        return ParseResult(
            [
                create_annotation(
                    "error", f"'{name}' is missing required property '{key}'"
                )
                for key in missing
            ]
        )

    return validate


def ensure_object(name: str, severity: str = "error") -> Callable[[Element], Element]:
    """Return a step that passes objects through and annotates anything else."""

    def check(element: Element) -> Element:
        if is_object(element):
            return element
        return ParseResult([create_annotation(severity, f"'{name}' is not an object")])

    return check
