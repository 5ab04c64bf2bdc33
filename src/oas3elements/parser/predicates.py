"""Element predicates used by the key-dispatch tables of the parsers."""

from __future__ import annotations

from typing import Any, Callable

from oas3elements.elements import (
    Annotation,
    ArrayElement,
    BooleanElement,
    Element,
    MemberElement,
    NumberElement,
    ObjectElement,
    StringElement,
)


def is_object(element: Any) -> bool:
    return isinstance(element, ObjectElement) and element.element == "object"


def is_array(element: Any) -> bool:
    return isinstance(element, ArrayElement) and element.element == "array"


def is_string(element: Any) -> bool:
    return isinstance(element, StringElement) and element.element == "string"


def is_boolean(element: Any) -> bool:
    return isinstance(element, BooleanElement)


def is_number(element: Any) -> bool:
    return isinstance(element, NumberElement)


def is_annotation(element: Any) -> bool:
    return isinstance(element, Annotation)


def key_of(member: MemberElement) -> Any:
    return member.key.to_value() if member.key is not None else None


def has_key(key: str) -> Callable[[MemberElement], bool]:
    """Return a predicate matching members whose key is *key*."""

    def predicate(member: MemberElement) -> bool:
        return key_of(member) == key

    return predicate


def has_one_of_keys(keys: Any) -> Callable[[MemberElement], bool]:
    """Return a predicate matching members whose key is in *keys*."""
    key_set = frozenset(keys)

    def predicate(member: MemberElement) -> bool:
        return key_of(member) in key_set

    return predicate


def is_extension(member: MemberElement) -> bool:
    """Specification extensions are keys starting with ``x-``."""
    key = key_of(member)
    return isinstance(key, str) and key.startswith("x-")


def is_reference(element: Element) -> bool:
    """True for a Reference Object (an object with a ``$ref`` key)."""
    return is_object(element) and element.has_key("$ref")


def always(_: Any) -> bool:
    return True
