"""Resolve Reference Objects against ``components``.

Only local references of the form ``#/components/<section>/<name>`` are
supported. The target is parsed where the reference appears, so the same
component referenced twice yields two independent element trees.
"""

from __future__ import annotations

from typing import Any, Callable

from oas3elements.elements import Element, ParseResult
from oas3elements.parser.annotations import create_error
from oas3elements.parser.context import Context
from oas3elements.parser.predicates import is_reference, is_string
from oas3elements.parser.results import to_parse_result

_NAME = "Reference Object"


def reference_name(ref: str, section: str) -> str | None:
    """Return the component name of *ref* if it points into *section*."""
    prefix = f"#/components/{section}/"
    if ref.startswith(prefix) and len(ref) > len(prefix):
        return ref[len(prefix):]
    return None


def resolve_reference(context: Context, section: str, element: Element) -> ParseResult:
    """Follow Reference Objects until a non-reference component is reached.

    Non-reference elements are returned unchanged.
    """
    seen: list[str] = []
    while is_reference(element):
        ref_element = element.get("$ref")
        if not is_string(ref_element):
            return create_error(f"'{_NAME}' '$ref' is not a string")

        ref = ref_element.to_value()
        name = reference_name(ref, section)
        if name is None:
            return create_error(
                f"'{_NAME}' only local references to '#/components/{section}' "
                f"are supported, found '{ref}'"
            )
        if ref in seen or ref in context.state.references:
            return create_error(f"'{_NAME}' '{ref}' is a circular reference")

        target = context.component(section, name)
        if target is None:
            return create_error(f"'{ref}' is not defined")

        seen.append(ref)
        element = target

    return ParseResult([element])


def parse_reference(
    context: Context,
    section: str,
    parser: Callable[..., Any],
    element: Element,
    *args: Any,
) -> ParseResult:
    """Resolve *element* if it is a Reference Object, then run *parser* on the target."""
    resolved = resolve_reference(context, section, element)
    if resolved.has_errors:
        return resolved

    ref = element.get("$ref").to_value() if is_reference(element) else None
    if ref is not None:
        context.state.references.append(ref)
    try:
        return to_parse_result(parser(context, resolved.content_elements[0], *args))
    finally:
        if ref is not None:
            context.state.references.pop()
