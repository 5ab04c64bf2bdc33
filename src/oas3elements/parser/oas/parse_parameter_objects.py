"""Parse a ``parameters`` array and group the parameters by location."""

from __future__ import annotations

from typing import Optional

from oas3elements.elements import (
    Element,
    HrefVariables,
    HttpHeaders,
    MemberElement,
    ObjectElement,
    ParseResult,
)
from oas3elements.parser.annotations import create_warning
from oas3elements.parser.context import Context
from oas3elements.parser.oas.parse_parameter_object import parse_parameter_object
from oas3elements.parser.predicates import is_array, is_string
from oas3elements.parser.references import resolve_reference
from oas3elements.parser.results import combine

# Locations converted into href variables; the rest become headers.
HREF_LOCATIONS = ("path", "query")


def parse_parameter_objects(context: Context, name: str, element: Element) -> ParseResult:
    """Parse every Parameter Object of a ``parameters`` array.

    Args:
        context: The parse context.
        name: Name of the object owning the array, used in warnings.
        element: The ``parameters`` value.

    Returns:
        A parse result holding one object whose members group the parameters
        by their ``in`` value. ``path`` and ``query`` groups are
        ``hrefVariables`` elements, ``header`` is an ``httpHeaders`` element.
        The object can be treated as a named tuple.
    """
    if not is_array(element):
        return create_warning(f"'{name}' 'parameters' is not an array")

    results: list[ParseResult] = []
    groups: dict[str, list[MemberElement]] = {}

    for item in element:
        resolved = resolve_reference(context, "parameters", item)
        if resolved.has_errors:
            results.append(resolved)
            continue

        parameter = resolved.content_elements[0]
        result = parse_parameter_object(context, parameter)
        results.append(ParseResult(result.annotations))

        location = parameter.get("in") if isinstance(parameter, ObjectElement) else None
        for member in result.content_elements:
            if is_string(location) and isinstance(member, MemberElement):
                groups.setdefault(location.to_value(), []).append(member)

    grouped = ObjectElement()
    for location, members in groups.items():
        if location in HREF_LOCATIONS:
            grouped.set(location, HrefVariables(members))
        else:
            grouped.set(location, HttpHeaders(members))

    return combine(ParseResult([grouped]), *results)


def href_variables_from(parameters: Optional[Element]) -> Optional[HrefVariables]:
    """Merge the ``path`` and ``query`` groups of parsed parameters."""
    if not isinstance(parameters, ObjectElement):
        return None

    members = [
        member.clone()
        for location in HREF_LOCATIONS
        if isinstance(parameters.get(location), HrefVariables)
        for member in parameters.get(location).members()
    ]
    return HrefVariables(members) if members else None


def headers_from(parameters: Optional[Element]) -> Optional[HttpHeaders]:
    if not isinstance(parameters, ObjectElement):
        return None
    headers = parameters.get("header")
    return headers.clone() if isinstance(headers, HttpHeaders) else None


def parameter_names(parameters: Optional[Element], location: str) -> set[str]:
    if not isinstance(parameters, ObjectElement):
        return set()
    group = parameters.get(location)
    if not isinstance(group, ObjectElement):
        return set()
    return {str(key) for key in group.keys()}
