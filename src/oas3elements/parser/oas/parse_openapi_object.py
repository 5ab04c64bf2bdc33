"""OpenAPI Object -> parse result holding the ``api`` category."""

from __future__ import annotations

import logging

from oas3elements.elements import ArrayElement, Category, Element, ObjectElement, ParseResult
from oas3elements.parser.annotations import (
    create_invalid_member_warning,
    create_unsupported_member_warning,
    ensure_object,
    validate_object_contains_required_keys,
)
from oas3elements.parser.context import Context
from oas3elements.parser.oas.parse_components_object import parse_components_object
from oas3elements.parser.oas.parse_info_object import parse_info_object
from oas3elements.parser.oas.parse_openapi import parse_openapi
from oas3elements.parser.oas.parse_paths_object import parse_paths_object
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import (
    always,
    has_key,
    has_one_of_keys,
    is_extension,
    is_object,
)
from oas3elements.parser.results import as_array, cond, empty, pipe_parse_result

logger = logging.getLogger(__name__)

NAME = "OpenAPI Object"
REQUIRED_KEYS = ("openapi", "info", "paths")
UNSUPPORTED_KEYS = ("servers", "security", "tags", "externalDocs")

# components first: paths resolve references against it
ORDERED_KEYS = ("openapi", "info", "components", "paths")


def parse_openapi_object(context: Context, element: Element) -> ParseResult:
    """Parse the root of an OpenAPI document.

    The ``info`` object becomes the ``api`` category. Resources from
    ``paths`` are appended to it in document order, followed by a
    ``dataStructures`` category holding the schemas of ``components``.
    Missing ``openapi``, ``info`` or ``paths`` produce an annotation-only
    result.
    """
    parse_member = cond([
        (has_key("openapi"), lambda member: parse_openapi(context, member)),
        (has_key("info"), lambda member: parse_info_object(context, member.value)),
        (has_key("paths"), lambda member: as_array(parse_paths_object(context, member.value))),
        (has_key("components"), lambda member: parse_components_object(context, member.value)),
        # TODO: expose x- extensions on the api category as extension elements
        (is_extension, empty),
        (has_one_of_keys(UNSUPPORTED_KEYS), create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    def prepare(document: ObjectElement) -> ObjectElement:
        context.state.document = document
        components = document.get("components")
        context.state.components = components if is_object(components) else None
        return document

    def build(document: ObjectElement) -> Category:
        api = document.get("info")

        resources = document.get("paths")
        if isinstance(resources, ArrayElement):
            api.extend(list(resources))

        components = document.get("components")
        if isinstance(components, ObjectElement):
            schemas = components.get("schemas")
            if isinstance(schemas, ObjectElement) and not schemas.is_empty:
                api.push(Category(schemas.values(), meta={"classes": ["dataStructures"]}))

        logger.debug(
            "Parsed API '%s' with %d resources", api.title, len(api.resources)
        )
        return api

    parse = pipe_parse_result(
        ensure_object(NAME),
        validate_object_contains_required_keys(NAME, REQUIRED_KEYS),
        prepare,
        parse_object(parse_member, REQUIRED_KEYS, ORDERED_KEYS),
        build,
    )
    return parse(element)
