"""Schema Object -> a data structure element.

Types map onto elements: ``object`` -> object (one member per property),
``array`` -> array (items as content), ``string`` -> string, ``number`` and
``integer`` -> number, ``boolean`` -> boolean, ``enum`` -> enum. A reference
to ``#/components/schemas/<Name>`` becomes an element named ``<Name>``.
"""

from __future__ import annotations

from oas3elements.elements import (
    ArrayElement,
    BooleanElement,
    DataStructure,
    Element,
    EnumElement,
    MemberElement,
    NumberElement,
    ObjectElement,
    ParseResult,
    StringElement,
    refract,
)
from oas3elements.parser.annotations import (
    create_error,
    create_invalid_member_warning,
    create_member_value_warning,
    create_unsupported_member_warning,
    create_warning,
    ensure_object,
)
from oas3elements.parser.context import Context
from oas3elements.parser.fields import parse_boolean, parse_string
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import (
    always,
    has_key,
    has_one_of_keys,
    is_array,
    is_extension,
    is_reference,
    is_string,
)
from oas3elements.parser.references import reference_name
from oas3elements.parser.results import cond, empty, pipe_parse_result

NAME = "Schema Object"
TYPES = ("object", "array", "string", "number", "integer", "boolean")
UNSUPPORTED_KEYS = (
    "allOf",
    "anyOf",
    "oneOf",
    "not",
    "discriminator",
    "readOnly",
    "writeOnly",
    "xml",
    "externalDocs",
    "deprecated",
    "additionalProperties",
)
# Validation keywords without an element counterpart, accepted silently.
VALIDATION_KEYS = (
    "format",
    "multipleOf",
    "maximum",
    "exclusiveMaximum",
    "minimum",
    "exclusiveMinimum",
    "maxLength",
    "minLength",
    "pattern",
    "maxItems",
    "minItems",
    "uniqueItems",
    "maxProperties",
    "minProperties",
)

_PRIMITIVES = {
    "string": StringElement,
    "number": NumberElement,
    "integer": NumberElement,
    "boolean": BooleanElement,
}


def parse_schema_object(context: Context, element: Element) -> ParseResult:
    """Parse a Schema Object (or a reference to one) into a ``dataStructure``."""
    result = parse_schema(context, element)
    if not result.content_elements:
        return result
    return ParseResult(
        [DataStructure(result.content_elements[0])] + result.annotations
    )


def parse_schema(context: Context, element: Element) -> ParseResult:
    """Parse a Schema Object into the bare element it describes."""
    if is_reference(element):
        return _parse_schema_reference(context, element)

    parse_member = cond([
        (has_key("type"), _parse_type),
        (has_key("properties"), lambda member: _parse_properties(context, member)),
        (has_key("required"), _parse_string_array),
        (has_key("items"), lambda member: parse_schema(context, member.value)),
        (has_key("enum"), _parse_enum),
        (has_key("title"), parse_string(NAME)),
        (has_key("description"), parse_string(NAME)),
        (has_key("nullable"), parse_boolean(NAME)),
        (has_one_of_keys(("example", "default")), lambda member: ParseResult([member])),
        (has_one_of_keys(VALIDATION_KEYS), empty),
        (is_extension, empty),
        (has_one_of_keys(UNSUPPORTED_KEYS), create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    parse = pipe_parse_result(
        ensure_object(NAME),
        parse_object(parse_member),
        _build,
    )
    return parse(element)


def _parse_schema_reference(context: Context, element: ObjectElement) -> ParseResult:
    ref_element = element.get("$ref")
    if not is_string(ref_element):
        return create_error("'Reference Object' '$ref' is not a string")

    ref = ref_element.to_value()
    name = reference_name(ref, "schemas")
    if name is None:
        return create_error(
            "'Reference Object' only local references to '#/components/schemas' "
            f"are supported, found '{ref}'"
        )
    if not context.has_component("schemas", name):
        return create_error(f"'{ref}' is not defined")
    return ParseResult([Element(element=name)])


def _parse_type(member: MemberElement) -> ParseResult:
    if is_string(member.value) and member.value.to_value() in TYPES:
        return ParseResult([member])
    return create_warning(
        f"'{NAME}' 'type' must be either object, array, string, number, integer or boolean"
    )


def _parse_properties(context: Context, member: MemberElement) -> ParseResult:
    if not isinstance(member.value, ObjectElement) or member.value.element != "object":
        return create_member_value_warning(NAME, member, "an object")
    return parse_object(lambda prop: parse_schema(context, prop.value))(member.value)


def _parse_string_array(member: MemberElement) -> ParseResult:
    if is_array(member.value) and all(is_string(item) for item in member.value):
        return ParseResult([member])
    return create_member_value_warning(NAME, member, "an array of strings")


def _parse_enum(member: MemberElement) -> ParseResult:
    if is_array(member.value):
        return ParseResult([member])
    return create_member_value_warning(NAME, member, "an array")


def _build(schema: ObjectElement) -> Element:
    type_element = schema.get("type")
    schema_type = type_element.to_value() if type_element is not None else None
    properties = schema.get("properties")
    items = schema.get("items")
    enum = schema.get("enum")

    element: Element
    if enum is not None:
        element = EnumElement()
        element.enumerations = [refract(value) for value in enum.to_value()]
    elif schema_type == "object" or (schema_type is None and properties is not None):
        required = schema.get("required")
        required_names = set(required.to_value()) if required is not None else set()
        members = properties.members() if isinstance(properties, ObjectElement) else []
        for prop in members:
            if prop.key.to_value() in required_names:
                prop.add_type_attribute("required")
        element = ObjectElement(members)
    elif schema_type == "array" or (schema_type is None and items is not None):
        element = ArrayElement([items] if items is not None else [])
    elif schema_type in _PRIMITIVES:
        element = _PRIMITIVES[schema_type]()
    else:
        element = ObjectElement()

    title = schema.get("title")
    if title is not None:
        element.title = title.to_value()
    description = schema.get("description")
    if description is not None:
        element.description = description.to_value()

    example = schema.get("example")
    if example is not None:
        element.set_attribute("samples", ArrayElement([refract(example.to_value())]))
    default = schema.get("default")
    if default is not None:
        element.set_attribute("default", refract(default.to_value()))

    nullable = schema.get("nullable")
    if nullable is not None and nullable.to_value() is True:
        element.add_type_attribute("nullable")

    return element
