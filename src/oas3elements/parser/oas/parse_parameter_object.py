"""Parameter Object -> a member ``name: value`` describing one parameter."""

from __future__ import annotations

from oas3elements.elements import (
    BooleanElement,
    DataStructure,
    Element,
    MemberElement,
    NumberElement,
    ObjectElement,
    ParseResult,
    StringElement,
    refract,
)
from oas3elements.parser.annotations import (
    create_annotation,
    create_error,
    create_invalid_member_warning,
    create_unsupported_member_warning,
    create_warning,
    ensure_object,
    validate_object_contains_required_keys,
)
from oas3elements.parser.context import Context
from oas3elements.parser.fields import parse_boolean, parse_string
from oas3elements.parser.oas.parse_schema_object import parse_schema_object
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import (
    always,
    has_key,
    has_one_of_keys,
    is_extension,
    is_string,
)
from oas3elements.parser.results import cond, empty, pipe_parse_result

NAME = "Parameter Object"
REQUIRED_KEYS = ("name", "in")
LOCATIONS = ("query", "header", "path", "cookie")
UNSUPPORTED_KEYS = (
    "deprecated",
    "allowEmptyValue",
    "style",
    "explode",
    "allowReserved",
    "examples",
    "content",
)

_PRIMITIVE_TYPES = {
    str: StringElement,
    bool: BooleanElement,
    int: NumberElement,
    float: NumberElement,
}


def _parse_in(member: MemberElement) -> ParseResult:
    if is_string(member.value) and member.value.to_value() in LOCATIONS:
        return ParseResult([member])
    return create_error(
        f"'{NAME}' 'in' must be either 'query', 'header', 'path' or 'cookie'"
    )


def parse_parameter_object(context: Context, element: Element) -> ParseResult:
    """Parse a Parameter Object.

    The result holds a member keyed by the parameter name. Its value comes
    from ``schema`` (string when absent), with ``example`` as content.
    ``description`` becomes the member description and ``required: true``
    the ``required`` type attribute. Cookie parameters are not supported and
    produce only a warning.
    """
    parse_member = cond([
        (has_key("name"), parse_string(NAME, required=True)),
        (has_key("in"), _parse_in),
        (has_key("description"), parse_string(NAME)),
        (has_key("required"), parse_boolean(NAME)),
        (has_key("example"), lambda member: ParseResult([member])),
        (has_key("schema"), lambda member: parse_schema_object(context, member.value)),
        (is_extension, empty),
        (has_one_of_keys(UNSUPPORTED_KEYS), create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    def build(parameter: ObjectElement) -> ParseResult:
        location = parameter.get("in").to_value()
        if location == "cookie":
            return create_warning(f"'{NAME}' 'in' contains unsupported value 'cookie'")

        schema = parameter.get("schema")
        value: Element = (
            schema.content
            if isinstance(schema, DataStructure) and schema.content is not None
            else StringElement()
        )

        example = parameter.get("example")
        if example is not None:
            value = _with_example(value, example.to_value())

        member = MemberElement(parameter.get("name").to_value(), value)

        description = parameter.get("description")
        if description is not None:
            member.description = description.to_value()

        required = parameter.get("required")
        is_required = required is not None and required.to_value() is True
        if is_required:
            member.add_type_attribute("required")

        annotations = []
        if location == "path" and not is_required:
            annotations.append(
                create_annotation(
                    "warning",
                    f"'{NAME}' 'required' must exist and be set to true for path parameters",
                )
            )
        return ParseResult([member] + annotations)

    parse = pipe_parse_result(
        ensure_object(NAME),
        validate_object_contains_required_keys(NAME, REQUIRED_KEYS),
        parse_object(parse_member, REQUIRED_KEYS),
        build,
    )
    return parse(element)


def _with_example(value: Element, example: object) -> Element:
    """Use *example* as the content of *value* when the types agree."""
    element_class = _PRIMITIVE_TYPES.get(type(example))
    if element_class is not None and type(value) is element_class:
        value.content = example
        return value
    return refract(example)
