"""Path Item Object -> a resource holding one transition per operation."""

from __future__ import annotations

import re

from oas3elements.elements import (
    Copy,
    Element,
    MemberElement,
    ObjectElement,
    ParseResult,
    Resource,
    Transition,
)
from oas3elements.parser.annotations import (
    create_annotation,
    create_invalid_member_warning,
    create_unsupported_member_warning,
    ensure_object,
)
from oas3elements.parser.context import Context
from oas3elements.parser.fields import parse_copy, parse_string
from oas3elements.parser.oas.parse_operation_object import parse_operation_object
from oas3elements.parser.oas.parse_parameter_objects import (
    href_variables_from,
    parameter_names,
    parse_parameter_objects,
)
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import (
    always,
    has_key,
    has_one_of_keys,
    is_extension,
    key_of,
)
from oas3elements.parser.results import cond, empty, pipe_parse_result

NAME = "Path Item Object"
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
UNSUPPORTED_KEYS = ("servers", "$ref")

_PATH_VARIABLE = re.compile(r"\{([^{}/]+)\}")


def path_variables(path: str) -> list[str]:
    """Return the ``{variable}`` names of a path template in order, without repeats."""
    names: list[str] = []
    for name in _PATH_VARIABLE.findall(path):
        if name not in names:
            names.append(name)
    return names


def parse_path_item_object(context: Context, member: MemberElement) -> ParseResult:
    """Parse a ``path: Path Item Object`` member into a resource."""
    path = key_of(member)

    parse_member = cond([
        (has_key("summary"), parse_string(NAME)),
        (has_key("description"), parse_copy(NAME)),
        (has_key("parameters"), lambda m: parse_parameter_objects(context, NAME, m.value)),
        (has_one_of_keys(HTTP_METHODS), lambda m: parse_operation_object(context, m)),
        (is_extension, empty),
        (has_one_of_keys(UNSUPPORTED_KEYS), create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    def build(item: ObjectElement) -> ParseResult:
        resource = Resource()
        resource.href = path

        summary = item.get("summary")
        if summary is not None:
            resource.title = summary.to_value()

        description = item.get("description")
        if isinstance(description, Copy):
            resource.push(description)

        parameters = item.get("parameters")
        href_variables = href_variables_from(parameters)
        if href_variables is not None:
            resource.href_variables = href_variables

        transitions = [
            value
            for key, value in item.items()
            if key in HTTP_METHODS and isinstance(value, Transition)
        ]
        resource.extend(transitions)

        return ParseResult(
            [resource] + _undeclared_variable_warnings(path, parameters, transitions)
        )

    parse = pipe_parse_result(
        ensure_object(NAME, "warning"),
        parse_object(parse_member),
        build,
    )
    return parse(member.value)


def _undeclared_variable_warnings(
    path: str, parameters: Element | None, transitions: list[Transition]
) -> list[Element]:
    declared = parameter_names(parameters, "path")
    missing: list[str] = []
    for variable in path_variables(path):
        if variable in declared:
            continue
        if transitions and all(
            t.href_variables is not None and t.href_variables.has_key(variable)
            for t in transitions
        ):
            continue
        missing.append(variable)

    return [
        create_annotation(
            "warning",
            f"Path '{path}' contains variable '{variable}' which is not declared "
            f"in the parameters section of the '{NAME}'",
        )
        for variable in missing
    ]
