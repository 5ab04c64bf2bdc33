"""Operation Object -> a transition.

Every request (one per request body media type, or a single bare request)
is paired with every response, giving one HTTP transaction per pair.
"""

from __future__ import annotations

from oas3elements.elements import (
    ArrayElement,
    Copy,
    HttpHeaders,
    HttpRequest,
    HttpTransaction,
    MemberElement,
    ObjectElement,
    ParseResult,
    Transition,
)
from oas3elements.parser.annotations import (
    create_invalid_member_warning,
    create_unsupported_member_warning,
    ensure_object,
    validate_object_contains_required_keys,
)
from oas3elements.parser.context import Context
from oas3elements.parser.fields import parse_copy, parse_string
from oas3elements.parser.oas.parse_parameter_objects import (
    headers_from,
    href_variables_from,
    parse_parameter_objects,
)
from oas3elements.parser.oas.parse_request_body_object import parse_request_body_object
from oas3elements.parser.oas.parse_responses_object import parse_responses_object
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import always, has_key, has_one_of_keys, is_extension, key_of
from oas3elements.parser.references import parse_reference
from oas3elements.parser.results import as_array, cond, empty, pipe_parse_result

NAME = "Operation Object"
REQUIRED_KEYS = ("responses",)
UNSUPPORTED_KEYS = ("tags", "externalDocs", "callbacks", "deprecated", "security", "servers")


def parse_operation_object(context: Context, member: MemberElement) -> ParseResult:
    """Parse a ``method: Operation Object`` member of a Path Item Object."""
    method = str(key_of(member)).upper()

    parse_member = cond([
        (has_key("summary"), parse_string(NAME)),
        (has_key("description"), parse_copy(NAME)),
        (has_key("operationId"), parse_string(NAME)),
        (has_key("parameters"), lambda m: parse_parameter_objects(context, NAME, m.value)),
        (
            has_key("requestBody"),
            lambda m: as_array(
                parse_reference(context, "requestBodies", parse_request_body_object, m.value)
            ),
        ),
        (has_key("responses"), lambda m: as_array(parse_responses_object(context, m.value))),
        (is_extension, empty),
        (has_one_of_keys(UNSUPPORTED_KEYS), create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    def build(operation: ObjectElement) -> Transition:
        transition = Transition()

        summary = operation.get("summary")
        if summary is not None:
            transition.title = summary.to_value()

        operation_id = operation.get("operationId")
        if operation_id is not None:
            transition.id = operation_id.to_value()

        description = operation.get("description")
        if isinstance(description, Copy):
            transition.push(description)

        parameters = operation.get("parameters")
        href_variables = href_variables_from(parameters)
        if href_variables is not None:
            transition.href_variables = href_variables

        request_body = operation.get("requestBody")
        requests = list(request_body) if isinstance(request_body, ArrayElement) else []
        if not requests:
            requests = [HttpRequest()]

        headers = headers_from(parameters)
        for request in requests:
            request.method = method
            if headers is not None:
                merged = request.headers.clone() if request.headers is not None else HttpHeaders()
                merged.extend([header.clone() for header in headers.members()])
                request.headers = merged

        responses = operation.get("responses")
        for response in responses if isinstance(responses, ArrayElement) else []:
            for request in requests:
                transition.push(HttpTransaction([request.clone(), response.clone()]))

        return transition

    parse = pipe_parse_result(
        ensure_object(NAME, "warning"),
        validate_object_contains_required_keys(NAME, REQUIRED_KEYS),
        parse_object(parse_member, REQUIRED_KEYS),
        build,
    )
    return parse(member.value)
