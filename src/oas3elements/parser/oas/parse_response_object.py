"""Response Object -> one HTTP response per media type."""

from __future__ import annotations

from oas3elements.elements import (
    Copy,
    Element,
    HttpHeaders,
    HttpResponse,
    ObjectElement,
    ParseResult,
)
from oas3elements.parser.annotations import (
    create_annotation,
    create_invalid_member_warning,
    create_unsupported_member_warning,
    ensure_object,
)
from oas3elements.parser.context import Context
from oas3elements.parser.fields import parse_copy
from oas3elements.parser.oas.parse_header_object import parse_headers
from oas3elements.parser.oas.parse_media_type_object import parse_content
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import always, has_key, has_one_of_keys, is_extension
from oas3elements.parser.results import cond, empty, pipe_parse_result

NAME = "Response Object"
UNSUPPORTED_KEYS = ("links",)


def parse_response_object(context: Context, element: Element, status_code: str) -> ParseResult:
    """Parse a Response Object for *status_code*.

    Every response carries the status code, the response headers and the
    description as copy. Without ``content`` a single response is produced.
    A missing ``description`` is reported as a warning so the response is
    still usable.
    """
    parse_member = cond([
        (has_key("description"), parse_copy(NAME)),
        (has_key("headers"), lambda member: parse_headers(context, NAME, member)),
        (has_key("content"), lambda member: parse_content(context, NAME, HttpResponse, member)),
        (is_extension, empty),
        (has_one_of_keys(UNSUPPORTED_KEYS), create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    def build(response: ObjectElement) -> ParseResult:
        annotations = []
        # An invalid description is dropped by the member parser but was still given.
        if not element.has_key("description"):
            annotations.append(
                create_annotation(
                    "warning", f"'{NAME}' is missing required property 'description'"
                )
            )

        content = response.get("content")
        messages = list(content) if content is not None else []
        if not messages:
            messages = [HttpResponse()]

        headers = response.get("headers")
        description = response.get("description")

        for message in messages:
            message.status_code = status_code
            if isinstance(headers, HttpHeaders) and not headers.is_empty:
                merged = message.headers.clone() if message.headers is not None else HttpHeaders()
                merged.extend([member.clone() for member in headers.members()])
                message.headers = merged
            if isinstance(description, Copy):
                message.push(description.clone())

        return ParseResult(messages + annotations)

    parse = pipe_parse_result(
        ensure_object(NAME, "warning"),
        parse_object(parse_member),
        build,
    )
    return parse(element)
