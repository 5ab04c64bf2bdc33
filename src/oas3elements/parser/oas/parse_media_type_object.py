"""Media Type Object -> an HTTP request or response message.

The media type becomes the ``Content-Type`` header of the message. For JSON
media types the example is attached as a compact ``messageBody`` asset; when
there is no example, one is generated from the schema. The schema itself is
attached as a ``dataStructure`` and, for JSON media types, as a JSON Schema
``messageBodySchema`` asset.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from oas3elements.elements import (
    Asset,
    DataStructure,
    Element,
    HttpHeaders,
    HttpMessagePayload,
    MemberElement,
    ObjectElement,
    ParseResult,
)
from oas3elements.exceptions import ReferenceResolutionError
from oas3elements.parser.annotations import (
    create_annotation,
    create_invalid_member_warning,
    create_member_value_warning,
    create_unsupported_member_warning,
    create_warning,
    ensure_object,
)
from oas3elements.parser.context import Context
from oas3elements.parser.json_schema import build_json_schema
from oas3elements.parser.media_type import is_json_media_type
from oas3elements.parser.oas.parse_example_object import parse_example_object
from oas3elements.parser.oas.parse_schema_object import parse_schema_object
from oas3elements.parser.parse_object import parse_object
from oas3elements.parser.predicates import (
    always,
    has_key,
    has_one_of_keys,
    is_extension,
    is_object,
    key_of,
)
from oas3elements.parser.references import parse_reference
from oas3elements.parser.results import as_array, combine, cond, empty, pipe_parse_result
from oas3elements.serializers.plain import value_of

logger = logging.getLogger(__name__)

NAME = "Media Type Object"
UNSUPPORTED_KEYS = ("encoding",)
JSON_SCHEMA_CONTENT_TYPE = "application/schema+json"


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _parse_examples(context: Context, member: MemberElement) -> ParseResult:
    """Reduce ``examples`` to the value of its first example."""
    if not is_object(member.value):
        return create_member_value_warning(NAME, member, "an object")

    examples = member.value.members()
    if not examples:
        return ParseResult()

    result = parse_reference(context, "examples", parse_example_object, examples[0].value)
    annotations: list[Element] = list(result.annotations)
    if len(examples) > 1:
        annotations.append(
            create_annotation(
                "warning",
                f"'{NAME}' 'examples' only one example is supported, "
                "other examples have been ignored",
            )
        )

    content: list[Element] = [
        MemberElement("examples", value) for value in result.content_elements[:1]
    ]
    return ParseResult(content + annotations)


def parse_media_type_object(
    context: Context,
    message_class: type[HttpMessagePayload],
    member: MemberElement,
) -> ParseResult:
    """Parse a ``media-type: Media Type Object`` member.

    Args:
        context: The parse context.
        message_class: :class:`~oas3elements.elements.HttpRequest` or
            :class:`~oas3elements.elements.HttpResponse`.
        member: The member keyed by the media type.
    """
    media_type = str(key_of(member))
    is_json = is_json_media_type(media_type)

    parse_member = cond([
        (has_key("example"), lambda m: ParseResult([m])),
        (has_key("examples"), lambda m: _parse_examples(context, m)),
        (has_key("schema"), lambda m: parse_schema_object(context, m.value)),
        (is_extension, empty),
        (has_one_of_keys(UNSUPPORTED_KEYS), create_unsupported_member_warning(NAME)),
        (always, create_invalid_member_warning(NAME)),
    ])

    def build(media: ObjectElement) -> ParseResult:
        message = message_class()
        message.headers = HttpHeaders([MemberElement("Content-Type", media_type)])
        annotations: list[Element] = []

        schema = media.get("schema")
        if not isinstance(schema, DataStructure):
            schema = None

        example_key = next(
            (key for key in ("example", "examples") if media.has_key(key)), None
        )
        if example_key is not None:
            if is_json:
                example = media.get(example_key).to_value()
                message.push(_message_body(example, media_type))
            else:
                annotations.extend(
                    create_warning(
                        f"'{NAME}' '{example_key}' is only supported for JSON media types"
                    ).annotations
                )
        elif is_json and schema is not None and context.options.generate_message_body:
            value = value_of(schema, context.state.data_structures)
            if value is not None:
                message.push(_message_body(value, media_type))

        if schema is not None:
            message.push(schema)

            if is_json and context.options.generate_message_body_schema:
                try:
                    message.push(_message_body_schema(context, member.value.get("schema")))
                except ReferenceResolutionError as exc:
                    logger.debug("Skipping messageBodySchema for %s: %s", media_type, exc)
                    annotations.extend(
                        create_warning(
                            f"'{NAME}' 'schema' could not be converted to JSON Schema: {exc}"
                        ).annotations
                    )

        return ParseResult([message] + annotations)

    parse = pipe_parse_result(
        ensure_object(NAME, "warning"),
        parse_object(parse_member),
        build,
    )
    return parse(member.value)


def _message_body(value: Any, media_type: str) -> Asset:
    return Asset(
        _compact_json(value),
        meta={"classes": ["messageBody"]},
        content_type=media_type,
    )


def _message_body_schema(context: Context, schema: Element) -> Asset:
    json_schema = build_json_schema(schema.to_value(), context.state.document_value())
    return Asset(
        _compact_json(json_schema),
        meta={"classes": ["messageBodySchema"]},
        content_type=JSON_SCHEMA_CONTENT_TYPE,
    )


def parse_content(
    context: Context,
    name: str,
    message_class: type[HttpMessagePayload],
    member: MemberElement,
) -> ParseResult:
    """Parse a ``content`` map into an array holding one message per media type."""
    if not is_object(member.value):
        return create_member_value_warning(name, member, "an object")

    results = [
        parse_media_type_object(context, message_class, media_type)
        for media_type in member.value.members()
    ]
    return as_array(combine(*results))
