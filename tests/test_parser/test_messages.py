"""Tests for the parsers producing HTTP messages.

Covers Media Type, Request Body, Responses, Response, Header and Example
Objects.
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from oas3elements.elements import (
    ArrayElement,
    Copy,
    DataStructure,
    HttpHeaders,
    HttpRequest,
    HttpResponse,
    MemberElement,
    ParseResult,
    refract,
)
from oas3elements.models import ParseOptions
from oas3elements.parser.context import Context
from oas3elements.parser.json_schema import DRAFT_4
from oas3elements.parser.oas.parse_components_object import parse_components_object
from oas3elements.parser.oas.parse_example_object import parse_example_object
from oas3elements.parser.oas.parse_header_object import parse_header_object, parse_headers
from oas3elements.parser.oas.parse_media_type_object import (
    parse_content,
    parse_media_type_object,
)
from oas3elements.parser.oas.parse_request_body_object import parse_request_body_object
from oas3elements.parser.oas.parse_response_object import parse_response_object
from oas3elements.parser.oas.parse_responses_object import (
    is_status_code,
    is_unsupported_status,
    parse_responses_object,
)

PET_SCHEMAS = {
    "Pet": {
        "type": "object",
        "required": ["name"],
        "properties": {
            "name": {"type": "string", "example": "doggie"},
            "age": {"type": "integer"},
        },
    }
}


def _messages(result: ParseResult) -> list[str]:
    return [annotation.to_value() for annotation in result.annotations]


@pytest.fixture()
def pet_components(context, install_components) -> Context:
    """Install ``components.schemas.Pet`` and register it as a data structure."""
    install_components({"schemas": PET_SCHEMAS})
    parse_components_object(context, context.state.components)
    return context


def _media(context: Context, media_type: str, value: Any, message_class=HttpResponse) -> ParseResult:
    return parse_media_type_object(context, message_class, MemberElement(media_type, value))


# ---------------------------------------------------------------------------
# Media Type Object
# ---------------------------------------------------------------------------


class TestParseMediaTypeObject:
    def test_content_type_header(self, context) -> None:
        result = _media(context, "application/json", {})

        message = result.first
        assert isinstance(message, HttpResponse)
        assert message.headers.to_value() == {"Content-Type": "application/json"}
        assert message.message_body is None
        assert result.annotations == []

    def test_request_message_class(self, context) -> None:
        assert isinstance(_media(context, "text/plain", {}, HttpRequest).first, HttpRequest)

    def test_not_an_object(self, context) -> None:
        result = _media(context, "application/json", "x")
        assert _messages(result) == ["'Media Type Object' is not an object"]
        assert not result.has_errors

    def test_example_is_compact_message_body(self, context) -> None:
        result = _media(context, "application/json", {"example": {"name": "doggie", "tags": ["a"]}})

        body = result.first.message_body
        assert body.to_value() == '{"name":"doggie","tags":["a"]}'
        assert body.content_type == "application/json"

    def test_example_keeps_unicode(self, context) -> None:
        body = _media(context, "application/json", {"example": {"name": "Zoë"}}).first.message_body
        assert body.to_value() == '{"name":"Zoë"}'

    def test_structured_json_suffix(self, context) -> None:
        body = _media(context, "application/hal+json", {"example": []}).first.message_body
        assert body.to_value() == "[]"
        assert body.content_type == "application/hal+json"

    def test_example_for_non_json_warns(self, context) -> None:
        result = _media(context, "text/plain", {"example": "hello"})
        assert result.first.message_body is None
        assert _messages(result) == [
            "'Media Type Object' 'example' is only supported for JSON media types"
        ]

    def test_first_of_examples_used(self, context) -> None:
        value = {"examples": {"one": {"value": {"id": 1}}, "two": {"value": {"id": 2}}}}
        result = _media(context, "application/json", value)

        assert result.first.message_body.to_value() == '{"id":1}'
        assert _messages(result) == [
            "'Media Type Object' 'examples' only one example is supported, "
            "other examples have been ignored"
        ]

    def test_single_example_no_warning(self, context) -> None:
        result = _media(context, "application/json", {"examples": {"one": {"value": 1}}})
        assert result.first.message_body.to_value() == "1"
        assert result.annotations == []

    def test_empty_examples(self, context) -> None:
        result = _media(context, "application/json", {"examples": {}})
        assert result.first.message_body is None
        assert result.annotations == []

    def test_examples_not_an_object(self, context) -> None:
        result = _media(context, "application/json", {"examples": []})
        assert result.first.message_body is None
        assert _messages(result) == ["'Media Type Object' 'examples' is not an object"]

    def test_example_reference(self, context, install_components) -> None:
        install_components({"examples": {"Doggie": {"summary": "A dog", "value": {"name": "doggie"}}}})
        value = {"examples": {"dog": {"$ref": "#/components/examples/Doggie"}}}
        result = _media(context, "application/json", value)

        assert result.first.message_body.to_value() == '{"name":"doggie"}'
        assert result.annotations == []

    def test_examples_for_non_json_warn(self, context) -> None:
        result = _media(context, "text/plain", {"examples": {"one": {"value": "a"}}})
        assert _messages(result) == [
            "'Media Type Object' 'examples' is only supported for JSON media types"
        ]

    def test_schema_attached_as_data_structure(self, context) -> None:
        result = _media(context, "application/json", {"schema": {"type": "string"}})
        structure = result.first.data_structure
        assert isinstance(structure, DataStructure)

    def test_message_body_generated_from_schema(self, pet_components) -> None:
        result = _media(
            pet_components, "application/json", {"schema": {"$ref": "#/components/schemas/Pet"}}
        )
        assert result.first.message_body.to_value() == '{"name":"doggie","age":0}'
        assert result.annotations == []

    def test_example_wins_over_schema(self, pet_components) -> None:
        value = {"schema": {"$ref": "#/components/schemas/Pet"}, "example": {"name": "rex"}}
        result = _media(pet_components, "application/json", value)
        assert result.first.message_body.to_value() == '{"name":"rex"}'

    def test_message_body_schema(self, pet_components) -> None:
        result = _media(
            pet_components,
            "application/json",
            {"schema": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}},
        )

        asset = result.first.message_body_schema
        assert asset.content_type == "application/schema+json"
        assert json.loads(asset.to_value()) == {
            "$schema": DRAFT_4,
            "type": "array",
            "items": {"$ref": "#/definitions/Pet"},
            "definitions": {
                "Pet": {
                    "type": "object",
                    "required": ["name"],
                    "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
                }
            },
        }

    def test_no_assets_for_non_json_schema(self, context) -> None:
        result = _media(context, "application/xml", {"schema": {"type": "string"}})
        message = result.first
        assert message.data_structure is not None
        assert message.message_body is None
        assert message.message_body_schema is None

    def test_generation_disabled_by_options(self) -> None:
        context = Context(
            ParseOptions(generate_message_body=False, generate_message_body_schema=False)
        )
        value = {"schema": {"type": "string", "example": "x"}}
        message = _media(context, "application/json", value).first

        assert message.data_structure is not None
        assert message.message_body is None
        assert message.message_body_schema is None

    def test_unconvertible_schema_warns(self, context) -> None:
        # schema referencing a component the document does not hold
        context.state.components = refract({"schemas": {"Pet": {}}})
        context.state.document = refract({})
        result = _media(context, "application/json", {"schema": {"$ref": "#/components/schemas/Pet"}})

        assert result.first.message_body_schema is None
        assert len(result.warnings) == 1
        assert result.warnings[0].to_value().startswith(
            "'Media Type Object' 'schema' could not be converted to JSON Schema:"
        )

    def test_invalid_schema_dropped(self, context) -> None:
        result = _media(context, "application/json", {"schema": "string"})
        assert result.first.data_structure is None
        assert _messages(result) == ["'Schema Object' is not an object"]

    def test_encoding_unsupported(self, context) -> None:
        result = _media(context, "multipart/form-data", {"encoding": {}})
        assert _messages(result) == ["'Media Type Object' contains unsupported key 'encoding'"]

    def test_invalid_key(self, context) -> None:
        result = _media(context, "application/json", {"schemas": {}})
        assert _messages(result) == ["'Media Type Object' contains invalid key 'schemas'"]


class TestParseContent:
    def test_one_message_per_media_type(self, context) -> None:
        member = MemberElement("content", {"application/json": {}, "text/plain": {}})
        result = parse_content(context, "Response Object", HttpResponse, member)

        messages = result.first
        assert isinstance(messages, ArrayElement)
        assert [message.content_type for message in messages] == ["application/json", "text/plain"]

    def test_not_an_object(self, context) -> None:
        result = parse_content(context, "Response Object", HttpResponse, MemberElement("content", []))
        assert _messages(result) == ["'Response Object' 'content' is not an object"]


# ---------------------------------------------------------------------------
# Request Body Object
# ---------------------------------------------------------------------------


class TestParseRequestBodyObject:
    def test_requests_per_media_type_with_copy(self, context) -> None:
        body = {
            "description": "A pet",
            "required": True,
            "content": {"application/json": {}, "application/xml": {}},
        }
        result = parse_request_body_object(context, refract(body))

        assert [type(request) for request in result] == [HttpRequest, HttpRequest]
        assert [request.content_type for request in result] == ["application/json", "application/xml"]
        for request in result:
            assert [copy.to_value() for copy in request.copy] == ["A pet"]
        assert result[0].copy[0] is not result[1].copy[0]
        assert result.annotations == []

    def test_missing_content(self, context) -> None:
        result = parse_request_body_object(context, refract({"description": "x"}))
        assert _messages(result) == ["'Request Body Object' is missing required property 'content'"]
        assert result.has_errors

    def test_not_an_object(self, context) -> None:
        result = parse_request_body_object(context, refract([]))
        assert _messages(result) == ["'Request Body Object' is not an object"]
        assert result.has_errors

    def test_required_not_boolean(self, context) -> None:
        result = parse_request_body_object(
            context, refract({"required": "yes", "content": {"application/json": {}}})
        )
        assert len(result.content_elements) == 1
        assert _messages(result) == ["'Request Body Object' 'required' is not a boolean"]

    def test_invalid_key(self, context) -> None:
        result = parse_request_body_object(
            context, refract({"content": {}, "schema": {}})
        )
        assert _messages(result) == ["'Request Body Object' contains invalid key 'schema'"]


# ---------------------------------------------------------------------------
# Responses Object
# ---------------------------------------------------------------------------


class TestStatusCodes:
    @pytest.mark.parametrize("key", ["200", "404", "503", 200, 101])
    def test_status_code(self, key) -> None:
        assert is_status_code(MemberElement(key, {}))

    @pytest.mark.parametrize("key", ["600", "20", "2XX", "default", "abc"])
    def test_not_status_code(self, key) -> None:
        assert not is_status_code(MemberElement(key, {}))

    @pytest.mark.parametrize("key", ["default", "2XX", "5XX"])
    def test_unsupported_status(self, key) -> None:
        assert is_unsupported_status(MemberElement(key, {}))


class TestParseResponsesObject:
    def test_responses_in_order(self, context) -> None:
        result = parse_responses_object(
            context, refract({"200": {"description": "OK"}, "404": {"description": "Missing"}})
        )
        assert [response.status_code for response in result] == ["200", "404"]
        assert result.annotations == []

    def test_integer_status_codes(self, context) -> None:
        result = parse_responses_object(context, refract({200: {"description": "OK"}}))
        assert result.first.status_code == "200"

    def test_one_response_per_media_type(self, context) -> None:
        responses = {
            "200": {
                "description": "OK",
                "content": {"application/json": {}, "text/plain": {}},
            }
        }
        result = parse_responses_object(context, refract(responses))
        assert [response.content_type for response in result] == ["application/json", "text/plain"]

    @pytest.mark.parametrize("key", ["default", "2XX"])
    def test_unsupported_keys(self, context, key: str) -> None:
        result = parse_responses_object(context, refract({key: {"description": "Any"}}))
        assert result.content_elements == []
        assert _messages(result) == [f"'Responses Object' contains unsupported key '{key}'"]

    def test_invalid_key(self, context) -> None:
        result = parse_responses_object(context, refract({"600": {"description": "?"}}))
        assert _messages(result) == ["'Responses Object' contains invalid key '600'"]

    def test_extension_ignored(self, context) -> None:
        result = parse_responses_object(context, refract({"x-ok": True}))
        assert result.annotations == []

    def test_not_an_object(self, context) -> None:
        result = parse_responses_object(context, refract([]))
        assert _messages(result) == ["'Responses Object' is not an object"]
        assert result.has_errors

    def test_reference(self, context, install_components) -> None:
        install_components({"responses": {"NotFound": {"description": "Missing"}}})
        result = parse_responses_object(
            context, refract({"404": {"$ref": "#/components/responses/NotFound"}})
        )
        response = result.first
        assert response.status_code == "404"
        assert response.copy[0].to_value() == "Missing"

    def test_undefined_reference(self, context, install_components) -> None:
        install_components({"responses": {}})
        result = parse_responses_object(
            context, refract({"404": {"$ref": "#/components/responses/Nope"}})
        )
        assert result.content_elements == []
        assert _messages(result) == ["'#/components/responses/Nope' is not defined"]


# ---------------------------------------------------------------------------
# Response Object
# ---------------------------------------------------------------------------


class TestParseResponseObject:
    def test_bare_response(self, context) -> None:
        result = parse_response_object(context, refract({"description": "OK"}), "200")

        response = result.first
        assert isinstance(response, HttpResponse)
        assert response.status_code == "200"
        assert isinstance(response.copy[0], Copy)
        assert response.copy[0].to_value() == "OK"
        assert response.headers is None

    def test_missing_description_warns(self, context) -> None:
        result = parse_response_object(context, refract({}), "204")
        assert result.first.status_code == "204"
        assert _messages(result) == ["'Response Object' is missing required property 'description'"]
        assert not result.has_errors

    def test_non_string_description_not_reported_missing(self, context) -> None:
        result = parse_response_object(context, refract({"description": 5}), "200")
        assert result.first.status_code == "200"
        assert result.first.copy == []
        assert _messages(result) == ["'Response Object' 'description' is not a string"]

    def test_not_an_object(self, context) -> None:
        result = parse_response_object(context, refract("OK"), "200")
        assert result.content_elements == []
        assert _messages(result) == ["'Response Object' is not an object"]

    def test_headers_merged_into_every_message(self, context) -> None:
        response = {
            "description": "OK",
            "headers": {"X-Rate-Limit": {"example": 100}},
            "content": {"application/json": {}, "text/plain": {}},
        }
        result = parse_response_object(context, refract(response), "200")

        assert [message.headers.to_value() for message in result] == [
            {"Content-Type": "application/json", "X-Rate-Limit": "100"},
            {"Content-Type": "text/plain", "X-Rate-Limit": "100"},
        ]

    def test_headers_without_content(self, context) -> None:
        response = {"description": "OK", "headers": {"X-Id": {"example": "a"}}}
        result = parse_response_object(context, refract(response), "200")
        assert result.first.headers.to_value() == {"X-Id": "a"}

    def test_links_unsupported(self, context) -> None:
        result = parse_response_object(context, refract({"description": "OK", "links": {}}), "200")
        assert _messages(result) == ["'Response Object' contains unsupported key 'links'"]

    def test_invalid_key(self, context) -> None:
        result = parse_response_object(context, refract({"description": "OK", "schema": {}}), "200")
        assert _messages(result) == ["'Response Object' contains invalid key 'schema'"]


# ---------------------------------------------------------------------------
# Header Object
# ---------------------------------------------------------------------------


class TestParseHeaderObject:
    def test_example_value(self, context) -> None:
        member = parse_header_object(context, refract({"example": "abc"}), "X-Id").first
        assert member.key.to_value() == "X-Id"
        assert member.value.to_value() == "abc"

    def test_non_string_example_rendered_as_json(self, context) -> None:
        member = parse_header_object(context, refract({"example": [1, 2]}), "X-Ids").first
        assert member.value.to_value() == "[1,2]"

    def test_value_from_schema(self, context) -> None:
        header = {"schema": {"type": "integer", "example": 5}}
        member = parse_header_object(context, refract(header), "X-Count").first
        assert member.value.to_value() == "5"

    def test_value_from_referenced_schema(self, pet_components) -> None:
        header = {"schema": {"$ref": "#/components/schemas/Pet"}}
        member = parse_header_object(pet_components, refract(header), "X-Pet").first
        assert member.value.to_value() == '{"name":"doggie","age":0}'

    def test_no_value(self, context) -> None:
        member = parse_header_object(context, refract({}), "X-Empty").first
        assert member.value.to_value() == ""

    def test_description(self, context) -> None:
        member = parse_header_object(
            context, refract({"description": "Request id", "example": "a"}), "X-Id"
        ).first
        assert member.description == "Request id"

    @pytest.mark.parametrize("key", ["style", "explode", "examples", "content"])
    def test_unsupported_keys(self, context, key: str) -> None:
        result = parse_header_object(context, refract({key: {}}), "X-Id")
        assert isinstance(result.first, MemberElement)
        assert _messages(result) == [f"'Header Object' contains unsupported key '{key}'"]

    def test_not_an_object(self, context) -> None:
        result = parse_header_object(context, refract("a"), "X-Id")
        assert _messages(result) == ["'Header Object' is not an object"]


class TestParseHeaders:
    def test_headers(self, context) -> None:
        member = MemberElement("headers", {"X-A": {"example": "a"}, "X-B": {"example": "b"}})
        result = parse_headers(context, "Response Object", member)

        headers = result.first
        assert isinstance(headers, HttpHeaders)
        assert headers.to_value() == {"X-A": "a", "X-B": "b"}

    def test_content_type_ignored(self, context) -> None:
        member = MemberElement("headers", {"content-type": {"example": "text/html"}})
        result = parse_headers(context, "Response Object", member)

        assert result.first.is_empty
        assert _messages(result) == [
            "'Response Object' 'headers' contains 'Content-Type' header, "
            "it is ignored in favour of the media type"
        ]

    def test_reference(self, context, install_components) -> None:
        install_components({"headers": {"Rate": {"example": 10}}})
        member = MemberElement("headers", {"X-Rate": {"$ref": "#/components/headers/Rate"}})
        result = parse_headers(context, "Response Object", member)
        assert result.first.to_value() == {"X-Rate": "10"}

    def test_not_an_object(self, context) -> None:
        result = parse_headers(context, "Response Object", MemberElement("headers", []))
        assert _messages(result) == ["'Response Object' 'headers' is not an object"]


# ---------------------------------------------------------------------------
# Example Object
# ---------------------------------------------------------------------------


class TestParseExampleObject:
    def test_value(self, context) -> None:
        result = parse_example_object(
            context, refract({"summary": "A dog", "description": "Long", "value": {"id": 1}})
        )
        assert result.first.to_value() == {"id": 1}
        assert result.first.parent is result
        assert result.annotations == []

    def test_without_value_is_empty(self, context) -> None:
        assert parse_example_object(context, refract({"summary": "Nothing"})).is_empty

    def test_external_value_unsupported(self, context) -> None:
        result = parse_example_object(context, refract({"externalValue": "https://example.com/a"}))
        assert result.content_elements == []
        assert _messages(result) == ["'Example Object' contains unsupported key 'externalValue'"]

    def test_not_an_object(self, context) -> None:
        result = parse_example_object(context, refract(1))
        assert _messages(result) == ["'Example Object' is not an object"]
        assert not result.has_errors
