"""End-to-end tests for oas3elements.parser.parse against the fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from oas3elements.elements import ParseResult
from oas3elements.models import ParseOptions
from oas3elements.parser import parse
from oas3elements.parser.json_schema import DRAFT_4
from oas3elements.serializers import deserialize_refract, serialize_json, serialize_refract

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def _messages(result: ParseResult) -> list[str]:
    return [annotation.to_value() for annotation in result.annotations]


@pytest.fixture()
def petstore(petstore_text: str) -> ParseResult:
    return parse(petstore_text)


class TestPetstore:
    def test_no_annotations(self, petstore: ParseResult) -> None:
        assert _messages(petstore) == []

    def test_api(self, petstore: ParseResult) -> None:
        api = petstore.api
        assert api.title == "Petstore API"
        assert api.version == "1.0.0"
        assert [copy.to_value() for copy in api.copy] == ["A sample pet store."]

    def test_resources(self, petstore: ParseResult) -> None:
        resources = petstore.api.resources
        assert [resource.href for resource in resources] == ["/pets", "/pets/{petId}"]
        assert resources[0].title == "Pets"
        assert resources[1].href_variables.keys() == ["petId"]
        assert resources[1].href_variables.get_member("petId").type_attributes == ["required"]

    def test_list_pets(self, petstore: ParseResult) -> None:
        transition = petstore.api.resources[0].transitions[0]
        assert transition.id == "listPets"
        assert transition.title == "List all pets"
        assert transition.method == "GET"

        limit = transition.href_variables.get_member("limit")
        assert limit.value.attributes["samples"].to_value() == [20]
        assert limit.description == "How many items to return"

        (transaction,) = transition.transactions
        response = transaction.response
        assert response.status_code == "200"
        assert response.headers.to_value() == {
            "Content-Type": "application/json",
            "X-Next": "/pets?page=2",
        }
        assert response.message_body.to_value() == '[{"id":1,"name":"doggie","tag":""}]'
        assert json.loads(response.message_body_schema.to_value()) == {
            "$schema": DRAFT_4,
            "type": "array",
            "items": {"$ref": "#/definitions/Pet"},
            "definitions": {
                "Pet": {
                    "type": "object",
                    "required": ["id", "name"],
                    "properties": {
                        "id": {"type": "integer"},
                        "name": {"type": "string"},
                        "tag": {"type": "string"},
                    },
                }
            },
        }

    def test_create_pet(self, petstore: ParseResult) -> None:
        transition = petstore.api.resources[0].transitions[1]
        assert transition.method == "POST"

        (transaction,) = transition.transactions
        request = transaction.request
        assert request.content_type == "application/json"
        assert [copy.to_value() for copy in request.copy] == ["Pet to add to the store"]
        assert request.message_body.to_value() == '{"id":1,"name":"doggie","tag":""}'
        assert transaction.response.status_code == "201"

    def test_show_pet(self, petstore: ParseResult) -> None:
        transition = petstore.api.resources[1].transitions[0]
        ok, not_found = transition.transactions

        assert ok.response.message_body.to_value() == '{"id":1,"name":"doggie"}'
        assert not_found.response.status_code == "404"
        assert [copy.to_value() for copy in not_found.response.copy] == ["Pet not found"]
        assert not_found.response.message_body.to_value() == '{"code":0,"message":"Not found"}'

    def test_data_structures(self, petstore: ParseResult) -> None:
        (category,) = petstore.api.categories("dataStructures")
        structures = category.data_structures
        assert [structure.content.id for structure in structures] == ["Pet", "Error"]
        assert json.loads(serialize_json(structures[0])) == {"id": 1, "name": "doggie", "tag": ""}

    def test_data_structure_reference_serializes_through_tree(self, petstore: ParseResult) -> None:
        transition = petstore.api.resources[0].transitions[0]
        schema = transition.transactions[0].response.data_structure
        assert json.loads(serialize_json(schema)) == [{"id": 1, "name": "doggie", "tag": ""}]

    def test_refract_round_trip(self, petstore: ParseResult) -> None:
        text = serialize_refract(petstore)
        assert deserialize_refract(text).api.title == "Petstore API"


class TestParseOptions:
    def test_disable_generated_assets(self, petstore_text: str) -> None:
        options = ParseOptions(generate_message_body=False, generate_message_body_schema=False)
        result = parse(petstore_text, options)

        list_pets, show_pet = (
            result.api.resources[0].transitions[0],
            result.api.resources[1].transitions[0],
        )
        response = list_pets.transactions[0].response
        assert response.message_body is None
        assert response.message_body_schema is None
        # examples are not generated, so they stay
        assert show_pet.transactions[0].response.message_body is not None


class TestOtherDocuments:
    def test_yaml(self) -> None:
        result = parse((FIXTURES_DIR / "petstore.yaml").read_text(encoding="utf-8"))

        assert _messages(result) == []
        response = result.api.resources[0].transitions[0].transactions[0].response
        assert response.status_code == "200"
        assert response.message_body.to_value() == '[{"id":1,"name":"doggie"}]'

    def test_invalid_document(self) -> None:
        result = parse((FIXTURES_DIR / "invalid.json").read_text(encoding="utf-8"))

        assert result.api is None
        assert result.content_elements == []
        assert _messages(result) == ["'Info Object' is missing required property 'version'"]

    def test_undecodable_text(self) -> None:
        result = parse("openapi: [unclosed")
        assert result.has_errors
        assert result.errors[0].to_value().startswith(
            "Unable to parse document: Failed to decode document as JSON or YAML"
        )

    def test_non_object_root(self) -> None:
        result = parse("[]")
        assert _messages(result) == ["'OpenAPI Object' is not an object"]

    def test_unsupported_top_level_key_keeps_api(self, petstore_raw: dict) -> None:
        petstore_raw["servers"] = [{"url": "https://petstore.example.com"}]
        result = parse(json.dumps(petstore_raw))

        assert _messages(result) == ["'OpenAPI Object' contains unsupported key 'servers'"]
        assert result.api.title == "Petstore API"

    def test_generated_body_follows_properties_over_schema_example(self) -> None:
        document = {
            "openapi": "3.0.3",
            "info": {"title": "Items", "version": "1"},
            "paths": {
                "/items": {
                    "get": {
                        "responses": {
                            "200": {
                                "description": "OK",
                                "content": {
                                    "application/json": {
                                        "schema": {
                                            "type": "object",
                                            "properties": {
                                                "id": {"type": "integer", "example": 7}
                                            },
                                            "example": {"other": True},
                                        }
                                    }
                                },
                            }
                        }
                    }
                }
            },
        }
        result = parse(json.dumps(document))

        response = result.api.resources[0].transitions[0].transactions[0].response
        assert response.message_body.to_value() == '{"id":7}'
