"""Tests for oas3elements.parser.json_schema."""

from __future__ import annotations

from typing import Any

import pytest

from oas3elements.exceptions import ReferenceResolutionError
from oas3elements.parser.json_schema import DRAFT_4, build_json_schema


def _document(**schemas: Any) -> dict[str, Any]:
    return {"components": {"schemas": schemas}}


class TestPlainSchemas:
    def test_schema_keyword_added(self) -> None:
        assert build_json_schema({"type": "string"}, {}) == {
            "$schema": DRAFT_4,
            "type": "string",
        }

    def test_validation_keywords_kept(self) -> None:
        schema = {"type": "string", "maxLength": 3, "pattern": "^a"}
        result = build_json_schema(schema, {})
        assert result["maxLength"] == 3
        assert result["pattern"] == "^a"

    def test_input_not_mutated(self) -> None:
        schema = {"type": "object", "properties": {"a": {"type": "string", "nullable": True}}}
        build_json_schema(schema, {})
        assert schema == {"type": "object", "properties": {"a": {"type": "string", "nullable": True}}}

    def test_openapi_only_keywords_dropped(self) -> None:
        schema = {
            "type": "string",
            "example": "abc",
            "readOnly": True,
            "writeOnly": False,
            "deprecated": True,
            "xml": {"name": "x"},
            "externalDocs": {"url": "https://example.com"},
        }
        assert build_json_schema(schema, {}) == {"$schema": DRAFT_4, "type": "string"}

    def test_property_named_like_openapi_keyword_kept(self) -> None:
        schema = {"type": "object", "properties": {"example": {"type": "string"}}}
        result = build_json_schema(schema, {})
        assert result["properties"] == {"example": {"type": "string"}}


class TestNullable:
    def test_type_widened(self) -> None:
        result = build_json_schema({"type": "integer", "nullable": True}, {})
        assert result["type"] == ["integer", "null"]
        assert "nullable" not in result

    def test_enum_widened(self) -> None:
        result = build_json_schema({"type": "string", "enum": ["a"], "nullable": True}, {})
        assert result["enum"] == ["a", None]

    def test_nullable_false_is_dropped(self) -> None:
        assert build_json_schema({"type": "string", "nullable": False}, {}) == {
            "$schema": DRAFT_4,
            "type": "string",
        }


class TestReferences:
    def test_component_copied_into_definitions(self) -> None:
        document = _document(Pet={"type": "object", "properties": {"name": {"type": "string"}}})
        result = build_json_schema({"$ref": "#/components/schemas/Pet"}, document)

        assert result == {
            "$schema": DRAFT_4,
            "$ref": "#/definitions/Pet",
            "definitions": {
                "Pet": {"type": "object", "properties": {"name": {"type": "string"}}},
            },
        }

    def test_nested_references_collected(self) -> None:
        document = _document(
            Pet={"type": "object", "properties": {"owner": {"$ref": "#/components/schemas/User"}}},
            User={"type": "string"},
        )
        result = build_json_schema(
            {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}, document
        )

        assert result["items"] == {"$ref": "#/definitions/Pet"}
        assert result["definitions"]["Pet"]["properties"]["owner"] == {"$ref": "#/definitions/User"}
        assert result["definitions"]["User"] == {"type": "string"}

    def test_recursive_schema_terminates(self) -> None:
        document = _document(
            Node={"type": "object", "properties": {"next": {"$ref": "#/components/schemas/Node"}}}
        )
        result = build_json_schema({"$ref": "#/components/schemas/Node"}, document)

        assert result["definitions"] == {
            "Node": {"type": "object", "properties": {"next": {"$ref": "#/definitions/Node"}}}
        }

    def test_escaped_pointer(self) -> None:
        document = _document(**{"a/b": {"type": "string"}})
        result = build_json_schema({"$ref": "#/components/schemas/a~1b"}, document)

        assert result["$ref"] == "#/definitions/a~1b"
        assert result["definitions"] == {"a/b": {"type": "string"}}

    def test_non_schema_pointer_named_by_path(self) -> None:
        document = {"components": {"parameters": {"Id": {"schema": {"type": "integer"}}}}}
        result = build_json_schema({"$ref": "#/components/parameters/Id/schema"}, document)

        assert result["$ref"] == "#/definitions/components.parameters.Id.schema"
        assert result["definitions"]["components.parameters.Id.schema"] == {"type": "integer"}

    def test_external_reference_raises(self) -> None:
        with pytest.raises(ReferenceResolutionError, match="External \\$ref"):
            build_json_schema({"$ref": "other.yaml#/Pet"}, {})

    def test_missing_target_raises(self) -> None:
        with pytest.raises(ReferenceResolutionError, match="'Missing' not found"):
            build_json_schema({"$ref": "#/components/schemas/Missing"}, _document())

    def test_reference_error_exit_code(self) -> None:
        with pytest.raises(ReferenceResolutionError) as exc_info:
            build_json_schema({"$ref": "#/nope"}, {})
        assert exc_info.value.exit_code == 7
