"""Convert an OpenAPI Schema Object into a standalone JSON Schema.

OpenAPI schemas point at each other with ``$ref`` pointers such as
``{"$ref": "#/components/schemas/Pet"}``. Those pointers are meaningless
outside the OpenAPI document, so every referenced schema is copied into the
``definitions`` of the generated schema and the pointer is rewritten to
``#/definitions/Pet``. A schema that references itself therefore stays a
finite document.

OpenAPI-only keywords are translated where JSON Schema Draft 4 has an
equivalent (``nullable`` widens ``type`` to include ``"null"``) and dropped
otherwise.

The single public function is :func:`build_json_schema`.
"""

from __future__ import annotations

from typing import Any

from oas3elements.exceptions import ReferenceResolutionError

DRAFT_4 = "http://json-schema.org/draft-04/schema#"

_SCHEMA_PREFIX = "#/components/schemas/"

# Keywords with no JSON Schema Draft 4 counterpart.
_OPENAPI_ONLY_KEYS = frozenset({
    "nullable",
    "discriminator",
    "readOnly",
    "writeOnly",
    "xml",
    "externalDocs",
    "example",
    "deprecated",
})


def build_json_schema(schema: Any, document: dict[str, Any]) -> dict[str, Any]:
    """Build a JSON Schema document from a raw OpenAPI schema.

    Args:
        schema: The Schema Object (or Reference Object) as plain data.
        document: The whole OpenAPI document, used as the lookup target for
            every ``$ref``.

    Returns:
        A new dictionary with ``$schema`` set to Draft 4 and the referenced
        component schemas under ``definitions``.

    Raises:
        ReferenceResolutionError: If a ``$ref`` is external or points to a
            path that does not exist in *document*.
    """
    definitions: dict[str, Any] = {}
    converted = _convert(schema, document, definitions)

    result: dict[str, Any] = {"$schema": DRAFT_4}
    if isinstance(converted, dict):
        result.update(converted)
    if definitions:
        result["definitions"] = definitions
    return result


def _resolve_ref(ref: str, root: dict[str, Any]) -> Any:
    """Resolve a single ``$ref`` string against the root document.

    Handles RFC 6901 JSON Pointer escaping (``~0`` for ``~``, ``~1`` for ``/``).
    """
    if not ref.startswith("#/"):
        raise ReferenceResolutionError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are handled."
        )

    current: Any = root
    for segment in ref[2:].split("/"):
        segment = _unescape(segment)

        if isinstance(current, dict):
            if segment not in current:
                raise ReferenceResolutionError(
                    f"Cannot resolve $ref '{ref}': key '{segment}' not found at path"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise ReferenceResolutionError(
                    f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                ) from exc
        else:
            raise ReferenceResolutionError(
                f"Cannot resolve $ref '{ref}': cannot navigate into {type(current).__name__}"
            )

    return current


def _definition_name(ref: str) -> str:
    if ref.startswith(_SCHEMA_PREFIX):
        return _unescape(ref[len(_SCHEMA_PREFIX):])
    return ".".join(_unescape(segment) for segment in ref[2:].split("/"))


def _unescape(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


def _escape(name: str) -> str:
    return name.replace("~", "~0").replace("/", "~1")


def _convert(obj: Any, root: dict[str, Any], definitions: dict[str, Any]) -> Any:
    """Recursively rewrite *obj*, collecting referenced schemas into *definitions*.

    A definition is registered before its target is converted, so a
    reference cycle ends at the second visit of the same pointer.
    """
    if isinstance(obj, list):
        return [_convert(item, root, definitions) for item in obj]
    if not isinstance(obj, dict):
        return obj

    if "$ref" in obj:
        ref = obj["$ref"]
        if not isinstance(ref, str):
            raise ReferenceResolutionError(f"$ref is not a string: {ref!r}")
        name = _definition_name(ref)
        if name not in definitions:
            definitions[name] = {}
            definitions[name] = _convert(_resolve_ref(ref, root), root, definitions)
        return {"$ref": f"#/definitions/{_escape(name)}"}

    result: dict[str, Any] = {}
    for key, value in obj.items():
        if key in _OPENAPI_ONLY_KEYS:
            continue
        if key == "properties" and isinstance(value, dict):
            result[key] = {
                name: _convert(prop, root, definitions) for name, prop in value.items()
            }
        elif isinstance(value, (dict, list)):
            result[key] = _convert(value, root, definitions)
        else:
            result[key] = value

    if obj.get("nullable") is True:
        if isinstance(result.get("type"), str):
            result["type"] = [result["type"], "null"]
        if isinstance(result.get("enum"), list) and None not in result["enum"]:
            result["enum"] = result["enum"] + [None]

    return result
