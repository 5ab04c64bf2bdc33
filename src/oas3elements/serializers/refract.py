"""Refract 1.0 JSON serialization of element trees.

An element serializes as ``{"element", "meta", "attributes", "content"}``
with empty parts omitted. Meta and attribute values are themselves elements,
and member content is ``{"key": ..., "value": ...}``.

:func:`from_refract` is the inverse; element names are mapped back to their
classes through :data:`~oas3elements.elements.ELEMENTS`, and unknown names
(references by name such as ``User``) become generic elements carrying that
name.
"""

from __future__ import annotations

import json
from typing import Any

from oas3elements.elements import ELEMENTS, Element, MemberElement
from oas3elements.exceptions import RefractDecodeError


def to_refract(element: Element) -> dict[str, Any]:
    """Serialize *element* into a JSON-ready Refract dict."""
    data: dict[str, Any] = {"element": element.element}
    if element.meta:
        data["meta"] = {key: to_refract(value) for key, value in element.meta.items()}
    if element.attributes:
        data["attributes"] = {
            key: to_refract(value) for key, value in element.attributes.items()
        }

    if isinstance(element, MemberElement):
        content: dict[str, Any] = {}
        if element.key is not None:
            content["key"] = to_refract(element.key)
        if element.value is not None:
            content["value"] = to_refract(element.value)
        data["content"] = content
        return data

    raw = element.content
    if isinstance(raw, Element):
        data["content"] = to_refract(raw)
    elif isinstance(raw, list):
        if raw:
            data["content"] = [to_refract(item) for item in raw]
    elif raw is not None:
        data["content"] = raw
    return data


def serialize_refract(element: Element, indent: int | None = 2) -> str:
    """Serialize *element* to Refract JSON text."""
    return json.dumps(to_refract(element), indent=indent, ensure_ascii=False)


def from_refract(data: Any) -> Element:
    """Build an element tree from a Refract dict.

    Raises:
        RefractDecodeError: If *data* is not a Refract element.
    """
    if not isinstance(data, dict) or not isinstance(data.get("element"), str):
        raise RefractDecodeError(
            f"Expected a Refract element object, got {type(data).__name__}"
        )

    name = data["element"]
    cls = ELEMENTS.get(name)
    element = cls() if cls is not None else Element(element=name)

    for key, value in _mapping(data, "meta").items():
        element.set_meta(key, from_refract(value))
    for key, value in _mapping(data, "attributes").items():
        element.set_attribute(key, from_refract(value))

    if "content" not in data:
        return element

    content = data["content"]
    if isinstance(element, MemberElement):
        if not isinstance(content, dict):
            raise RefractDecodeError("Member content must be an object with 'key' and 'value'")
        element.content = {
            "key": from_refract(content["key"]) if "key" in content else None,
            "value": from_refract(content["value"]) if "value" in content else None,
        }
    elif isinstance(content, list):
        element.content = [from_refract(item) for item in content]
    elif isinstance(content, dict):
        element.content = from_refract(content)
    else:
        element.content = content
    return element


def deserialize_refract(text: str) -> Element:
    """Parse Refract JSON text into an element tree.

    Raises:
        RefractDecodeError: If *text* is not valid JSON or not a Refract element.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RefractDecodeError(f"Invalid Refract JSON: {exc}") from exc
    return from_refract(data)


def _mapping(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise RefractDecodeError(f"Refract '{key}' must be an object")
    return value
