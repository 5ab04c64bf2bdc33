"""Serializers for element trees: Refract JSON and plain JSON."""

from oas3elements.serializers.plain import collect_elements_by_id, serialize_json, value_of
from oas3elements.serializers.refract import (
    deserialize_refract,
    from_refract,
    serialize_refract,
    to_refract,
)

__all__ = [
    "collect_elements_by_id",
    "deserialize_refract",
    "from_refract",
    "serialize_json",
    "serialize_refract",
    "to_refract",
    "value_of",
]
