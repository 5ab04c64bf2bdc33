"""Serialize an element tree into plain JSON.

The JSON value of an element is computed by :func:`value_of`. Elements named
after a data structure id (references by name, e.g. an element named
``User``) are expanded through a lookup of every element in the tree that
carries a ``meta.id``.

Value rules, in order:

* primitives (``string``, ``number``, ``boolean``): the content, then the
  first ``samples`` entry, then ``default``;
* ``object`` and ``array``: the members or items, evaluated recursively,
  when there are any; otherwise the first sample, then ``default``;
* ``enum``: the content, then samples, default, then the first enumeration;
* otherwise ``null`` when the element is ``nullable``, else the empty value
  of its kind (``""``, ``0``, ``false``, ``[]``, ``{}``).

A reference cycle stops at the first repeated id, which serializes as the
empty value of the referenced element.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from oas3elements.elements import (
    ELEMENTS,
    ArrayElement,
    BooleanElement,
    DataStructure,
    Element,
    EnumElement,
    NullElement,
    NumberElement,
    ObjectElement,
    RefElement,
    StringElement,
)

_PRIMITIVES = (StringElement, NumberElement, BooleanElement)


def collect_elements_by_id(element: Element) -> dict[str, Element]:
    """Return every element with a ``meta.id`` in the tree *element* belongs to.

    The lookup starts at the root ancestor. A detached element (no parent)
    has nothing to look up and gets an empty mapping.
    """
    data_structures: dict[str, Element] = {}
    if element.parent is None:
        return data_structures

    for child in element.root.recursive_children():
        identifier = child.id
        if identifier:
            data_structures[str(identifier)] = child
    return data_structures


def value_of(
    element: Element,
    data_structures: Optional[dict[str, Element]] = None,
    _seen: frozenset[str] = frozenset(),
) -> Any:
    """Compute the plain JSON value of *element*.

    Args:
        element: The element to evaluate.
        data_structures: Elements keyed by id, used to expand references by
            name. See :func:`collect_elements_by_id`.
    """
    lookup = data_structures or {}

    if isinstance(element, DataStructure):
        if element.content is None:
            return None
        return value_of(element.content, lookup, _seen)

    if isinstance(element, NullElement):
        return None

    if isinstance(element, _PRIMITIVES):
        if element.content is not None:
            return element.content
        return _fallback(element)

    if isinstance(element, EnumElement):
        if element.content is not None:
            return value_of(element.content, lookup, _seen)
        fallback = _sample_or_default(element)
        if fallback is not _MISSING:
            return fallback
        enumerations = element.enumerations
        if enumerations:
            return value_of(enumerations[0], lookup, _seen)
        return None

    if isinstance(element, ObjectElement):
        if not element.is_empty:
            return _object_value(element, lookup, _seen)
        return _fallback(element)

    if isinstance(element, ArrayElement):
        if not element.is_empty:
            return [value_of(item, lookup, _seen) for item in element]
        return _fallback(element)

    name = element.content if isinstance(element, RefElement) else element.element
    if isinstance(element, RefElement) or name not in ELEMENTS:
        fallback = _sample_or_default(element)
        if fallback is not _MISSING:
            return fallback
        target = lookup.get(str(name))
        if target is None:
            return None
        if name in _seen:
            return _empty_value(target)
        return value_of(target, lookup, _seen | {str(name)})

    return element.to_value()


def serialize_json(element: Element, indent: int | None = 2) -> str:
    """Serialize *element* into JSON text.

    A ``dataStructure`` serializes as its content. References by name are
    expanded through :func:`collect_elements_by_id`.
    """
    if isinstance(element, DataStructure) and element.content is not None:
        return serialize_json(element.content, indent=indent)

    data_structures = collect_elements_by_id(element)
    value = value_of(element, data_structures)
    return json.dumps(value, indent=indent, ensure_ascii=False)


class _Missing:
    pass


_MISSING: Any = _Missing()


def _sample_or_default(element: Element) -> Any:
    samples = element.attributes.get("samples")
    if isinstance(samples, ArrayElement) and not samples.is_empty:
        return samples[0].to_value()
    default = element.attributes.get("default")
    if default is not None:
        return default.to_value()
    return _MISSING


def _fallback(element: Element) -> Any:
    value = _sample_or_default(element)
    if value is not _MISSING:
        return value
    if "nullable" in element.type_attributes:
        return None
    return _empty_value(element)


def _object_value(
    element: ObjectElement, lookup: dict[str, Element], seen: frozenset[str]
) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for member in element.members():
        if member.key is None:
            continue
        key = member.key.to_value()
        result[key] = value_of(member.value, lookup, seen) if member.value is not None else None
    return result


def _empty_value(element: Element) -> Any:
    if isinstance(element, ObjectElement):
        return {}
    if isinstance(element, ArrayElement):
        return []
    if isinstance(element, StringElement):
        return ""
    if isinstance(element, NumberElement):
        return 0
    if isinstance(element, BooleanElement):
        return False
    return None
