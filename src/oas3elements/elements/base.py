"""Base Refract elements.

Every node in an element tree is an :class:`Element`: a named value with two
open metadata objects, ``meta`` (``id``, ``title``, ``description``,
``classes``, ``links``) and ``attributes`` (element-specific data such as
``href`` or ``statusCode``). The concrete classes in this module cover the
primitive JSON kinds plus ``member``, ``enum``, ``ref`` and ``link``.

Children keep a reference to their parent so that serializers can walk up to
the root of the tree (see :func:`~oas3elements.serializers.serialize_json`).

Use :func:`refract` to turn plain Python values (as produced by ``json`` or
``yaml``) into elements.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional


def refract(value: Any) -> "Element":
    """Convert a plain Python value into an element tree.

    ``None``, ``str``, ``bool``, ``int``/``float``, ``list``/``tuple`` and
    ``dict`` map onto the matching primitive elements. Elements are returned
    unchanged. Dict insertion order is preserved.

    Raises:
        TypeError: If *value* has no element counterpart.
    """
    if isinstance(value, Element):
        return value
    if value is None:
        return NullElement()
    if isinstance(value, str):
        return StringElement(value)
    # bool first: bool is a subclass of int
    if isinstance(value, bool):
        return BooleanElement(value)
    if isinstance(value, (int, float)):
        return NumberElement(value)
    if isinstance(value, (list, tuple)):
        return ArrayElement([refract(item) for item in value])
    if isinstance(value, dict):
        return ObjectElement(value)
    raise TypeError(f"Cannot refract value of type {type(value).__name__}")


class Element:
    """A generic Refract element.

    Args:
        content: The element content. Subclasses convert it to their own
            representation.
        meta: Initial meta properties (plain values are refracted).
        attributes: Initial attributes (plain values are refracted).
        element: Element name override. Used for references by name, where
            the element name is the id of another data structure.
    """

    element_name = "element"

    def __init__(
        self,
        content: Any = None,
        meta: Optional[dict[str, Any]] = None,
        attributes: Optional[dict[str, Any]] = None,
        element: Optional[str] = None,
    ) -> None:
        self.element = element or self.element_name
        self.parent: Optional[Element] = None
        self.meta: dict[str, Element] = {}
        self.attributes: dict[str, Element] = {}
        self._content: Any = None
        for key, value in (meta or {}).items():
            self.set_meta(key, value)
        for key, value in (attributes or {}).items():
            self.set_attribute(key, value)
        self.content = content

    # ------------------------------------------------------------------ #
    # Content
    # ------------------------------------------------------------------ #

    @property
    def content(self) -> Any:
        return self._content

    @content.setter
    def content(self, value: Any) -> None:
        self._content = self._convert_content(value)
        for child in self.children():
            child.parent = self

    def _convert_content(self, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [refract(item) for item in value]
        return value

    def children(self) -> list[Element]:
        """Return the direct child elements held in the content."""
        if isinstance(self._content, Element):
            return [self._content]
        if isinstance(self._content, list):
            return list(self._content)
        return []

    def recursive_children(self) -> Iterator[Element]:
        """Yield every descendant element, depth first, including elements held in meta and attributes."""
        for value in list(self.meta.values()) + list(self.attributes.values()):
            yield value
            yield from value.recursive_children()
        for child in self.children():
            yield child
            yield from child.recursive_children()

    @property
    def root(self) -> Element:
        """The top-most ancestor of this element (itself when it has no parent)."""
        element = self
        while element.parent is not None:
            element = element.parent
        return element

    @property
    def is_empty(self) -> bool:
        return self._content is None

    def to_value(self) -> Any:
        """Return the plain Python value of this element."""
        content = self._content
        if isinstance(content, Element):
            return content.to_value()
        if isinstance(content, list):
            return [item.to_value() for item in content]
        return content

    def clone(self) -> Element:
        """Return a deep copy of this element, detached from any parent."""
        copied = self.__class__.__new__(self.__class__)
        copied.element = self.element
        copied.parent = None
        copied.meta = {}
        copied.attributes = {}
        copied._content = None
        for key, value in self.meta.items():
            copied.set_meta(key, value.clone())
        for key, value in self.attributes.items():
            copied.set_attribute(key, value.clone())
        copied.content = self._clone_content()
        return copied

    def _clone_content(self) -> Any:
        if isinstance(self._content, Element):
            return self._content.clone()
        if isinstance(self._content, list):
            return [item.clone() for item in self._content]
        return self._content

    # ------------------------------------------------------------------ #
    # Meta and attributes
    # ------------------------------------------------------------------ #

    def set_meta(self, key: str, value: Any) -> None:
        element = refract(value)
        element.parent = self
        self.meta[key] = element

    def set_attribute(self, key: str, value: Any) -> None:
        element = refract(value)
        element.parent = self
        self.attributes[key] = element

    def _meta_value(self, key: str) -> Any:
        element = self.meta.get(key)
        return element.to_value() if element is not None else None

    def _attribute_value(self, key: str) -> Any:
        element = self.attributes.get(key)
        return element.to_value() if element is not None else None

    @property
    def id(self) -> Optional[str]:
        return self._meta_value("id")

    @id.setter
    def id(self, value: str) -> None:
        self.set_meta("id", value)

    @property
    def title(self) -> Optional[str]:
        return self._meta_value("title")

    @title.setter
    def title(self, value: str) -> None:
        self.set_meta("title", value)

    @property
    def description(self) -> Optional[str]:
        return self._meta_value("description")

    @description.setter
    def description(self, value: str) -> None:
        self.set_meta("description", value)

    @property
    def classes(self) -> list[str]:
        return self._meta_value("classes") or []

    @classes.setter
    def classes(self, value: list[str]) -> None:
        self.set_meta("classes", list(value))

    def has_class(self, name: str) -> bool:
        return name in self.classes

    @property
    def links(self) -> list[LinkElement]:
        links = self.meta.get("links")
        if links is None:
            return []
        return [link for link in links.children() if isinstance(link, LinkElement)]

    @property
    def type_attributes(self) -> list[str]:
        return self._attribute_value("typeAttributes") or []

    def add_type_attribute(self, name: str) -> None:
        current = self.type_attributes
        if name not in current:
            self.set_attribute("typeAttributes", current + [name])

    def __bool__(self) -> bool:
        # Containers define __len__; an empty array is still an element.
        return True

    def __repr__(self) -> str:
        return f"<{type(self).__name__} element={self.element!r} content={self.to_value()!r}>"


class NullElement(Element):
    element_name = "null"

    def to_value(self) -> Any:
        return None


class StringElement(Element):
    element_name = "string"

    @property
    def is_empty(self) -> bool:
        return not self._content


class NumberElement(Element):
    element_name = "number"


class BooleanElement(Element):
    element_name = "boolean"


class ArrayElement(Element):
    """An ordered list of elements."""

    element_name = "array"

    def _convert_content(self, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, Element):
            return [value]
        return [refract(item) for item in value]

    def __len__(self) -> int:
        return len(self._content)

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self._content))

    def __getitem__(self, index: int) -> Element:
        return self._content[index]

    @property
    def is_empty(self) -> bool:
        return not self._content

    def get(self, index: int) -> Optional[Element]:
        if -len(self._content) <= index < len(self._content):
            return self._content[index]
        return None

    @property
    def first(self) -> Optional[Element]:
        return self.get(0)

    def push(self, item: Any) -> ArrayElement:
        element = refract(item)
        element.parent = self
        self._content.append(element)
        return self

    def extend(self, items: list[Any]) -> ArrayElement:
        for item in items:
            self.push(item)
        return self

    def filter(self, predicate: Callable[[Element], bool]) -> list[Element]:
        return [item for item in self._content if predicate(item)]

    def find(self, predicate: Callable[[Element], bool]) -> Optional[Element]:
        for item in self._content:
            if predicate(item):
                return item
        return None

    def to_value(self) -> list[Any]:
        return [item.to_value() for item in self._content]


class MemberElement(Element):
    """A key/value pair, the building block of :class:`ObjectElement`."""

    element_name = "member"

    def __init__(
        self,
        key: Any = None,
        value: Any = None,
        meta: Optional[dict[str, Any]] = None,
        attributes: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            {"key": key, "value": value}, meta=meta, attributes=attributes
        )

    def _convert_content(self, value: Any) -> Any:
        if value is None:
            value = {}
        key = value.get("key")
        member_value = value.get("value")
        return {
            "key": refract(key) if key is not None else None,
            "value": refract(member_value) if member_value is not None else None,
        }

    def children(self) -> list[Element]:
        return [child for child in (self.key, self.value) if child is not None]

    def _clone_content(self) -> Any:
        return {
            "key": self.key.clone() if self.key is not None else None,
            "value": self.value.clone() if self.value is not None else None,
        }

    @property
    def key(self) -> Optional[Element]:
        return self._content["key"]

    @key.setter
    def key(self, key: Any) -> None:
        self.content = {"key": key, "value": self.value}

    @property
    def value(self) -> Optional[Element]:
        return self._content["value"]

    @value.setter
    def value(self, value: Any) -> None:
        self.content = {"key": self.key, "value": value}

    @property
    def is_empty(self) -> bool:
        return self.value is None

    def to_value(self) -> dict[str, Any]:
        return {
            "key": self.key.to_value() if self.key is not None else None,
            "value": self.value.to_value() if self.value is not None else None,
        }


class ObjectElement(ArrayElement):
    """An ordered collection of :class:`MemberElement` instances.

    Accepts a dict (refracted member by member) or a list of members.
    """

    element_name = "object"

    def _convert_content(self, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, dict):
            return [MemberElement(key, refract(val)) for key, val in value.items()]
        if isinstance(value, MemberElement):
            return [value]
        return [
            item if isinstance(item, Element) else refract(item) for item in value
        ]

    def members(self) -> list[MemberElement]:
        return [item for item in self._content if isinstance(item, MemberElement)]

    def get_member(self, key: str) -> Optional[MemberElement]:
        for member in self.members():
            if member.key is not None and member.key.to_value() == key:
                return member
        return None

    def get(self, key: str) -> Optional[Element]:  # type: ignore[override]
        member = self.get_member(key)
        return member.value if member is not None else None

    def has_key(self, key: str) -> bool:
        return self.get_member(key) is not None

    def set(self, key: str, value: Any) -> ObjectElement:
        member = self.get_member(key)
        if member is not None:
            member.value = value
        else:
            self.push(MemberElement(key, value))
        return self

    def remove(self, key: str) -> Optional[MemberElement]:
        member = self.get_member(key)
        if member is not None:
            self._content.remove(member)
            member.parent = None
        return member

    def keys(self) -> list[Any]:
        return [member.key.to_value() for member in self.members() if member.key is not None]

    def values(self) -> list[Element]:
        return [member.value for member in self.members() if member.value is not None]

    def items(self) -> list[tuple[Any, Element]]:
        return [
            (member.key.to_value(), member.value)
            for member in self.members()
            if member.key is not None and member.value is not None
        ]

    def to_value(self) -> dict[str, Any]:  # type: ignore[override]
        result: dict[str, Any] = {}
        for member in self.members():
            if member.key is None:
                continue
            result[member.key.to_value()] = (
                member.value.to_value() if member.value is not None else None
            )
        return result


class EnumElement(Element):
    """A value restricted to one of ``attributes.enumerations``."""

    element_name = "enum"

    def _convert_content(self, value: Any) -> Any:
        return refract(value) if value is not None else None

    @property
    def enumerations(self) -> list[Element]:
        enumerations = self.attributes.get("enumerations")
        return enumerations.children() if enumerations is not None else []

    @enumerations.setter
    def enumerations(self, values: list[Any]) -> None:
        self.set_attribute("enumerations", ArrayElement(values))


class RefElement(Element):
    """A reference to another element by id (``content`` is the id)."""

    element_name = "ref"


class LinkElement(Element):
    """A hyperlink stored in ``meta.links``."""

    element_name = "link"

    def __init__(
        self,
        content: Any = None,
        meta: Optional[dict[str, Any]] = None,
        attributes: Optional[dict[str, Any]] = None,
        relation: Optional[str] = None,
        href: Optional[str] = None,
    ) -> None:
        super().__init__(content, meta=meta, attributes=attributes)
        if relation is not None:
            self.set_attribute("relation", relation)
        if href is not None:
            self.set_attribute("href", href)

    @property
    def relation(self) -> Optional[str]:
        return self._attribute_value("relation")

    @property
    def href(self) -> Optional[str]:
        return self._attribute_value("href")


BASE_ELEMENTS: dict[str, type[Element]] = {
    cls.element_name: cls
    for cls in (
        NullElement,
        StringElement,
        NumberElement,
        BooleanElement,
        ArrayElement,
        MemberElement,
        ObjectElement,
        EnumElement,
        RefElement,
        LinkElement,
    )
}
"""Mapping of primitive element names to their classes."""
