"""API Elements namespace.

Semantic elements layered on the base Refract kinds. A parse result holds a
single ``category`` with the ``api`` class::

    parseResult
    +-- category (api)
    |   +-- copy
    |   +-- resource (href)
    |   |   +-- transition
    |   |       +-- httpTransaction
    |   |           +-- httpRequest (method, headers)
    |   |           +-- httpResponse (statusCode, headers)
    |   +-- category (dataStructures)
    |       +-- dataStructure
    +-- annotation (warning | error)

The accessors below read and write the well-known meta and attribute keys so
callers never deal with raw attribute names.
"""

from __future__ import annotations

from typing import Any, Optional

from oas3elements.elements.base import (
    ArrayElement,
    Element,
    MemberElement,
    ObjectElement,
    StringElement,
    refract,
)


class Annotation(StringElement):
    """A warning or error message attached to a parse result."""

    element_name = "annotation"

    @property
    def is_warning(self) -> bool:
        return self.has_class("warning")

    @property
    def is_error(self) -> bool:
        return self.has_class("error")


class Copy(StringElement):
    """Human readable text (a description)."""

    element_name = "copy"

    @property
    def content_type(self) -> Optional[str]:
        return self._attribute_value("contentType")


class ParseResult(ArrayElement):
    """The outcome of a parse step: content elements followed by annotations."""

    element_name = "parseResult"

    @property
    def annotations(self) -> list[Annotation]:
        return [item for item in self._content if isinstance(item, Annotation)]

    @property
    def warnings(self) -> list[Annotation]:
        return [item for item in self.annotations if item.is_warning]

    @property
    def errors(self) -> list[Annotation]:
        return [item for item in self.annotations if item.is_error]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def content_elements(self) -> list[Element]:
        """The non-annotation content."""
        return [item for item in self._content if not isinstance(item, Annotation)]

    @property
    def api(self) -> Optional[Category]:
        for item in self._content:
            if isinstance(item, Category) and item.has_class("api"):
                return item
        return None


class Category(ArrayElement):
    """A grouping element (``api``, ``resourceGroup``, ``dataStructures``)."""

    element_name = "category"

    @property
    def copy(self) -> list[Copy]:
        return [item for item in self._content if isinstance(item, Copy)]

    @property
    def resources(self) -> list[Resource]:
        return [item for item in self._content if isinstance(item, Resource)]

    @property
    def data_structures(self) -> list[DataStructure]:
        return [item for item in self._content if isinstance(item, DataStructure)]

    def categories(self, class_name: Optional[str] = None) -> list[Category]:
        return [
            item
            for item in self._content
            if isinstance(item, Category)
            and (class_name is None or item.has_class(class_name))
        ]

    @property
    def version(self) -> Optional[str]:
        return self._attribute_value("version")

    @version.setter
    def version(self, value: str) -> None:
        self.set_attribute("version", value)


class HrefVariables(ObjectElement):
    """URI template variables, one member per variable."""

    element_name = "hrefVariables"


class HttpHeaders(ObjectElement):
    """HTTP headers, one member per header. Lookup is case-insensitive."""

    element_name = "httpHeaders"

    def get_member(self, key: str) -> Optional[MemberElement]:
        lowered = key.lower()
        for member in self.members():
            if member.key is not None and str(member.key.to_value()).lower() == lowered:
                return member
        return None

    def include(self, key: str) -> bool:
        return self.get_member(key) is not None


class _Transitionable(ArrayElement):
    @property
    def href(self) -> Optional[str]:
        return self._attribute_value("href")

    @href.setter
    def href(self, value: str) -> None:
        self.set_attribute("href", value)

    @property
    def href_variables(self) -> Optional[HrefVariables]:
        value = self.attributes.get("hrefVariables")
        return value if isinstance(value, HrefVariables) else None

    @href_variables.setter
    def href_variables(self, value: HrefVariables) -> None:
        self.set_attribute("hrefVariables", value)

    @property
    def copy(self) -> list[Copy]:
        return [item for item in self._content if isinstance(item, Copy)]


class Resource(_Transitionable):
    """A URI (``href``) and the transitions available on it."""

    element_name = "resource"

    @property
    def transitions(self) -> list[Transition]:
        return [item for item in self._content if isinstance(item, Transition)]

    @property
    def data_structure(self) -> Optional[DataStructure]:
        for item in self._content:
            if isinstance(item, DataStructure):
                return item
        return None


class Transition(_Transitionable):
    """An operation on a resource, holding one transaction per request/response pair."""

    element_name = "transition"

    @property
    def transactions(self) -> list[HttpTransaction]:
        return [item for item in self._content if isinstance(item, HttpTransaction)]

    @property
    def method(self) -> Optional[str]:
        for transaction in self.transactions:
            request = transaction.request
            if request is not None and request.method:
                return request.method
        return None


class HttpTransaction(ArrayElement):
    """A request paired with one possible response."""

    element_name = "httpTransaction"

    @property
    def request(self) -> Optional[HttpRequest]:
        for item in self._content:
            if isinstance(item, HttpRequest):
                return item
        return None

    @property
    def response(self) -> Optional[HttpResponse]:
        for item in self._content:
            if isinstance(item, HttpResponse):
                return item
        return None


class HttpMessagePayload(ArrayElement):
    """Shared accessors of :class:`HttpRequest` and :class:`HttpResponse`."""

    @property
    def headers(self) -> Optional[HttpHeaders]:
        value = self.attributes.get("headers")
        return value if isinstance(value, HttpHeaders) else None

    @headers.setter
    def headers(self, value: HttpHeaders) -> None:
        self.set_attribute("headers", value)

    @property
    def content_type(self) -> Optional[str]:
        headers = self.headers
        if headers is None:
            return None
        value = headers.get("Content-Type")
        return value.to_value() if value is not None else None

    @property
    def data_structure(self) -> Optional[DataStructure]:
        for item in self._content:
            if isinstance(item, DataStructure):
                return item
        return None

    def _asset(self, class_name: str) -> Optional[Asset]:
        for item in self._content:
            if isinstance(item, Asset) and item.has_class(class_name):
                return item
        return None

    @property
    def message_body(self) -> Optional[Asset]:
        return self._asset("messageBody")

    @property
    def message_body_schema(self) -> Optional[Asset]:
        return self._asset("messageBodySchema")

    @property
    def copy(self) -> list[Copy]:
        return [item for item in self._content if isinstance(item, Copy)]


class HttpRequest(HttpMessagePayload):
    element_name = "httpRequest"

    @property
    def method(self) -> Optional[str]:
        return self._attribute_value("method")

    @method.setter
    def method(self, value: str) -> None:
        self.set_attribute("method", value)


class HttpResponse(HttpMessagePayload):
    element_name = "httpResponse"

    @property
    def status_code(self) -> Optional[str]:
        return self._attribute_value("statusCode")

    @status_code.setter
    def status_code(self, value: str) -> None:
        self.set_attribute("statusCode", value)


class Asset(StringElement):
    """A literal body (``messageBody``) or schema (``messageBodySchema``)."""

    element_name = "asset"

    def __init__(
        self,
        content: Any = None,
        meta: Optional[dict[str, Any]] = None,
        attributes: Optional[dict[str, Any]] = None,
        content_type: Optional[str] = None,
    ) -> None:
        super().__init__(content, meta=meta, attributes=attributes)
        if content_type is not None:
            self.set_attribute("contentType", content_type)

    @property
    def content_type(self) -> Optional[str]:
        return self._attribute_value("contentType")


class DataStructure(Element):
    """Wraps a single element describing the shape of a payload."""

    element_name = "dataStructure"

    def _convert_content(self, value: Any) -> Any:
        return refract(value) if value is not None else None


class Extension(Element):
    """A vendor extension; its ``profile`` link names the extension definition."""

    element_name = "extension"

    @property
    def profile(self) -> Optional[str]:
        for link in self.links:
            if link.relation == "profile":
                return link.href
        return None


API_ELEMENTS: dict[str, type[Element]] = {
    cls.element_name: cls
    for cls in (
        Annotation,
        Copy,
        ParseResult,
        Category,
        HrefVariables,
        HttpHeaders,
        Resource,
        Transition,
        HttpTransaction,
        HttpRequest,
        HttpResponse,
        Asset,
        DataStructure,
        Extension,
    )
}
"""Mapping of API Elements names to their classes."""
