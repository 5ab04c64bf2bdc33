"""Refract element model and the API Elements namespace.

:mod:`~oas3elements.elements.base` holds the generic element kinds and
:func:`~oas3elements.elements.base.refract`; :mod:`~oas3elements.elements.api`
holds the API description elements. :data:`ELEMENTS` maps every known element
name to its class and drives Refract deserialization.
"""

from oas3elements.elements.api import (
    API_ELEMENTS,
    Annotation,
    Asset,
    Category,
    Copy,
    DataStructure,
    Extension,
    HrefVariables,
    HttpHeaders,
    HttpMessagePayload,
    HttpRequest,
    HttpResponse,
    HttpTransaction,
    ParseResult,
    Resource,
    Transition,
)
from oas3elements.elements.base import (
    BASE_ELEMENTS,
    ArrayElement,
    BooleanElement,
    Element,
    EnumElement,
    LinkElement,
    MemberElement,
    NullElement,
    NumberElement,
    ObjectElement,
    RefElement,
    StringElement,
    refract,
)

ELEMENTS = {**BASE_ELEMENTS, **API_ELEMENTS}

__all__ = [
    "ELEMENTS",
    "Annotation",
    "ArrayElement",
    "Asset",
    "BooleanElement",
    "Category",
    "Copy",
    "DataStructure",
    "Element",
    "EnumElement",
    "Extension",
    "HrefVariables",
    "HttpHeaders",
    "HttpMessagePayload",
    "HttpRequest",
    "HttpResponse",
    "HttpTransaction",
    "LinkElement",
    "MemberElement",
    "NullElement",
    "NumberElement",
    "ObjectElement",
    "ParseResult",
    "RefElement",
    "Resource",
    "StringElement",
    "Transition",
    "refract",
]
