"""Per-parse state shared by every OpenAPI object parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from oas3elements.elements import Element, ObjectElement
from oas3elements.models import ParseOptions
from oas3elements.parser.predicates import is_object


@dataclass
class ParserState:
    """Mutable state of a single parse.

    Attributes:
        components: The raw ``components`` object of the document, used to
            resolve Reference Objects.
        data_structures: Parsed component schemas keyed by name.
        document: The raw root object.
        references: ``$ref`` strings currently being resolved, innermost
            last.
    """

    components: Optional[ObjectElement] = None
    data_structures: dict[str, Element] = field(default_factory=dict)
    document: Optional[ObjectElement] = None
    references: list[str] = field(default_factory=list)
    _document_value: Any = None

    def document_value(self) -> Any:
        """The root object as plain Python data, computed once."""
        if self._document_value is None and self.document is not None:
            self._document_value = self.document.to_value()
        return self._document_value


class Context:
    """Options and state threaded through the parser functions.

    Args:
        options: Parser switches; defaults apply when omitted.
    """

    def __init__(self, options: Optional[ParseOptions] = None) -> None:
        self.options = options or ParseOptions()
        self.state = ParserState()

    def component_section(self, section: str) -> Optional[ObjectElement]:
        components = self.state.components
        if not is_object(components):
            return None
        value = components.get(section)
        return value if is_object(value) else None

    def component(self, section: str, name: str) -> Optional[Element]:
        """Return the raw component ``components.<section>.<name>``."""
        values = self.component_section(section)
        return values.get(name) if values is not None else None

    def has_component(self, section: str, name: str) -> bool:
        values = self.component_section(section)
        return values is not None and values.has_key(name)
