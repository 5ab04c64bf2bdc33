"""OpenAPI 3 parser -- load, decode, and map a document onto API Elements.

Typical usage::

    from oas3elements.parser import load_source, parse

    result = parse(load_source("petstore.yaml"))
    for annotation in result.annotations:
        print(annotation.to_value())

Sub-modules:

* :mod:`~oas3elements.parser.loader` -- I/O layer (URL, file, stdin) plus
  JSON/YAML decoding and document detection.
* :mod:`~oas3elements.parser.oas` -- One parser per OpenAPI object, from
  :func:`~oas3elements.parser.oas.parse_openapi_object.parse_openapi_object`
  down to Schema Objects.
* :mod:`~oas3elements.parser.results`, :mod:`~oas3elements.parser.parse_object`
  and :mod:`~oas3elements.parser.annotations` -- Helpers shared by every
  object parser.
"""

from __future__ import annotations

import logging
from typing import Optional

from oas3elements.elements import ParseResult, refract
from oas3elements.exceptions import SourceLoadError
from oas3elements.models import ParseOptions
from oas3elements.parser.annotations import create_error
from oas3elements.parser.context import Context
from oas3elements.parser.loader import decode_document, detect, load_source
from oas3elements.parser.oas.parse_openapi_object import parse_openapi_object

logger = logging.getLogger(__name__)

__all__ = ["parse", "detect", "load_source", "decode_document"]


def parse(source: str, options: Optional[ParseOptions] = None) -> ParseResult:
    """Parse the text of an OpenAPI 3 document into a parse result.

    Problems in the document are reported as annotations in the result;
    this function does not raise for them.

    Args:
        source: JSON or YAML text.
        options: Parser switches; defaults apply when omitted.
    """
    try:
        document = decode_document(source)
    except SourceLoadError as exc:
        logger.debug("Document could not be decoded: %s", exc)
        return create_error(f"Unable to parse document: {exc}")

    context = Context(options)
    return parse_openapi_object(context, refract(document))
