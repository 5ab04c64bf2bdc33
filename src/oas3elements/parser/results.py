"""Helpers for composing parse steps.

A parse step is any callable that takes elements and returns either an
element or a :class:`~oas3elements.elements.ParseResult`. Steps are chained
with :func:`pipe_parse_result`; dispatch tables are built with :func:`cond`.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from oas3elements.elements import ArrayElement, Element, ParseResult

Step = Callable[..., Any]


def to_parse_result(value: Any) -> ParseResult:
    """Wrap a plain element (or nothing) into a parse result."""
    if isinstance(value, ParseResult):
        return value
    if value is None:
        return ParseResult()
    return ParseResult([value])


def combine(*results: ParseResult) -> ParseResult:
    """Merge parse results: all content first, then all annotations, in order."""
    content: list[Element] = []
    annotations: list[Element] = []
    for result in results:
        content.extend(result.content_elements)
        annotations.extend(result.annotations)
    return ParseResult(content + annotations)


def pipe_parse_result(*steps: Step) -> Callable[..., ParseResult]:
    """Chain parse steps, threading content and accumulating annotations.

    Each step receives the content of the previous result as positional
    arguments. The chain stops at the first result with no content left to
    pass on; an error result carries none.
    """

    def run(*args: Any) -> ParseResult:
        annotations: list[Element] = []
        values: list[Element] = list(args)
        for step in steps:
            result = to_parse_result(step(*values))
            annotations.extend(result.annotations)
            values = result.content_elements
            if not values:
                break
        return ParseResult(values + annotations)

    return run


def cond(table: Sequence[tuple[Callable[[Any], bool], Step]]) -> Step:
    """Build a dispatch function: the first matching predicate's handler runs."""

    def dispatch(value: Any) -> Any:
        for predicate, handler in table:
            if predicate(value):
                return handler(value)
        return None

    return dispatch


def as_array(result: ParseResult) -> ParseResult:
    """Collect the content of *result* into a single array element.

    A failed result (errors and no content) is returned unchanged.
    """
    if result.has_errors and not result.content_elements:
        return result
    return ParseResult([ArrayElement(result.content_elements)] + result.annotations)


def empty(_: Any = None) -> ParseResult:
    return ParseResult()
