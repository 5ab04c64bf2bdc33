"""Parse commands -- run the OpenAPI 3 parser on a document.

``oas3elements parse SOURCE`` prints the Refract JSON parse result on stdout
and reports every annotation on stderr. ``oas3elements annotations SOURCE``
prints only the annotations, as a table. Both exit with
:data:`~oas3elements.exit_codes.EXIT_DOCUMENT_ERROR` when the parse result
contains errors.
"""

from __future__ import annotations

from typing import Optional

import typer

from oas3elements.config import resolve_options
from oas3elements.elements import ParseResult
from oas3elements.exceptions import DocumentParseError, Oas3ElementsError
from oas3elements.models import AnnotationRecord, ParseSummary
from oas3elements.output import (
    OutputFormat,
    debug,
    error,
    get_output,
    print_json,
    print_table,
    report_annotations,
    warning,
)
from oas3elements.parser import detect, load_source, parse
from oas3elements.serializers import to_refract


def _flag_override(disabled: bool) -> Optional[bool]:
    # An unset flag must not override the environment or project config.
    return False if disabled else None


def _parse_source(
    source: str,
    no_message_body: bool = False,
    no_message_body_schema: bool = False,
) -> ParseResult:
    options = resolve_options(
        generate_message_body=_flag_override(no_message_body),
        generate_message_body_schema=_flag_override(no_message_body_schema),
    )
    debug(f"Parser options: {options.model_dump()}")

    text = load_source(source)
    if not detect(text):
        warning(f"{source} does not declare an OpenAPI 3 version")

    return parse(text, options)


def _exit_for_errors(result: ParseResult) -> None:
    errors = [str(annotation.to_value()) for annotation in result.errors]
    if errors:
        exc = DocumentParseError(f"Parse result contains {len(errors)} error(s)", errors=errors)
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)


def summarize(result: ParseResult) -> ParseSummary:
    """Count the resources, transitions and data structures of a parse result."""
    summary = ParseSummary(
        warnings=len(result.warnings),
        errors=len(result.errors),
    )
    api = result.api
    if api is None:
        return summary

    summary.title = api.title
    summary.version = api.version
    summary.resources = len(api.resources)
    summary.transitions = sum(len(resource.transitions) for resource in api.resources)
    summary.data_structures = sum(
        len(category.data_structures) for category in api.categories("dataStructures")
    )
    return summary


def annotation_records(result: ParseResult) -> list[AnnotationRecord]:
    return [
        AnnotationRecord(
            severity="error" if annotation.is_error else "warning",
            message=str(annotation.to_value()),
        )
        for annotation in result.annotations
    ]


def parse_command(
    source: str = typer.Argument(
        ..., help="OpenAPI document: file path, http(s) URL, or '-' for stdin."
    ),
    no_message_body: bool = typer.Option(
        False,
        "--no-message-body",
        help="Do not generate message bodies from schemas.",
    ),
    no_message_body_schema: bool = typer.Option(
        False,
        "--no-message-body-schema",
        help="Do not attach JSON Schema message body schemas.",
    ),
    summary: bool = typer.Option(
        False, "--summary", help="Print counts instead of the parse result."
    ),
) -> None:
    """Parse an OpenAPI 3 document into API Elements (Refract JSON).

    Example::

        oas3elements parse petstore.yaml > petstore.refract.json
        oas3elements parse --summary https://example.com/openapi.json
    """
    try:
        result = _parse_source(source, no_message_body, no_message_body_schema)
    except Oas3ElementsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    report_annotations(result.annotations)

    if summary:
        data = summarize(result).model_dump()
        if get_output().format == OutputFormat.JSON:
            print_json(data)
        else:
            print_table(
                ["Field", "Value"],
                [[key, "" if value is None else str(value)] for key, value in data.items()],
                title="Parse summary",
            )
    else:
        print_json(to_refract(result))

    _exit_for_errors(result)


def annotations_command(
    source: str = typer.Argument(
        ..., help="OpenAPI document: file path, http(s) URL, or '-' for stdin."
    ),
) -> None:
    """List the warnings and errors found while parsing a document.

    Example::

        oas3elements annotations petstore.yaml
        oas3elements --json annotations petstore.yaml
    """
    try:
        result = _parse_source(source)
    except Oas3ElementsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    records = annotation_records(result)

    if not records:
        get_output().success("No annotations.")
    else:
        print_table(
            ["Severity", "Message"],
            [[record.severity, record.message] for record in records],
            title="Annotations",
        )

    _exit_for_errors(result)
