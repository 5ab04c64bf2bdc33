"""oas3elements -- Convert OpenAPI 3.0 documents into API Elements.

This package parses an OpenAPI 3.0 document (JSON or YAML) into a Refract
element tree describing the API: a ``category`` for the API itself holding
``resource``, ``transition`` and ``httpTransaction`` elements, plus a
``dataStructures`` category for the schemas declared under ``components``.
Problems found along the way are reported as ``annotation`` elements inside
the parse result rather than raised.

Typical usage::

    from oas3elements.parser import parse
    from oas3elements.serializers import serialize_refract

    result = parse(open("petstore.yaml").read())
    for warning in result.warnings:
        print(warning.to_value())
    print(serialize_refract(result))

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for parser options and project config.
    config: Project config and environment precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    elements: The Refract element model and the API Elements namespace.
    serializers: Refract JSON and plain JSON serialization.
    parser: Source loading and the OpenAPI 3.0 parser.
"""

__version__ = "0.4.0"
