"""Parsers for the objects of the OpenAPI 3.0 specification.

One module per OpenAPI object. Each parser takes the shared
:class:`~oas3elements.parser.context.Context` and an element (or a member,
when the key carries meaning such as an HTTP method or a media type) and
returns a :class:`~oas3elements.elements.ParseResult`.
"""
