"""Serialize command -- plain JSON from a Refract element tree.

Reads Refract JSON (for example the output of ``oas3elements parse``) and
prints the plain JSON value of the whole tree, or of the element whose
``meta.id`` is given with ``--id``. References by name are expanded through
the data structures found in the tree.
"""

from __future__ import annotations

from typing import Optional

import typer

from oas3elements.elements import Element
from oas3elements.exceptions import InvalidUsageError, Oas3ElementsError
from oas3elements.output import debug, error, print_data
from oas3elements.parser import load_source
from oas3elements.serializers import deserialize_refract, serialize_json


def find_by_id(root: Element, identifier: str) -> Optional[Element]:
    """Return the first element of the tree (root included) with ``meta.id`` *identifier*."""
    if root.id == identifier:
        return root
    for element in root.recursive_children():
        if element.id == identifier:
            return element
    return None


def serialize_command(
    source: str = typer.Argument(
        ..., help="Refract JSON document: file path, http(s) URL, or '-' for stdin."
    ),
    identifier: Optional[str] = typer.Option(
        None, "--id", help="Serialize only the element with this meta.id."
    ),
    compact: bool = typer.Option(False, "--compact", help="Print JSON without indentation."),
) -> None:
    """Print the plain JSON value of a Refract element tree.

    Example::

        oas3elements parse petstore.yaml | oas3elements serialize - --id Pet
    """
    try:
        element = deserialize_refract(load_source(source))
        if identifier is not None:
            target = find_by_id(element, identifier)
            if target is None:
                raise InvalidUsageError(f"No element with id '{identifier}' in {source}")
            debug(f"Serializing {target.element} element '{identifier}'")
            element = target
    except Oas3ElementsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    print_data(serialize_json(element, indent=None if compact else 2))
