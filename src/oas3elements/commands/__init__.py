"""Built-in CLI sub-commands for oas3elements.

* :mod:`~oas3elements.commands.parse` -- ``parse`` and ``annotations``:
  run the OpenAPI parser on a document.
* :mod:`~oas3elements.commands.serialize` -- ``serialize``: turn a Refract
  element tree into plain JSON.

Each module exports plain callback functions registered directly on the
root app in :func:`oas3elements.app.main`.
"""
