"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~oas3elements.exceptions.Oas3ElementsError` subclass.
CI scripts can inspect the exit code to tell a broken document from a
missing file without parsing stderr.

Example::

    $ oas3elements parse broken.yaml > /dev/null
    $ echo $?
    7   # EXIT_DOCUMENT_ERROR -- the parse result contains errors
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SOURCE_ERROR = 6
"""The source document could not be read (missing file, HTTP failure, empty stdin)."""

EXIT_DOCUMENT_ERROR = 7
"""The document was read but its parse result contains error annotations."""
