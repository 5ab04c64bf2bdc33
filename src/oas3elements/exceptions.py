"""Exception hierarchy for oas3elements.

The parser never raises for problems *inside* a document; those become
annotation elements in the parse result. Exceptions are reserved for the
layers around it: reading sources, loading configuration, decoding Refract
JSON and CLI usage.

All exceptions inherit from :class:`Oas3ElementsError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`oas3elements.exit_codes`. The entry point in :func:`oas3elements.app.main`
catches ``Oas3ElementsError`` and exits with the appropriate code.

Subclass hierarchy::

    Oas3ElementsError       (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SourceLoadError     (exit 6)
    +-- DocumentParseError  (exit 7)
    +-- RefractDecodeError  (exit 7)
    +-- ReferenceResolutionError (exit 7)
    +-- ConfigError         (exit 1)
"""

from oas3elements.exit_codes import (
    EXIT_DOCUMENT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SOURCE_ERROR,
)


class Oas3ElementsError(Exception):
    """Base exception for all oas3elements errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`oas3elements.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(Oas3ElementsError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class SourceLoadError(Oas3ElementsError):
    """Raised when a source document cannot be read from a file, URL or stdin."""

    exit_code = EXIT_SOURCE_ERROR


class DocumentParseError(Oas3ElementsError):
    """Raised by the CLI when a parse result contains error annotations.

    Args:
        message: Summary printed to stderr.
        errors: The error messages found in the parse result.
    """

    exit_code = EXIT_DOCUMENT_ERROR

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


class RefractDecodeError(Oas3ElementsError):
    """Raised when Refract JSON cannot be turned back into an element tree."""

    exit_code = EXIT_DOCUMENT_ERROR


class ReferenceResolutionError(Oas3ElementsError):
    """Raised when a ``$ref`` pointer cannot be followed while building a JSON Schema."""

    exit_code = EXIT_DOCUMENT_ERROR


class ConfigError(Oas3ElementsError):
    """Raised for configuration problems (invalid project config, bad environment values)."""

    exit_code = EXIT_GENERIC_FAILURE
