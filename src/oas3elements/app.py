"""Typer application and console-script entry point.

The root app carries the output flags shared by every command and registers
the three commands:

* ``parse`` -- OpenAPI 3 document to Refract JSON (or a ``--summary``).
* ``annotations`` -- the warnings and errors a parse produces, as a table.
* ``serialize`` -- Refract JSON back to the plain JSON value of the tree.

:func:`main` is what ``pyproject.toml`` installs as ``oas3elements``. A
:class:`~oas3elements.exceptions.Oas3ElementsError` escaping a command ends
the process with that error's ``exit_code``; anything else is reported as
unexpected and exits with :data:`~oas3elements.exit_codes.EXIT_GENERIC_FAILURE`.

See Also:
    :mod:`oas3elements.config`: Where parser options come from.
    :mod:`oas3elements.output`: The stdout/stderr manager set up in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any, Optional

import typer

from oas3elements import __version__
from oas3elements.commands.parse import annotations_command, parse_command
from oas3elements.commands.serialize import serialize_command
from oas3elements.exit_codes import EXIT_GENERIC_FAILURE
from oas3elements.output import OutputFormat, OutputManager, set_output

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="oas3elements",
    help="Convert OpenAPI 3.0 documents into API Elements.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("parse")(parse_command)
app.command("annotations")(annotations_command)
app.command("serialize")(serialize_command)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"oas3elements {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Print the oas3elements version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Render results as JSON (tables become lists of objects)."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Render results as plain text, tables as TSV."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Never colour output (also honours NO_COLOR)."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Hide warnings and status messages; errors still print."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Print debug messages and parser log records."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write the command result to this file instead of stdout."
    ),
) -> None:
    """Install the :class:`~oas3elements.output.OutputManager` for this run.

    ``--json`` wins over ``--plain``; with neither, the format follows the
    terminal. Library logging is routed through the same manager so that
    ``--verbose`` also shows parser debug records.
    """
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = OutputFormat.AUTO

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        output_file=output_file,
    )
    output.configure_logging()
    set_output(output)


def _cancel(*_: Any) -> None:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def main() -> None:
    """Run the CLI. Always ends in :class:`SystemExit`."""
    signal.signal(signal.SIGINT, _cancel)
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        _cancel()
    except Exception as exc:
        from oas3elements.exceptions import Oas3ElementsError
        from oas3elements.output import error

        if isinstance(exc, Oas3ElementsError):
            error(str(exc))
            sys.exit(exc.exit_code)
        logger.debug("Unhandled exception", exc_info=True)
        error(f"Unexpected error: {exc}. Run with --verbose for a traceback.")
        sys.exit(EXIT_GENERIC_FAILURE)
