"""Terminal output for the oas3elements CLI.

Two streams, two jobs:

* **stdout** carries the result of a command and nothing else: Refract JSON
  from ``parse``, plain JSON from ``serialize``, the annotation or summary
  tables. It is what gets piped into files and other tools.
* **stderr** carries everything said *about* the run: annotations found in
  the document, status lines, errors, ``--verbose`` debug output, and the
  records of the ``oas3elements`` logger.

Rich styling is used only when stdout is a terminal and colour has not been
turned off with ``--no-color``, ``NO_COLOR`` or ``TERM=dumb`` (see
`clig.dev <https://clig.dev/>`_).

:func:`~oas3elements.app.main_callback` builds one :class:`OutputManager`
from the global flags and installs it with :func:`set_output`; commands then
use the module-level functions (:func:`print_json`, :func:`warning`, ...)
which forward to that instance.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from oas3elements.elements import Annotation

LOGGER_NAME = "oas3elements"


class OutputFormat(str, Enum):
    """How command results are rendered on stdout.

    ``AUTO`` picks ``RICH`` for an interactive, colour-capable terminal and
    ``PLAIN`` for everything else. ``--json`` and ``--plain`` select a
    format explicitly.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Writes command results to stdout and diagnostics to stderr.

    Args:
        format: Requested format; ``AUTO`` is resolved on construction.
        no_color: Never emit colour or Rich markup.
        quiet: Drop info, success and warning messages. Errors still print.
        verbose: Print debug messages and debug-level log records.
        output_file: Write command results to this path instead of stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file
        self._output_started = False

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        rich = self._format == OutputFormat.RICH
        # No explicit file: the consoles look up sys.stdout/sys.stderr on every write.
        self._stdout = Console(no_color=self._no_color, force_terminal=rich)
        self._stderr = Console(no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    def configure_logging(self) -> None:
        """Send ``oas3elements`` log records to stderr through Rich.

        Debug records are shown with ``--verbose``; otherwise only warnings
        and above. Calling this again replaces the previous handler.
        """
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            if isinstance(handler, RichHandler):
                logger.removeHandler(handler)

        handler = RichHandler(console=self._stderr, show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if self._verbose else logging.WARNING)
        logger.propagate = False

    # ------------------------------------------------------------------ #
    # Results (stdout)
    # ------------------------------------------------------------------ #

    def print_json(self, data: Any, indent: Optional[int] = 2) -> None:
        """Write *data* as JSON.

        On a Rich terminal the document is syntax highlighted; files, pipes
        and the JSON/plain formats get the bare text.
        """
        text = json.dumps(data, indent=indent, ensure_ascii=False)
        if self._format == OutputFormat.RICH and not self._output_file:
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
            return
        self.print_data(text)

    def print_data(self, text: str) -> None:
        """Write *text* verbatim, newline-terminated, to stdout or the output file.

        The output file is truncated by the first write of the run; later
        writes append to it.
        """
        if not self._output_file:
            print(text, file=sys.stdout, flush=True)
            return
        mode = "a" if self._output_started else "w"
        self._output_started = True
        with open(self._output_file, mode, encoding="utf-8") as f:
            f.write(text if text.endswith("\n") else text + "\n")

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write rows of strings as a table.

        JSON renders a list of ``{header: cell}`` objects, plain renders
        tab-separated lines under a header line, Rich renders a boxed
        :class:`~rich.table.Table` with *title* as its caption.
        """
        if self._format == OutputFormat.JSON:
            self.print_data(
                json.dumps([dict(zip(headers, row)) for row in rows], indent=2, ensure_ascii=False)
            )
        elif self._format == OutputFormat.PLAIN:
            self.print_data("\n".join("\t".join(cells) for cells in [headers, *rows]))
        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def _diagnostic(self, message: str, prefix: str = "", style: Optional[str] = None) -> None:
        if self._no_color:
            print(f"{prefix}{message}", file=sys.stderr, flush=True)
            return

        body = escape(message)
        if prefix:
            label = escape(prefix)
            head = f"[{style}]{label}[/{style}]" if style else label
            self._stderr.print(f"{head}{body}", highlight=False)
        elif style:
            self._stderr.print(f"[{style}]{body}[/{style}]", highlight=False)
        else:
            self._stderr.print(body, highlight=False)

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message, style="green")

    def warning(self, message: str) -> None:
        """Report a warning; ``--quiet`` hides it."""
        if not self._quiet:
            self._diagnostic(message, "Warning: ", "yellow")

    def error(self, message: str) -> None:
        """Report an error. Always shown."""
        self._diagnostic(message, "Error: ", "bold red")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic(message, "[debug] ", "dim")

    def annotations(self, annotations: list[Annotation]) -> None:
        """Report each annotation of a parse result as a warning or an error."""
        for annotation in annotations:
            report = self.error if annotation.is_error else self.warning
            report(str(annotation.to_value()))


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (to anything) or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating an ``AUTO`` one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests use this between runs)."""
    global _output
    _output = None


def print_json(data: Any, indent: Optional[int] = 2) -> None:
    get_output().print_json(data, indent)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)


def report_annotations(annotations: list[Annotation]) -> None:
    get_output().annotations(annotations)
