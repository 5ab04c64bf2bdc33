"""Shared test fixtures for oas3elements.

Provides reusable fixtures for loading document fixtures, building parse
contexts, isolating configuration, managing output state, and running CLI
commands. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from oas3elements.elements import ObjectElement, refract
from oas3elements.output import OutputFormat, OutputManager, reset_output, set_output
from oas3elements.parser.context import Context


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def petstore_raw(petstore_path: Path) -> dict[str, Any]:
    """Load the raw petstore document dict."""
    with open(petstore_path) as f:
        return json.load(f)


@pytest.fixture
def petstore_text(petstore_path: Path) -> str:
    return petstore_path.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Parser fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def context() -> Context:
    """A fresh parse context with default options."""
    return Context()


@pytest.fixture
def install_components(context: Context):
    """Return a helper installing ``components`` on the ``context`` fixture.

    Mirrors what the OpenAPI Object parser does before parsing ``paths``.
    """

    def install(components: dict[str, Any]) -> ObjectElement:
        element = refract(components)
        context.state.components = element
        context.state.document = refract({"components": components})
        return element

    return install


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Clears all OAS3ELEMENTS_* environment variables and changes the working
    directory to tmp_path so that no project config leaks into tests.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in [
        "OAS3ELEMENTS_GENERATE_MESSAGE_BODY",
        "OAS3ELEMENTS_GENERATE_MESSAGE_BODY_SCHEMA",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output(capfd: pytest.CaptureFixture[str]) -> OutputManager:
    """Install a PLAIN-format, quiet, colourless OutputManager as the global output.

    Depends on ``capfd`` so the manager is built once capture has replaced
    the process streams.
    """
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
