"""Load OpenAPI documents from a URL, local file, or stdin.

This module handles the I/O around the parser: fetching the raw text of a
document and decoding it into plain Python data. Both JSON and YAML are
supported with automatic format detection.

The public functions are:

* :func:`load_source` -- Read the text of a document from any supported
  location.
* :func:`decode_document` -- Decode JSON or YAML text into Python data.
* :func:`detect` -- Tell whether a text looks like an OpenAPI 3 document.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from oas3elements.exceptions import SourceLoadError

logger = logging.getLogger(__name__)

# Matches `openapi: 3.x` in YAML as well as `"openapi": "3.x"` in JSON, compact JSON included.
_OPENAPI_3_DECLARATION = re.compile(
    r"""(?:^|[{,])\s*["']?openapi["']?\s*:\s*["']?3\.\d+""", re.MULTILINE
)


def load_source(location: str) -> str:
    """Read a document from URL, file path, or stdin ('-').

    Args:
        location: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The document text.

    Raises:
        SourceLoadError: If the location cannot be read or is empty.
    """
    if location == "-":
        return _load_from_stdin()
    elif location.startswith(("http://", "https://")):
        return _load_from_url(location)
    else:
        return _load_from_file(location)


def _load_from_stdin() -> str:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SourceLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SourceLoadError("No input received from stdin")
    return content


def _load_from_url(url: str) -> str:
    """Fetch a document over HTTP(S).

    Raises:
        SourceLoadError: On transport errors and non-2xx responses.
    """
    logger.debug("Fetching %s", url)
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SourceLoadError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SourceLoadError(f"Failed to fetch document from {url}: {exc}") from exc

    if not response.text.strip():
        raise SourceLoadError(f"Empty response from {url}")
    return response.text


def _load_from_file(path: str) -> str:
    file_path = Path(path)
    if not file_path.is_file():
        raise SourceLoadError(f"Source file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceLoadError(f"Failed to read source file {path}: {exc}") from exc

    if not content.strip():
        raise SourceLoadError(f"Source file is empty: {path}")
    return content


def decode_document(content: str) -> Any:
    """Decode content as JSON or YAML.

    Tries JSON first, then falls back to YAML. Valid JSON is also valid
    YAML, but JSON parsing is stricter and faster.

    Args:
        content: The raw string content.

    Returns:
        The decoded value. Any JSON type is returned as-is; the parser
        reports a non-object root itself.

    Raises:
        SourceLoadError: If the content cannot be decoded as either format.
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        json_error = exc

    try:
        value = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise SourceLoadError(
            "Failed to decode document as JSON or YAML"
            f"\n  JSON error: {json_error}"
            f"\n  YAML error: {exc}"
        ) from exc

    return _normalize_yaml(value)


def _normalize_yaml(value: Any) -> Any:
    """Convert YAML-only scalars (dates, timestamps) into JSON equivalents."""
    if isinstance(value, dict):
        return {
            key if isinstance(key, (str, int, float, bool)) else str(key): _normalize_yaml(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_normalize_yaml(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def detect(content: str) -> bool:
    """Return ``True`` when *content* declares an OpenAPI 3 version."""
    return bool(_OPENAPI_3_DECLARATION.search(content))
