"""Parser option resolution with precedence.

Options come from four layers (high to low):

1. CLI flags passed to :func:`resolve_options`.
2. Environment variables ``OAS3ELEMENTS_GENERATE_MESSAGE_BODY`` and
   ``OAS3ELEMENTS_GENERATE_MESSAGE_BODY_SCHEMA``.
3. Project config ``./oas3elements.json`` (``{"options": {...}}``).
4. Defaults of :class:`~oas3elements.models.ParseOptions`.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from oas3elements.exceptions import ConfigError
from oas3elements.models import ParseOptions, ProjectConfig

_PROJECT_CONFIG_FILENAME = "oas3elements.json"
_ENV_PREFIX = "OAS3ELEMENTS_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def project_config_path() -> Path:
    """Path of the project config in the current working directory."""
    return Path.cwd() / _PROJECT_CONFIG_FILENAME


def load_project_config() -> Optional[ProjectConfig]:
    """Load project-local configuration from ``./oas3elements.json``.

    Returns:
        The validated :class:`~oas3elements.models.ProjectConfig`, or ``None``
        if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = project_config_path()
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return ProjectConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc


def _env_flag(name: str) -> Optional[bool]:
    """Read a boolean environment variable, ``None`` when unset or empty."""
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return None
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigError(f"Environment variable {name} must be a boolean, got {raw!r}")


def resolve_options(**cli_overrides: Optional[bool]) -> ParseOptions:
    """Resolve :class:`~oas3elements.models.ParseOptions` through the precedence chain.

    Args:
        **cli_overrides: Option values from CLI flags, keyed by field name.
            ``None`` means "not given on the command line".

    Returns:
        The effective options.

    Raises:
        ConfigError: For an invalid project config, a malformed environment
            value, or an unknown option name.
    """
    # 4 + 3. Defaults, then the project config
    project = load_project_config()
    values: dict[str, Any] = (
        project.options.model_dump() if project is not None else ParseOptions().model_dump()
    )

    # 2. Environment
    for field_name in ParseOptions.model_fields:
        env_value = _env_flag(_ENV_PREFIX + field_name.upper())
        if env_value is not None:
            values[field_name] = env_value

    # 1. CLI flags
    for field_name, value in cli_overrides.items():
        if field_name not in ParseOptions.model_fields:
            raise ConfigError(f"Unknown parser option: {field_name}")
        if value is not None:
            values[field_name] = value

    return ParseOptions.model_validate(values)
