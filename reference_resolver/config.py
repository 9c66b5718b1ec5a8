"""YAML configuration loading for ResolutionConfig."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import ResolutionConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "REFERENCE_RESOLVER_CONFIG"

# Accepted in files for readability; mapped onto model field names
_ALIASES = {
    "mode": "environment",
    "framework_version": "target_framework_version",
    "framework_directories": "target_framework_directories",
    "include_directories": "explicit_include_directories",
}

# Sinks are code, not configuration
_CALLABLE_FIELDS = {"log_message", "log_warning", "log_error"}


def default_config_path() -> Path | None:
    """Config file named by REFERENCE_RESOLVER_CONFIG, if set."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML mapping of configuration values.

    Args:
        path: Path to YAML file.

    Returns:
        Mapping with aliases normalized to field names.

    Raises:
        ConfigurationError: If the file is missing, unreadable, invalid YAML,
            or not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    normalized: dict[str, Any] = {}
    for key, value in data.items():
        field_name = _ALIASES.get(str(key).replace("-", "_"), str(key).replace("-", "_"))
        if field_name in _CALLABLE_FIELDS:
            raise ConfigurationError(f"'{key}' cannot be set from a config file")
        normalized[field_name] = value
    return normalized


def build_config(values: dict[str, Any]) -> ResolutionConfig:
    """Validate values into a ResolutionConfig.

    Raises:
        ConfigurationError: If validation fails.
    """
    try:
        return ResolutionConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid resolution config: {e}") from e


def load_resolution_config(path: Path | None = None, **overrides: Any) -> ResolutionConfig:
    """Load configuration from YAML, then apply keyword overrides.

    Overrides with value None are ignored so CLI options can be passed through
    unconditionally.

    Args:
        path: Config file (default: REFERENCE_RESOLVER_CONFIG, else none).
        **overrides: ResolutionConfig field values (sinks allowed here).

    Returns:
        Validated ResolutionConfig.

    Raises:
        ConfigurationError: If the file or the resulting values are invalid.
    """
    path = path or default_config_path()
    values: dict[str, Any] = {}
    if path is not None:
        logger.debug(f"Loading resolution config from {path}")
        values.update(read_config_file(path))

    values.update({key: value for key, value in overrides.items() if value is not None})
    return build_config(values)
