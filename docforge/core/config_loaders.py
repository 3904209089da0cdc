"""
Configuration Loading and Management Functions.

Handles loading, saving and applying environment overrides to the DocForge
configuration. Unlike most settings files, a broken docforge.yaml is never
silently replaced by defaults: templates drive every generated sentence, so a
malformed file stops the run before any source is touched.
"""

import dataclasses
import os
import re
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

import yaml

from docforge.core.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from docforge.core.config import Config

CONFIG_FILENAMES = ("docforge.yaml", "docforge.yml")


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Handles strings with ${VAR_NAME} or ${VAR_NAME:default} syntax inside
    nested dictionaries and lists.

    Args:
        value: Configuration value (string, dict, list, or primitive)

    Returns:
        Value with all environment variables expanded
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def _apply_env_overrides(config: "Config") -> "Config":
    """
    Apply environment variable overrides to configuration.

    Environment variables take precedence over config file values.
    """
    level = os.environ.get("DOCFORGE_LOG_LEVEL")
    if level:
        config = dataclasses.replace(
            config, logging=dataclasses.replace(config.logging, level=level.upper())
        )

    workers = os.environ.get("DOCFORGE_MAX_WORKERS")
    if workers:
        try:
            count = int(workers)
        except ValueError as e:
            raise ConfigValidationError(
                f"DOCFORGE_MAX_WORKERS must be an integer, got '{workers}'",
                field="documentation.max_workers",
                value=workers,
            ) from e
        config = dataclasses.replace(
            config,
            documentation=dataclasses.replace(config.documentation, max_workers=count),
        )

    return config


def find_config_file(base_path: Path) -> Optional[Path]:
    """Return the first docforge.yaml/docforge.yml found in base_path."""
    for filename in CONFIG_FILENAMES:
        candidate = base_path / filename
        if candidate.exists():
            return candidate
    return None


def load_config(
    config_path: Optional[Path] = None, base_path: Optional[Path] = None
) -> "Config":
    """
    Load configuration from YAML file with environment variable overrides.

    Configuration precedence: 1. Env vars, 2. YAML file, 3. Defaults

    Args:
        config_path: Explicit config file. Must exist when given.
        base_path: Directory searched for docforge.yaml. Defaults to cwd.

    Returns:
        Validated Config object.

    Raises:
        ConfigValidationError: If the file is missing, unreadable, not valid
            YAML, or holds invalid settings.
    """
    # Lazy import to avoid circular dependency
    from docforge.core.config import Config

    if config_path is None:
        config_path = find_config_file(base_path or Path.cwd())
        if config_path is None:
            return _apply_env_overrides(Config())
    elif not config_path.exists():
        raise ConfigValidationError(
            f"Configuration file not found: {config_path}",
            field="config_path",
            value=str(config_path),
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigValidationError(
            f"Could not read configuration from {config_path}: {e}",
            field="config_path",
            value=str(config_path),
        ) from e

    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Configuration root in {config_path} must be a mapping",
            value=type(data).__name__,
        )

    return _apply_env_overrides(Config.from_dict(data))


def default_config_yaml(config: Optional["Config"] = None) -> str:
    """Render a configuration (defaults when omitted) as YAML text."""
    from docforge.core.config import Config

    config = config or Config()
    return yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)


def save_config(config: "Config", config_path: Path) -> None:
    """Save configuration to YAML file."""
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(default_config_yaml(config))
