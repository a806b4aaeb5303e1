"""YAML configuration loader with environment variable interpolation."""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# ${VAR} and ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def _substitute(text: str) -> str:
    def lookup(match: re.Match[str]) -> str:
        name, default = match.group(1), match.group(2)
        value = os.environ.get(name)
        if value is not None:
            return value
        if default is not None:
            return default
        raise ValueError(f"Environment variable '{name}' is not set and no default provided")

    return ENV_VAR_PATTERN.sub(lookup, text)


def interpolate_env_vars(value: Any) -> Any:
    """Resolve ``${VAR}`` references anywhere inside a parsed YAML value.

    Strings are substituted in place; mappings and sequences are walked
    recursively; every other scalar is returned untouched.

    Raises:
        ValueError: If a referenced variable is unset and has no ``:-`` default
    """
    if isinstance(value, str):
        return _substitute(value)
    if isinstance(value, dict):
        return {key: interpolate_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Read a YAML mapping from disk and interpolate environment variables.

    A missing or empty file yields an empty mapping so callers can fall back
    to model defaults.

    Args:
        config_path: Location of the YAML document

    Returns:
        The interpolated top-level mapping

    Raises:
        ValueError: If interpolation fails or the document is not a mapping
        yaml.YAMLError: If the document cannot be parsed
    """
    if not config_path.exists():
        logger.warning("Configuration file %s not found, using defaults", config_path)
        return {}

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if raw is None:
        logger.warning("Configuration file %s is empty", config_path)
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Expected a mapping in {config_path}, got {type(raw).__name__}")

    try:
        resolved: dict[str, Any] = interpolate_env_vars(raw)
    except ValueError as e:
        logger.error("Environment variable interpolation failed for %s: %s", config_path, e)
        raise

    logger.info("Loaded configuration from %s", config_path)
    return resolved
