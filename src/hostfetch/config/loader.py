"""YAML configuration file loading with Pydantic validation."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .models import HostfetchConfig

DEFAULT_CONFIG_PATH = Path.home() / ".hostfetch" / "config.yaml"


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML contents.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data


def load_hostfetch_config(path: Optional[Path] = None) -> HostfetchConfig:
    """Load the hostfetch configuration.

    An explicit path must exist. Without one, the default location is used
    when present and built-in defaults otherwise.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return HostfetchConfig()
        path = DEFAULT_CONFIG_PATH
    data = load_yaml(path)
    try:
        return HostfetchConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e
