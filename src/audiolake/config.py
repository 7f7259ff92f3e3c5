"""
Configuration loading for the audiolake package.

Loads a YAML configuration file over built-in defaults and applies
environment variable overrides.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


CONFIG_FILENAME = "audiolake.yaml"

DEFAULT_CONFIG = {
    "cache": {
        "root": "cache",
    },
    "pagination": {
        "page_size": 10,
    },
    "histogram": {
        "num_bins": 10,
        "bar_width": 40,
        "bar_char": "#",
    },
    "logging": {
        "level": "INFO",
        "log_file": None,
    },
}

# Environment variable -> (section, key, converter)
ENV_OVERRIDES = {
    "AUDIOLAKE_CACHE_ROOT": ("cache", "root", str),
    "AUDIOLAKE_PAGE_SIZE": ("pagination", "page_size", int),
    "AUDIOLAKE_LOG_LEVEL": ("logging", "level", str),
}


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary
        override: Override dictionary (takes precedence)

    Returns:
        Merged dictionary (neither input is modified)
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_file(file_path: Path) -> Dict[str, Any]:
    """
    Load a YAML file and return its contents as a dictionary.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file is not valid YAML or does not hold a mapping
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {file_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration file {file_path} must contain a mapping")
    return config


def apply_env_overrides(config: Dict[str, Any], environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Apply AUDIOLAKE_* environment variables on top of a loaded config."""
    environ = os.environ if environ is None else environ
    for env_name, (section, key, convert) in ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if raw:
            try:
                config.setdefault(section, {})[key] = convert(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_name}: {raw!r}") from e
    return config


def load_config(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file with fallback to defaults.

    Args:
        config_dir: Directory containing audiolake.yaml (default: ./config)

    Returns:
        Configuration dictionary

    Example:
        >>> config = load_config(Path("config"))
        >>> config["pagination"]["page_size"]
        10
    """
    config_dir = Path("config") if config_dir is None else Path(config_dir)
    config_path = config_dir / CONFIG_FILENAME

    try:
        user_config = load_yaml_file(config_path)
        config = deep_merge(DEFAULT_CONFIG, user_config)
    except FileNotFoundError:
        config = copy.deepcopy(DEFAULT_CONFIG)

    return apply_env_overrides(config)


class Config:
    """
    Configuration manager for audiolake.

    Loads lazily on first access.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else Path("config")
        self._settings: Optional[Dict[str, Any]] = None

    @property
    def settings(self) -> Dict[str, Any]:
        """Get the merged configuration (lazy load)."""
        if self._settings is None:
            self._settings = load_config(self.config_dir)
        return self._settings

    @property
    def cache_root(self) -> Path:
        return Path(self.settings["cache"]["root"])

    @property
    def page_size(self) -> int:
        return int(self.settings["pagination"]["page_size"])

    def reload(self) -> None:
        """Reload configuration from disk."""
        self._settings = None

    def get(self, *keys: str, default: Any = None) -> Any:
        """
        Get a nested configuration value by key path.

        Example:
            >>> Config().get("histogram", "num_bins")
            10
        """
        value: Any = self.settings
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value
