"""Utility file for parsing yaml configuration file."""
from pathlib import Path
from typing import Any

import yaml

BASE = Path(__file__).resolve().parent.parent
CONFIG_PATH = BASE.parent / "config.yaml"


def load_config(path: Path = CONFIG_PATH) -> dict:
    """Read a yaml configuration file, returning an empty config if it does not exist."""
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text()) or {}


config: dict = load_config()


def get_key(key: str, default: Any = None) -> Any:  # noqa: ANN401
    """
    Get a configuration value by key. Search through nested keys using dot notation.

    Args:
        key (str): The key to look up in the configuration.
        default: The default value to return if the key is not found.

    Returns:
        The value associated with the key, or the default value if the key is not found.
    """
    keys = key.split('.')
    value = config
    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default  # Return default if key is not found
    return value


def is_verbose() -> bool:
    """
    Check if verbose logging is enabled.

    Returns:
        bool: True if verbose logging is enabled, False otherwise.
    """
    return bool(get_key("logging.verbose", False))


def show_progress() -> bool:
    """Check if search progress bars are enabled."""
    return bool(get_key("logging.progress", False))
