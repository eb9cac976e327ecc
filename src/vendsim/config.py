"""vendsim configuration management.

Handles global (~/.config/vendsim/), local (.vendsim/) and explicitly
passed configuration files. Only display and logging options are
configurable; the coin table and catalog are fixed.
"""

import copy
from pathlib import Path
from typing import Any, Optional

import yaml

# Default configuration values
DEFAULT_CONFIG = {
    "display": {
        "title": "VENDING MACHINE",
    },
    "logging": {
        "enabled": False,
        "dir": ".vendsim/logs",
    },
}


def get_global_config_dir() -> Path:
    """Get the global configuration directory path."""
    return Path.home() / ".config" / "vendsim"


def get_local_config_dir() -> Path:
    """Get the local configuration directory path (current directory)."""
    return Path.cwd() / ".vendsim"


def _read_config_file(config_path: Path) -> dict[str, Any]:
    """Read one YAML config file.

    Raises:
        ValueError: If the file or one of its known sections is not a mapping
    """
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    for section in DEFAULT_CONFIG:
        if section in data and not isinstance(data[section], dict):
            raise ValueError(f"Config section '{section}' in {config_path} must be a mapping")

    log_dir = data.get("logging", {}).get("dir")
    if log_dir is not None and not isinstance(log_dir, str):
        raise ValueError(f"Config key 'logging.dir' in {config_path} must be a string")
    return data


def load_config(config_file: Optional[Path] = None) -> dict[str, Any]:
    """Load merged configuration.

    Priority (highest first):
    1. Explicit config file (--config)
    2. Local config (.vendsim/config.yaml)
    3. Global config (~/.config/vendsim/config.yaml)
    4. Default values

    Args:
        config_file: Optional explicit config file; must exist

    Returns:
        Merged configuration dictionary

    Raises:
        FileNotFoundError: If config_file is given but missing
        ValueError: If a config file or one of its sections is malformed
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    global_config_file = get_global_config_dir() / "config.yaml"
    if global_config_file.exists():
        config = _deep_merge(config, _read_config_file(global_config_file))

    local_config_file = get_local_config_dir() / "config.yaml"
    if local_config_file.exists():
        config = _deep_merge(config, _read_config_file(local_config_file))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        config = _deep_merge(config, _read_config_file(config_file))

    return config


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary with overriding values

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def resolve_log_dir(config: dict[str, Any], override: Optional[Path] = None) -> Optional[Path]:
    """Decide where session logs go.

    Args:
        config: Merged configuration
        override: Directory from the command line; enables logging by itself

    Returns:
        Log directory, or None when logging is disabled
    """
    if override is not None:
        return Path(override)

    logging_config = config.get("logging", {})
    if not logging_config.get("enabled"):
        return None
    return Path(logging_config.get("dir") or DEFAULT_CONFIG["logging"]["dir"])
