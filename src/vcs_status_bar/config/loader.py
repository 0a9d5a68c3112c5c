"""
Configuration loader for vcs_status_bar.

The tool reads an optional JSON configuration file named ``config.json``
located in ``~/.config/vcs_status_bar/``. A different file can be given
explicitly (the CLI's ``--config`` option). This loader validates the
structure of the file and returns a dictionary of settings.

If an explicitly requested file is missing, or any file is malformed,
contains unknown keys, or has values of the wrong type, a
:class:`ConfigError` is raised. A missing default file is not an error.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where logging is not configured. Messages still propagate to the root
# logger once the CLI configures it.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILE_NAME = "config.json"

# Recognised keys, the JSON types each one accepts and how to describe them.
_KEY_TYPES: Dict[str, Tuple[tuple, str]] = {
    "vcs_type": ((str,), "a string"),
    "initial_delay": ((int, float), "a number"),
    "poll_interval": ((int, float), "a number"),
    "track_dirty": ((bool,), "a boolean"),
}


class ConfigError(Exception):
    """Raised when the configuration is missing, malformed or invalid."""

    pass


def _get_config_directory() -> Path:
    """Get the configuration directory for vcs_status_bar.

    Returns:
        Path to the ``~/.config/vcs_status_bar/`` directory.
    """
    return Path.home() / ".config" / "vcs_status_bar"


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load and validate the configuration file.

    Args:
        config_path: Explicit path of the file to load. When omitted the
                     default ``~/.config/vcs_status_bar/config.json`` is
                     used, and an absent default file yields ``{}``.

    Returns:
        A dictionary containing any of the keys:
        - vcs_type (str): ``"git"`` or ``"svn"``
        - initial_delay (int|float): seconds before the first query
        - poll_interval (int|float): seconds between later queries
        - track_dirty (bool): whether to also query the dirty state

    Raises:
        ConfigError: If the file is missing (explicit path only),
            malformed, or invalid.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = _get_config_directory() / CONFIG_FILE_NAME

    if not config_path.exists():
        if explicit:
            logger.error("Configuration file '%s' does not exist", config_path)
            raise ConfigError(f"Missing configuration file: {config_path}")
        logger.debug("No configuration file at %s, using defaults", config_path)
        return {}

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    unknown = sorted(key for key in data if key not in _KEY_TYPES)
    if unknown:
        logger.error("Configuration file has unknown keys: %s", unknown)
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    for key, value in data.items():
        accepted, description = _KEY_TYPES[key]
        # bool is a subclass of int; only track_dirty may be a bool
        if isinstance(value, bool) and bool not in accepted:
            raise ConfigError(f"'{key}' must be {description}")
        if not isinstance(value, accepted):
            raise ConfigError(f"'{key}' must be {description}")
        if isinstance(value, float) and not math.isfinite(value):
            raise ConfigError(f"'{key}' must be a finite number")

    logger.debug("Loaded configuration from: %s", config_path)
    logger.debug("Configuration data: %s", data)
    return data


def to_configuration(settings: Mapping[str, Any]) -> Dict[str, str]:
    """Flatten loaded settings into the host's string-valued mapping.

    Entries whose value is ``None`` are dropped so that defaults apply.
    """
    configuration: Dict[str, str] = {}
    for key, value in settings.items():
        if value is None:
            continue
        if isinstance(value, bool):
            configuration[key] = "true" if value else "false"
        else:
            configuration[key] = str(value)
    return configuration
