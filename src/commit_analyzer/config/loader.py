"""
Configuration loader for commit_analyzer.

Settings are read from an optional JSON file named ``config.json`` in the
``~/.commit_analyzer/`` directory. The ``COMMIT_ANALYZER_CONFIG``
environment variable, or an explicit path, selects another file. All
keys are optional; a missing file means defaults are used.

If the file exists but is unreadable, malformed, or holds values of the
wrong type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_ENV_VAR = "COMMIT_ANALYZER_CONFIG"
CONFIG_FILENAME = "config.json"

DEFAULTS: Dict[str, int] = {
    "parallel_threshold": 5,
    "max_workers": 8,
    "max_files_displayed": 20,
}

# Smallest accepted value per key
_MINIMUMS: Dict[str, int] = {
    "parallel_threshold": 0,
    "max_workers": 1,
    "max_files_displayed": 1,
}


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or invalid."""

    pass


def _get_config_directory() -> Path:
    """Return the user-level configuration directory ``~/.commit_analyzer/``."""
    return Path.home() / ".commit_analyzer"


def get_config_path(config_path: Optional[Path] = None) -> Path:
    """Resolve which configuration file to read.

    An explicit ``config_path`` wins over the environment variable, which
    wins over the default location.
    """
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return _get_config_directory() / CONFIG_FILENAME


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the analyzer settings and return them merged over the defaults.

    Args:
        config_path: Optional explicit path to a JSON configuration file.

    Returns:
        A dictionary with the keys:
        - parallel_threshold (int): file count above which the worker pool is used
        - max_workers (int): upper bound for the worker pool size
        - max_files_displayed (int): files listed by the CLI before collapsing

    Raises:
        ConfigError: If the file exists but cannot be read or validated.
    """
    path = get_config_path(config_path)
    config: Dict[str, Any] = dict(DEFAULTS)

    if not path.exists():
        if config_path is not None:
            logger.error("Configuration file '%s' does not exist", path)
            raise ConfigError(f"Configuration file not found: {path}")
        logger.debug("No configuration file at %s, using defaults", path)
        return config

    try:
        content = path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a JSON object")

    for key, value in data.items():
        if key not in DEFAULTS:
            logger.debug("Ignoring unknown configuration key: %s", key)
            continue
        # bool is a subclass of int but never a valid count
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(f"'{key}' must be an integer")
        if value < _MINIMUMS[key]:
            raise ConfigError(f"'{key}' must be at least {_MINIMUMS[key]}")
        config[key] = value

    logger.debug("Loaded configuration from: %s", path)
    return config
