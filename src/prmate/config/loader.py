"""
Configuration loader for prmate.

prmate reads an optional JSON configuration file named ``config.json``
from the ``~/.prmate/`` directory (``PRMATE_CONFIG_DIR`` overrides the
directory). Every key is optional; missing keys take the values in
:data:`DEFAULT_CONFIG`. If the file is malformed or a value has the
wrong type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Tuple, Type, Union


logger = logging.getLogger(__name__)
# Null handler and no propagation while imported as a library. The CLI
# attaches prmate loggers to the root logger while a command runs.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


CONFIG_FILENAME = "config.json"
CONFIG_DIR_ENV = "PRMATE_CONFIG_DIR"

DEFAULT_UPDATE_URL = "https://api.github.com/repos/vladimirconpago/prmate/commits/master"
DEFAULT_INSTALL_SOURCE = "git+https://github.com/vladimirconpago/prmate.git"

DEFAULT_CONFIG: Dict[str, Any] = {
    "target_branch": "develop",
    "remote": "origin",
    "task_tracker": "Fibery",
    "test_command": "pnpm test",
    "dry_run_title": "Test PR",
    "dry_run_task_link": "https://fibery.io/task",
    "check_for_updates": True,
    "update_url": DEFAULT_UPDATE_URL,
    "install_source": DEFAULT_INSTALL_SOURCE,
    "request_timeout": 10,
}

_STRING_KEYS = (
    "target_branch",
    "remote",
    "task_tracker",
    "test_command",
    "dry_run_title",
    "dry_run_task_link",
    "update_url",
    "install_source",
)

_EXPECTED_TYPES: Dict[str, Union[Type, Tuple[Type, ...]]] = {key: str for key in _STRING_KEYS}
_EXPECTED_TYPES["check_for_updates"] = bool
_EXPECTED_TYPES["request_timeout"] = (int, float)

_TYPE_NAMES: Dict[str, str] = {key: "a string" for key in _STRING_KEYS}
_TYPE_NAMES["check_for_updates"] = "a boolean"
_TYPE_NAMES["request_timeout"] = "a number"


class ConfigError(Exception):
    """Raised when the prmate configuration file is invalid."""

    pass


def _get_config_directory() -> Path:
    """Return the directory holding the prmate configuration."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".prmate"


def _validate(data: Dict[str, Any]) -> None:
    for key, value in data.items():
        expected = _EXPECTED_TYPES.get(key)
        if expected is None:
            logger.warning("Ignoring unknown configuration key: %s", key)
            continue
        # bool is an int subclass; do not accept it as a number
        if expected == (int, float) and isinstance(value, bool):
            raise ConfigError(f"'{key}' must be a number")
        if not isinstance(value, expected):
            raise ConfigError(f"'{key}' must be {_TYPE_NAMES[key]}")
        if expected is str and not value.strip():
            raise ConfigError(f"'{key}' must not be empty")

    timeout = data.get("request_timeout")
    if timeout is not None and timeout <= 0:
        raise ConfigError("'request_timeout' must be positive")


def load_config() -> Dict[str, Any]:
    """Load the prmate configuration merged over the defaults.

    Returns:
        A dictionary with every key of :data:`DEFAULT_CONFIG`. Unknown
        keys found in the file are dropped.

    Raises:
        ConfigError: If the file cannot be read, is not a JSON object, or
            holds a value of the wrong type.
    """
    config_dir = _get_config_directory()
    config_path = config_dir / CONFIG_FILENAME
    config = dict(DEFAULT_CONFIG)

    if not config_path.exists():
        logger.debug("No configuration file at %s, using defaults", config_path)
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")

    _validate(data)
    config.update({key: value for key, value in data.items() if key in DEFAULT_CONFIG})
    logger.debug("Loaded prmate configuration from: %s", config_path)
    return config
