"""
Configuration loading for prmate.

Provides a loader for the optional user configuration file. See
:mod:`prmate.config.loader` for implementation details.
"""

from .loader import DEFAULT_CONFIG, ConfigError, load_config  # noqa: F401
