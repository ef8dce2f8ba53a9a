"""
Configuration loading for commit_analyzer.

Provides a loader for the optional user settings file. See
:mod:`commit_analyzer.config.loader` for implementation details.
"""

from .loader import ConfigError, load_config  # noqa: F401
