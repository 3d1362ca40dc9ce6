"""
Configuration package - unified access point.

This package provides the configuration classes and the memoized accessor
used by the action entrypoint.
"""

from reviewflow.core.config.settings import Config, get_config, reset_config

__all__ = [
    "Config",
    "get_config",
    "reset_config",
]
