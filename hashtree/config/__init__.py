"""
Configuration management.
"""

from .runtime import (
    ENV_PREFIX,
    HashConfig,
    LoggingConfig,
    OutputConfig,
    RuntimeConfig,
    default_config_paths,
    get_default_config,
    load_config,
    set_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "HashConfig",
    "LoggingConfig",
    "OutputConfig",
    "RuntimeConfig",
    "default_config_paths",
    "load_config",
    "get_default_config",
    "set_default_config",
]
