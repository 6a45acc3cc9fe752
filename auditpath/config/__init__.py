"""
Runtime Configuration Module

Provides configuration loading and management for tree building.
"""

from .runtime import (
    HashingConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "HashingConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
