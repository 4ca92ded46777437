"""
Runtime Configuration Module

Provides configuration loading and management for commitment construction.
"""

from .runtime import (
    LoggingConfig,
    MerkleConfig,
    RuntimeConfig,
    get_default_config,
    get_default_config_template,
    set_default_config,
)

__all__ = [
    "LoggingConfig",
    "MerkleConfig",
    "RuntimeConfig",
    "get_default_config",
    "get_default_config_template",
    "set_default_config",
]
