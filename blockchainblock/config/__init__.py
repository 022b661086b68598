"""
Runtime Configuration Module

Provides configuration loading and logging setup for blockchainblock.
"""

from .log_setup import setup_logging, setup_logging_from_config
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
    "setup_logging",
    "setup_logging_from_config",
]
