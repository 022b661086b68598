"""
Logging setup for applications embedding blockchainblock.

The library itself only creates module loggers; call one of these once at
start-up to see their output.
"""

from __future__ import annotations

import logging
import sys

from .runtime import RuntimeConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure root logging to stderr and, optionally, a file."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True,
    )


def setup_logging_from_config(config: RuntimeConfig) -> None:
    """Apply the logging section of a RuntimeConfig."""
    setup_logging(config.logging.level, config.logging.log_file)
