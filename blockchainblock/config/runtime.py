"""
Runtime Configuration

Central configuration for block hashing options and logging.

Hashing never reads the environment on its own: a Block only honours a
RuntimeConfig that is handed to it, so the same arguments always produce
the same hashes.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from blockchainblock.schemas.byteable import Framing

load_dotenv()

# Environment variable prefix
ENV_PREFIX = "BLOCKCHAINBLOCK_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class HashingConfig:
    """Configuration for payload encoding."""
    framing: str = Framing.CONCAT.value


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for blockchainblock.

    Can be loaded from:
    - Environment variables (a .env file is picked up by python-dotenv)
    - YAML file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def framing(self) -> Framing:
        """
        The configured framing as an enum.

        Raises:
            ValueError: If the configured name is not a known framing
        """
        return Framing(self.hashing.framing)

    def validate(self) -> None:
        """
        Check the configured values.

        Raises:
            ValueError: If the framing or log level name is unknown
        """
        valid_framings = [f.value for f in Framing]
        if self.hashing.framing not in valid_framings:
            raise ValueError(
                f"Unknown framing {self.hashing.framing!r}, expected one of {valid_framings}"
            )
        if self.logging.level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level {self.logging.level!r}, expected one of {list(LOG_LEVELS)}"
            )

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - BLOCKCHAINBLOCK_FRAMING: "concat" or "length_prefixed"
        - BLOCKCHAINBLOCK_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR
        - BLOCKCHAINBLOCK_LOG_FILE: Path of an additional log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}FRAMING"):
            overrides.setdefault("hashing", {})["framing"] = (
                os.getenv(f"{ENV_PREFIX}FRAMING", "").lower()
            )
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = (
                os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "").upper()
            )
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {})
        logging_data = data.get("logging", {})

        hashing = HashingConfig(**hashing_data) if hashing_data else HashingConfig()
        log_config = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        config = cls(
            hashing=hashing,
            logging=log_config,
            extra=data.get("extra", {}),
        )
        config.validate()
        return config

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "hashing" in overrides:
            for key, value in overrides["hashing"].items():
                setattr(new_config.hashing, key, value)

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        new_config.validate()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "framing": self.hashing.framing,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None clears the cache)."""
    global _default_config
    _default_config = config
