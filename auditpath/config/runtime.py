"""
Runtime Configuration

Central configuration for tree building and logging.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_int(name: str, minimum: int) -> Optional[int]:
    """Read an integer env var of at least minimum; None if unset or invalid."""
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer")
        return None
    if value < minimum:
        logger.warning(f"Ignoring {name}={value}: must be >= {minimum}")
        return None
    return value


@dataclass
class HashingConfig:
    """Configuration for level hashing during tree construction."""
    max_workers: int = 1
    parallel_threshold: int = 1024

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.parallel_threshold < 2:
            raise ValueError(
                f"parallel_threshold must be >= 2, got {self.parallel_threshold}"
            )


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - AUDITPATH_MAX_WORKERS: Worker threads for level hashing
        - AUDITPATH_PARALLEL_THRESHOLD: Minimum level width hashed in parallel
        - AUDITPATH_LOG_LEVEL: Log level name
        - AUDITPATH_LOG_FILE: Optional log file path

        Malformed or out-of-range integers are logged and ignored.
        """
        overrides: dict[str, Any] = {}

        max_workers = _env_int("AUDITPATH_MAX_WORKERS", minimum=1)
        if max_workers is not None:
            overrides.setdefault("hashing", {})["max_workers"] = max_workers
        parallel_threshold = _env_int("AUDITPATH_PARALLEL_THRESHOLD", minimum=2)
        if parallel_threshold is not None:
            overrides.setdefault("hashing", {})["parallel_threshold"] = parallel_threshold

        if os.getenv("AUDITPATH_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("AUDITPATH_LOG_LEVEL")
        if os.getenv("AUDITPATH_LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv("AUDITPATH_LOG_FILE")

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
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {})
        logging_data = data.get("logging", {})

        hashing = HashingConfig(**hashing_data) if hashing_data else HashingConfig()
        log_config = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            hashing=hashing,
            logging=log_config,
        )

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
            merged = {
                "max_workers": new_config.hashing.max_workers,
                "parallel_threshold": new_config.hashing.parallel_threshold,
                **overrides["hashing"],
            }
            new_config.hashing = HashingConfig(**merged)

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "max_workers": self.hashing.max_workers,
                "parallel_threshold": self.hashing.parallel_threshold,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
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
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
