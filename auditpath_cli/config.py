"""
CLI Configuration

Configuration management for the auditpath CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from auditpath.config.runtime import RuntimeConfig


# Environment variable prefix
ENV_PREFIX = "AUDITPATH_"

OUTPUT_FORMATS = ("human", "json")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Hashing and logging settings shared with the library
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)

    # Output
    default_output_format: str = "human"  # "human" or "json"

    @property
    def log_level(self) -> str:
        return self.runtime.logging.level

    @property
    def log_file(self) -> str | None:
        return self.runtime.logging.file


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    output_format = data.get("output_format", "human")
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"output_format must be one of {OUTPUT_FORMATS}, got {output_format!r}")

    return CLIConfig(
        runtime=RuntimeConfig.from_dict(data),
        default_output_format=output_format,
    )


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "auditpath.json",
            Path.cwd() / ".auditpath.json",
            Path.home() / ".config" / "auditpath" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    config.runtime = config.runtime.with_env_overrides()

    env_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT")
    if env_format in OUTPUT_FORMATS:
        config.default_output_format = env_format

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "output_format": "human",
  "hashing": {
    "max_workers": 1,
    "parallel_threshold": 1024
  },
  "logging": {
    "level": "INFO",
    "file": null
  }
}
"""
