"""
CLI Configuration

Configuration management for the hashtree CLI.
Supports environment variables (including a local .env file) and JSON or
YAML configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

from hashtree.schemas.errors import ErrorCodes, HashTreeException


# Environment variable prefix
ENV_PREFIX = "HASHTREE_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
OUTPUT_FORMATS = ("human", "json")
ITEM_ENCODINGS = ("utf-8", "hex")


class ConfigError(HashTreeException):
    """Raised when a configuration file or value is invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=details,
            retryable=False,
        )


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    output_format: str = "human"  # "human" or "json"

    # How positional / file items are turned into leaf bytes
    item_encoding: str = "utf-8"  # "utf-8" or "hex"

    def validate(self) -> "CLIConfig":
        """Check every field against its allowed values."""
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid log_level: {self.log_level!r}",
                details={"allowed": list(LOG_LEVELS)},
            )
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Invalid output_format: {self.output_format!r}",
                details={"allowed": list(OUTPUT_FORMATS)},
            )
        if self.item_encoding not in ITEM_ENCODINGS:
            raise ConfigError(
                f"Invalid item_encoding: {self.item_encoding!r}",
                details={"allowed": list(ITEM_ENCODINGS)},
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return asdict(self)


def _apply(config: CLIConfig, data: dict[str, Any]) -> CLIConfig:
    unknown = sorted(set(data) - set(CLIConfig.__dataclass_fields__))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    for key, value in data.items():
        setattr(config, key, value)
    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON or YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        try:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot parse config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    return _apply(CLIConfig(), data)


def env_overrides() -> dict[str, Any]:
    """
    Collect configuration overrides from environment variables.

    Supported variables:
    - HASHTREE_LOG_LEVEL
    - HASHTREE_LOG_FILE
    - HASHTREE_OUTPUT_FORMAT
    - HASHTREE_ITEM_ENCODING
    """
    overrides: dict[str, Any] = {}
    for key in ("log_level", "log_file", "output_format", "item_encoding"):
        value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
        if value:
            overrides[key] = value
    return overrides


def default_config_paths() -> list[Path]:
    """Config locations searched when no explicit path is given."""
    return [
        Path.cwd() / "hashtree.json",
        Path.cwd() / ".hashtree.json",
        Path.cwd() / "hashtree.yaml",
        Path.home() / ".config" / "hashtree" / "config.json",
    ]


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables (and a .env file in the working directory)
    override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged, validated configuration
    """
    load_dotenv(find_dotenv(usecwd=True))

    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    config = _apply(config, env_overrides())
    return config.validate()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(CLIConfig().to_dict(), indent=2) + "\n"
