"""Configuration management for hunkpick.

Handles user-level configuration stored in ~/.hunkpick/config.yaml.
The location can be overridden with the HUNKPICK_CONFIG environment
variable or the --config option.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from hunkpick.diff.exceptions import ConfigError

CONFIG_ENV_VAR = "HUNKPICK_CONFIG"

_CONFIG_DIR = Path.home() / ".hunkpick"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class PickerConfig(BaseModel):
    """Settings for a hunkpick session."""

    start_selected: bool = True
    keep_header_only_files: bool = True
    write_on_start: bool = False
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        level = str(v).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def get_config_dir() -> Path:
    """Get the global hunkpick configuration directory.

    Returns:
        Path to ~/.hunkpick/
    """
    return _CONFIG_DIR


def get_config_file_path() -> Path:
    """Get path to the config file, honoring HUNKPICK_CONFIG.

    Returns:
        Path to the config.yaml file
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> PickerConfig:
    """Load configuration from a YAML file.

    A missing file yields the defaults.

    Args:
        path: Config file to read. Defaults to get_config_file_path().

    Returns:
        PickerConfig instance.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML,
            or holds invalid values.
    """
    config_file = path or get_config_file_path()

    if not config_file.exists():
        return PickerConfig()

    try:
        with open(config_file, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_file} must contain a mapping")

    try:
        return PickerConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_file}: {e}")
