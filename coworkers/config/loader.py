"""Configuration loading utilities."""

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from coworkers.config.schema import CoworkersConfig
from coworkers.utils.helpers import get_data_path


def get_data_dir() -> Path:
    """Get the coworkers data directory."""
    return get_data_path()


def get_config_path() -> Path:
    """Get the default configuration file path without creating its directory."""
    return Path.home() / ".coworkers" / "config.json"


def load_config(config_path: Path | None = None) -> CoworkersConfig:
    """
    Load configuration from file or fall back to defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return CoworkersConfig.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            logger.warning("Using default configuration.")

    return CoworkersConfig()


def save_config(config: CoworkersConfig, config_path: Path | None = None) -> None:
    """Save configuration to file."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.model_dump(), indent=2), encoding="utf-8")
