"""Configuration module for coworkers."""

from coworkers.config.loader import get_config_path, get_data_dir, load_config, save_config
from coworkers.config.schema import CoworkersConfig, SessionServiceConfig

__all__ = [
    "CoworkersConfig",
    "SessionServiceConfig",
    "get_config_path",
    "get_data_dir",
    "load_config",
    "save_config",
]
