"""
Configuration module for remutable.

Uses pydantic-settings for environment variable and config file loading.
"""

from remutable.config.settings import Settings
from remutable.config.sources import (
    ConfigFileError,
    YamlFileSettingsSource,
    get_config_path,
    load_yaml_file,
)

__all__ = [
    "ConfigFileError",
    "Settings",
    "YamlFileSettingsSource",
    "get_config_path",
    "load_yaml_file",
]
