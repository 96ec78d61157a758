"""Configuration module."""

from collabgraph.config.loader import get_default_config, load_config
from collabgraph.config.models import CollabConfig, ConfigError, ExportConfig
from collabgraph.config.paths import (
    get_collabgraph_home,
    get_config_path,
    get_data_path,
)

__all__ = [
    "CollabConfig",
    "ConfigError",
    "ExportConfig",
    "get_collabgraph_home",
    "get_config_path",
    "get_data_path",
    "get_default_config",
    "load_config",
]
