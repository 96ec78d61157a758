"""Centralized path management for collabgraph.

All state (config, graph document) is stored under a single base directory.
The base directory can be overridden with the COLLABGRAPH_HOME environment
variable, and the graph document itself with COLLABGRAPH_DATA.
"""

import os
from pathlib import Path

ENV_VAR = "COLLABGRAPH_HOME"
DATA_ENV_VAR = "COLLABGRAPH_DATA"


def get_collabgraph_home() -> Path:
    """Get the base directory for all collabgraph data.

    Resolution order:
    1. COLLABGRAPH_HOME environment variable (if set)
    2. ~/.collabgraph
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".collabgraph"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_collabgraph_home() / "config.toml"


def get_data_path() -> Path:
    """Get the default graph document path."""
    if env_data := os.environ.get(DATA_ENV_VAR):
        return Path(env_data).expanduser()
    return get_collabgraph_home() / "graph.json"
