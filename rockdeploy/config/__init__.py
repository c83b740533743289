"""rockdeploy configuration module.

Server settings are read from server.json in the deployer directory.
Environment variables (optionally from a .env file beside it) can
override individual keys.
"""

from rockdeploy.config.loader import (
    ConfigurationError,
    get_config_path,
    get_workspace_root,
    load_server_config,
)
from rockdeploy.config.schema import ServerConfig

__all__ = [
    "ConfigurationError",
    "ServerConfig",
    "get_config_path",
    "get_workspace_root",
    "load_server_config",
]
