"""Configuration loader for rockdeploy.

Loads server.json from the deployer directory and applies environment
variable overrides before validating the fields a profile needs.
"""

import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from rockdeploy.config.schema import ServerConfig
from rockdeploy.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "server.json"
EXAMPLE_FILENAME = "server-example.json"

# Keys that hold integers in server.json
INTEGER_KEYS = ("port",)


def get_workspace_root() -> Path:
    """Get the deployer directory.

    The directory holds server.json and the dist/ staging tree, and the
    rockdash/rockapi projects are its siblings. ROCKDEPLOY_ROOT overrides
    the current working directory.
    """
    root = os.environ.get("ROCKDEPLOY_ROOT")
    if root:
        return Path(root).expanduser().resolve()
    return Path.cwd()


def get_config_path(root: Path | None = None) -> Path:
    """Get the path of server.json inside the deployer directory."""
    return (root or get_workspace_root()) / CONFIG_FILENAME


def load_json_file(path: Path) -> dict[str, Any]:
    """Load server.json and return its top-level object.

    Raises:
        ConfigurationError: If the file is missing, unparsable or not an object
    """
    if not path.is_file():
        raise ConfigurationError(
            f"{path.name} not found at {path}. Please create it based on {EXAMPLE_FILENAME}"
        )

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Failed to parse {path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Failed to parse {path.name}: expected a JSON object")

    return data


def load_env_file(root: Path) -> None:
    """Load a .env file from the deployer directory, if there is one.

    Variables already set in the environment are not replaced.
    """
    env_file = root / ".env"
    if env_file.exists():
        logger.debug(f"Loading environment from: {env_file}")
        load_dotenv(env_file, override=False)


def apply_env_overrides(config_dict: dict[str, Any], prefix: str = "ROCKDEPLOY") -> None:
    """Apply environment variable overrides to the parsed server.json.

    Environment variables are mapped as follows:
    - ROCKDEPLOY_HOST -> config_dict["host"]
    - ROCKDEPLOY_REMOTE_PATH_FRONTEND -> config_dict["remotePathFrontend"]
    - etc.

    Note: This modifies config_dict in place.
    """
    env_mappings = {
        f"{prefix}_HOST": "host",
        f"{prefix}_USERNAME": "username",
        f"{prefix}_PASSWORD": "password",
        f"{prefix}_PORT": "port",
        f"{prefix}_REMOTE_PATH_FRONTEND": "remotePathFrontend",
        f"{prefix}_REMOTE_PATH_BACKEND": "remotePathBackend",
        f"{prefix}_APP_URL": "appUrl",
    }

    for env_var, key in env_mappings.items():
        value = os.environ.get(env_var)
        if value is None:
            continue

        if key in INTEGER_KEYS:
            try:
                config_dict[key] = int(value)
            except ValueError as exc:
                raise ConfigurationError(f"Invalid integer in {env_var}: {value!r}") from exc
        else:
            config_dict[key] = value
        logger.debug(f"Applied override from {env_var}")


def validate_required_fields(
    config_dict: dict[str, Any],
    required_fields: Iterable[str],
    filename: str = CONFIG_FILENAME,
) -> None:
    """Check that every required field is present and non-empty.

    Empty strings, zero and null all count as missing.

    Raises:
        ConfigurationError: Naming the first missing field
    """
    for field in required_fields:
        if not config_dict.get(field):
            raise ConfigurationError(f"Missing required field in {filename}: {field}")


def load_server_config(
    required_fields: Iterable[str],
    root: Path | None = None,
) -> ServerConfig:
    """Load and validate server.json.

    Args:
        required_fields: JSON keys the selected profile needs
        root: Deployer directory (defaults to get_workspace_root())

    Returns:
        Frozen ServerConfig for the rest of the run.

    Raises:
        ConfigurationError: If the file is missing or invalid, or a
            required field is absent
    """
    root = root or get_workspace_root()
    config_path = get_config_path(root)

    config_dict = load_json_file(config_path)
    logger.info(f"Loading server config from: {config_path}")

    load_env_file(root)
    apply_env_overrides(config_dict)

    validate_required_fields(config_dict, required_fields, config_path.name)

    try:
        return ServerConfig.model_validate(config_dict)
    except ValidationError as exc:
        errors = exc.errors()
        field = ".".join(str(part) for part in errors[0]["loc"]) if errors else "?"
        message = errors[0]["msg"] if errors else str(exc)
        raise ConfigurationError(
            f"Invalid value in {config_path.name} for {field}: {message}"
        ) from exc
