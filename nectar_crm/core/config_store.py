"""Configuration and persistence for client settings."""

import json
import logging
import os
from pathlib import Path

from .models import ClientConfig, ConfigError

logger = logging.getLogger(__name__)

CLIENT_CONFIG_NAME = "config"


def get_base_dir() -> Path:
    """
    Get the base directory for storing configuration.

    The directory is determined by:
    1. Environment variable NECTAR_CRM_HOME if set
    2. Otherwise, ~/.nectar_crm

    The directory is created if it does not exist.

    Returns:
        Path to the base directory
    """
    env_home = os.environ.get("NECTAR_CRM_HOME")
    if env_home:
        base_dir = Path(env_home)
    else:
        base_dir = Path.home() / ".nectar_crm"

    base_dir.mkdir(parents=True, exist_ok=True)
    return base_dir


def config_path(name: str = CLIENT_CONFIG_NAME) -> Path:
    """Get the path of a named JSON file inside the base directory."""
    return get_base_dir() / f"{name}.json"


def save_json(name: str, data: dict) -> Path:
    """
    Save a dictionary as JSON.

    Args:
        name: File name without extension
        data: Dictionary to save

    Returns:
        Path to the saved file
    """
    path = config_path(name)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        logger.debug(f"Saved JSON to {path}")
        return path
    except OSError as e:
        raise ConfigError(f"Failed to save JSON to {path}: {e}")


def load_json(name: str) -> dict:
    """
    Load a dictionary from a JSON file.

    Args:
        name: File name without extension

    Returns:
        The loaded dictionary

    Raises:
        ConfigError: If the file does not exist or JSON is invalid
    """
    path = config_path(name)

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path, "r") as f:
            data = json.load(f)
        logger.debug(f"Loaded JSON from {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to load JSON from {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {path}")
    return data


def has_client_config() -> bool:
    """Return True if a client configuration has been saved."""
    return config_path(CLIENT_CONFIG_NAME).exists()


def save_client_config(config: ClientConfig) -> Path:
    """
    Save a ClientConfig to disk.

    The file holds the access token, so it is readable by the owner only.

    Returns:
        Path to the saved file
    """
    path = save_json(CLIENT_CONFIG_NAME, config.to_dict())
    path.chmod(0o600)
    return path


def load_client_config() -> ClientConfig:
    """
    Load the saved ClientConfig.

    Raises:
        ConfigError: If the file does not exist or is invalid
    """
    return ClientConfig.from_dict(load_json(CLIENT_CONFIG_NAME))
