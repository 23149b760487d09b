"""
Configuration loading for the storage client.

Configuration is a plain nested dictionary read from ``config.yaml``::

    log:
      level: INFO
      file_logging: false
    storage:
      selectel:
        auth_url: https://auth.selcdn.ru/
        user: "12345"
        key: "secret"
        timeout: 30
        max_workers: null
"""

from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml

from .exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

DEFAULT_AUTH_URL = "https://auth.selcdn.ru/"
DEFAULT_TIMEOUT = 30


def load_configuration(config_file: str = "config.yaml") -> Dict[str, Any]:
    """
    Read the YAML configuration file.

    Args:
        config_file: Path to the YAML file

    Returns:
        Configuration dictionary (empty if the file is empty)

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a mapping
    """
    path = Path(config_file)
    logger.debug("Loading configuration", config_file=str(path))
    try:
        with open(path, "r") as f:
            configuration = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file {path} not found") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML config {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Error reading config {path}: {e}") from e

    if configuration is None:
        return {}
    if not isinstance(configuration, dict):
        raise ConfigurationError(f"Configuration in {path} must be a mapping")

    logger.info("Configuration loaded", config_file=str(path), sections=list(configuration.keys()))
    return configuration


def get_selectel_section(configuration: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Return the ``storage.selectel`` section, or an empty dict."""
    if not configuration:
        return {}
    section = configuration.get("storage", {}) or {}
    return section.get("selectel", {}) or {}
