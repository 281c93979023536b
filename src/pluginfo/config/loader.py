"""Reading and writing pluginfo.yaml."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from pluginfo.config.schema import PluginInfoConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".pluginfo" / "pluginfo.yaml"
CONFIG_ENV_VAR = "PLUGINFO_CONFIG"


class ConfigError(Exception):
    """Configuration loading or validation error."""


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Pick the config file: explicit path, then $PLUGINFO_CONFIG, then the default."""
    if path is not None:
        return Path(path).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(path: Optional[Union[str, Path]] = None) -> PluginInfoConfig:
    """Load pluginfo settings.

    A missing or empty file means all defaults.

    Args:
        path: Config file. If None, $PLUGINFO_CONFIG or the default location.

    Returns:
        Validated configuration object

    Raises:
        ConfigError: If the file exists but is not valid YAML or has bad values
    """
    config_path = resolve_config_path(path)
    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return PluginInfoConfig()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config from {config_path}: {e}") from e

    if data is None:
        return PluginInfoConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config in {config_path} must be a mapping, got {type(data).__name__}")

    try:
        return PluginInfoConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e


def save_config(config: PluginInfoConfig, path: Optional[Union[str, Path]] = None) -> Path:
    """Write settings as YAML, creating parent directories. Returns the path written."""
    config_path = resolve_config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
    logger.debug("Saved config to %s", config_path)
    return config_path
