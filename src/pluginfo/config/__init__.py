"""Configuration models and YAML loading."""

from pluginfo.config.loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    ConfigError,
    load_config,
    resolve_config_path,
    save_config,
)
from pluginfo.config.schema import MetadataConfig, PluginInfoConfig, RecordConfig

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "MetadataConfig",
    "PluginInfoConfig",
    "RecordConfig",
    "load_config",
    "resolve_config_path",
    "save_config",
]
