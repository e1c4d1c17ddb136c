"""Configuration management utilities."""

from plysearch.core.configs.loader import load_config, load_engine_config, save_config
from plysearch.core.configs.schema import (
    EngineConfig,
    LoggingConfig,
    SearchConfig,
    config_from_dict,
    config_to_dict,
)

__all__ = [
    "EngineConfig",
    "LoggingConfig",
    "SearchConfig",
    "config_from_dict",
    "config_to_dict",
    "load_config",
    "load_engine_config",
    "save_config",
]
