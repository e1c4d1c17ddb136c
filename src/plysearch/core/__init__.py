"""Core utilities shared across the engine, games and CLI."""

from plysearch.core.configs import load_config, save_config
from plysearch.core.utils.logging import setup_logging

__all__ = ["load_config", "save_config", "setup_logging"]
