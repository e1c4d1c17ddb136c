"""Shared utilities for plysearch."""

from plysearch.core.utils.logging import setup_logging

__all__ = ["setup_logging"]
