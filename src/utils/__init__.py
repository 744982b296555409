"""Utility functions for the lanelet editor core."""

from .logging import get_logger, set_level
from .config import load_config, lanelet_settings

__all__ = ["get_logger", "set_level", "load_config", "lanelet_settings"]
