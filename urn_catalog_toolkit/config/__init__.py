"""Configuration files (YAML) and the loader that merges user overrides."""

from .manager import ConfigManager

__all__ = [
    "ConfigManager",
]
