"""Configuration module for arpo."""

from .manager import ConfigManager, get_config_manager
from .models import (
    ArpoConfig,
    KeyBindings,
    LoggingSettings,
    ThemeSettings,
    UISettings,
)

__all__ = [
    "ArpoConfig",
    "KeyBindings",
    "LoggingSettings",
    "ThemeSettings",
    "UISettings",
    "ConfigManager",
    "get_config_manager",
]
