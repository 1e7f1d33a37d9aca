"""Configuration management for SassyFlow."""

from sassyflow.core.config.loader import ConfigLoader
from sassyflow.core.config.settings import (
    CompileSettings,
    LoggingSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ConfigLoader",
    "CompileSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
