"""
Fanlog Configuration Module.

Usage:
    from fanlog.config import settings

    settings.config_files  # ("config.yml", "config.yaml")
    settings.global_level  # Severity.DEBUG

Every field can be overridden with a ``FANLOG_`` prefixed environment variable
or through a ``.env`` file.
"""

from .loader import discover_config_file, load_log_configs
from .logging import (
    FanlogSection,
    FanlogSettings,
    LogConfig,
    LogFormat,
    OutputKind,
    RootConfig,
    Severity,
)

# Singleton instance
settings = FanlogSettings()

__all__ = [
    "settings",
    "FanlogSettings",
    "FanlogSection",
    "LogConfig",
    "LogFormat",
    "OutputKind",
    "RootConfig",
    "Severity",
    "discover_config_file",
    "load_log_configs",
]
