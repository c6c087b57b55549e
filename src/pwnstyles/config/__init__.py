"""
Configuration helpers for the pwnstyles toolkit.
"""

from .models import (
    CONFIG_FILENAME,
    ConfigError,
    ProjectConfig,
    TemplateLocation,
    load_config,
    load_project_config,
)
from .settings import Settings, get_settings, resolve_environment

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ProjectConfig",
    "TemplateLocation",
    "load_config",
    "load_project_config",
    "Settings",
    "get_settings",
    "resolve_environment",
]
