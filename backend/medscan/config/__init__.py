"""
Configuration Module

Application settings and configuration management.
"""

from .settings import (
    AppConfig,
    BackendConfig,
    MergeConfig,
    SourceConfig,
    LoggingConfig,
    DEFAULT_BACKEND_ORDER,
    get_default_config,
)

__all__ = [
    "AppConfig",
    "BackendConfig",
    "MergeConfig",
    "SourceConfig",
    "LoggingConfig",
    "DEFAULT_BACKEND_ORDER",
    "get_default_config",
]
