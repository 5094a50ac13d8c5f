"""Configuration for neo-permissions."""

from .settings import CacheBackend, PermissionSettings, get_settings
from .logging_config import LoggingConfig, setup_logging, get_logger

__all__ = [
    "CacheBackend",
    "PermissionSettings",
    "get_settings",
    "LoggingConfig",
    "setup_logging",
    "get_logger",
]
