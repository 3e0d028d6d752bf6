"""Configuration and logging helpers."""

from .env_config import AppSettings, get_settings, reload_settings
from .logging_config import setup_logging

__all__ = [
    "AppSettings",
    "get_settings",
    "reload_settings",
    "setup_logging",
]
