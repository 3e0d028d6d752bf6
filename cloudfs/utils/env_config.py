"""
Environment-based configuration for the cloudfs adapter.

Settings are read from environment variables, optionally seeded from a
``.env`` file at the project root.
"""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field
from dotenv import load_dotenv
import logging

from ..client.http_client import DEFAULT_API_URL, DEFAULT_CHUNK_SIZE, DEFAULT_CONTENT_URL

logger = logging.getLogger(__name__)

# Load environment variables from .env file
env_file = Path(__file__).parent.parent.parent / ".env"
if env_file.exists():
    load_dotenv(env_file, override=True)
    logger.info(f"Loaded environment variables from: {env_file}")
else:
    logger.debug(f"No .env file found at: {env_file}")


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(key, "").lower()
    return value in ("true", "1", "yes", "on") if value else default


def get_env_int(key: str, default: int = 0) -> int:
    """Get integer value from environment variable."""
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


def get_env_float(key: str, default: float = 0.0) -> float:
    """Get float value from environment variable."""
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        return default


@dataclass
class AppSettings:
    """Adapter settings from environment variables."""

    # Environment
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "development"))

    # Provider client
    access_token: Optional[str] = field(default_factory=lambda: os.getenv("CLOUDFS_ACCESS_TOKEN"))
    api_url: str = field(default_factory=lambda: os.getenv("CLOUDFS_API_URL", DEFAULT_API_URL))
    content_url: str = field(default_factory=lambda: os.getenv("CLOUDFS_CONTENT_URL", DEFAULT_CONTENT_URL))
    timeout: float = field(default_factory=lambda: get_env_float("CLOUDFS_TIMEOUT", 30.0))
    chunk_size: int = field(default_factory=lambda: get_env_int("CLOUDFS_CHUNK_SIZE", DEFAULT_CHUNK_SIZE))

    # Adapter
    path_prefix: str = field(default_factory=lambda: os.getenv("CLOUDFS_PATH_PREFIX", ""))

    # Logging Configuration
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_json_format: bool = field(default_factory=lambda: get_env_bool("LOG_JSON_FORMAT", False))

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.log_level = self.log_level.upper()
        if self.chunk_size <= 0:
            logger.warning(f"Invalid CLOUDFS_CHUNK_SIZE {self.chunk_size}, using {DEFAULT_CHUNK_SIZE}")
            self.chunk_size = DEFAULT_CHUNK_SIZE

        if self.environment == "production" and not self.access_token:
            logger.warning("Storage access token not provided for production environment")

    def get_client_config(self) -> dict:
        """Get provider client configuration as a dictionary."""
        return {
            "access_token": self.access_token,
            "api_url": self.api_url,
            "content_url": self.content_url,
            "timeout": self.timeout,
            "chunk_size": self.chunk_size,
        }

    def get_adapter_config(self) -> dict:
        """Get adapter configuration as a dictionary."""
        return {
            "prefix": self.path_prefix,
        }


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
        logger.info(f"Loaded settings for environment: {_settings.environment}")
    return _settings


def reload_settings() -> AppSettings:
    """Reload the global settings."""
    global _settings
    # Force reload of environment variables
    if env_file.exists():
        load_dotenv(env_file, override=True)
    _settings = AppSettings()
    logger.info(f"Reloaded settings for environment: {_settings.environment}")
    return _settings
