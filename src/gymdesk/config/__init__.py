"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging, get_log_level
from .storage import StorageConfig, get_storage_config

__all__ = [
    "ConfigurationError",
    "StorageConfig",
    "configure_logging",
    "get_log_level",
    "get_storage_config",
    "optional_env_var",
]
