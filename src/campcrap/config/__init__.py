"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .event import DEFAULT_EVENT_YEAR, EventConfig, get_event_config, validate_year
from .logging import configure_logging, resolve_log_level
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_EVENT_YEAR",
    "ConfigurationError",
    "DatabaseConfig",
    "EventConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_event_config",
    "get_storage_config",
    "optional_env_var",
    "resolve_log_level",
    "validate_year",
]
