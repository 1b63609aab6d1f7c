"""Application configuration helpers."""

from __future__ import annotations

from .env import int_env_var, require_env_var, require_env_vars, uuid_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .importing import (
    DEFAULT_INSERT_CHUNK_SIZE,
    DEFAULT_MIN_MS_PLAYED,
    ImportConfig,
    get_import_config,
)
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_INSERT_CHUNK_SIZE",
    "DEFAULT_MIN_MS_PLAYED",
    "ConfigurationError",
    "DatabaseConfig",
    "ImportConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_import_config",
    "get_storage_config",
    "int_env_var",
    "require_env_var",
    "require_env_vars",
    "uuid_env_var",
]
