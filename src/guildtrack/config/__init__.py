"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_value, optional_int_env_var, require_int_env_var
from .errors import ConfigurationError, MissingConfigurationError
from .logging import SQL_ECHO_ENV_VAR, configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "SQL_ECHO_ENV_VAR",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "env_value",
    "get_database_config",
    "get_storage_config",
    "optional_int_env_var",
    "require_int_env_var",
]
