"""Environment variable loaders for configuration."""

from __future__ import annotations

import os

from .errors import ConfigurationError, MissingConfigurationError

TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})


def env_value(name: str) -> str | None:
    """Return the stripped value of ``name``; blank counts as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_flag(name: str) -> bool:
    value = env_value(name)
    return value is not None and value.lower() in TRUTHY_VALUES


def optional_int_env_var(name: str) -> int | None:
    """Return an integer environment variable, ``None`` when unset or blank."""

    value = env_value(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be an integer, got {value!r}", variable=name
        ) from exc


def require_int_env_var(name: str, *, hint: str | None = None) -> int:
    """Return an integer environment variable or raise if it is unset."""

    value = optional_int_env_var(name)
    if value is None:
        raise MissingConfigurationError(name, hint=hint)
    return value
