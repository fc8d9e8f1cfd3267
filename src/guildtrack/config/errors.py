"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a configuration value cannot be used."""

    def __init__(self, message: str, *, variable: str | None = None) -> None:
        super().__init__(message)
        self.variable = variable


class MissingConfigurationError(ConfigurationError):
    """Raised when a required setting is neither passed nor set in the environment."""

    def __init__(self, variable: str, *, hint: str | None = None) -> None:
        message = f"Missing configuration for: {variable}"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message, variable=variable)
