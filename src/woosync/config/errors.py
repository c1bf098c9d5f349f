"""Configuration error definitions."""

from __future__ import annotations

from woosync.domain.errors import WooSyncError


class ConfigurationError(WooSyncError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""
