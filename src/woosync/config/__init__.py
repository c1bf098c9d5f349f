"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http import RateLimit, TransportConfig
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .woocommerce import (
    Credentials,
    DotcomCredentials,
    SiteCredentials,
    WooCommerceConfig,
    get_woocommerce_config,
)

__all__ = [
    "ConfigurationError",
    "Credentials",
    "DatabaseConfig",
    "DotcomCredentials",
    "MissingConfigurationError",
    "RateLimit",
    "SiteCredentials",
    "StorageConfig",
    "TransportConfig",
    "WooCommerceConfig",
    "configure_logging",
    "get_database_config",
    "get_storage_config",
    "get_woocommerce_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
