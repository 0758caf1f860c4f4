"""
Shared Core Module
==================

Subscription broadcasting, configuration, logging and the error taxonomy.
"""

from .broadcaster import Broadcaster, Listener, Unsubscribe
from .errors import (
    StorefrontError,
    ValidationFailure,
    CheckoutValidationError,
    CatalogValidationError,
)
from .configuration import (
    ConfigManager,
    SystemConfig,
    StorageConfig,
    CheckoutConfig,
    CatalogConfig,
    SettingsDefaults,
    LoggingConfig,
    ValidationLevel,
    load_config,
)
from .logging_config import configure_logging

__all__ = [
    # Broadcasting
    "Broadcaster",
    "Listener",
    "Unsubscribe",
    # Errors
    "StorefrontError",
    "ValidationFailure",
    "CheckoutValidationError",
    "CatalogValidationError",
    # Configuration
    "ConfigManager",
    "SystemConfig",
    "StorageConfig",
    "CheckoutConfig",
    "CatalogConfig",
    "SettingsDefaults",
    "LoggingConfig",
    "ValidationLevel",
    "load_config",
    "configure_logging",
]
