"""
Configuration Management System for BuyWay Storefront

This module provides a centralized configuration system that supports a 3-tier
precedence hierarchy: environment → user → system defaults.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class StorageConfig(BaseModel):
    """Key-value backing configuration"""
    model_config = ConfigDict(extra='forbid')

    backend: Literal["memory", "duckdb"] = Field(default="memory", description="Key-value backing implementation")
    db_path: str = Field(default="data/db/buyway.duckdb", description="DuckDB file path (duckdb backend only)")
    cart_key: str = Field(default="user_cart", description="Storage key holding the cart line items")
    wishlist_key: str = Field(default="user_wishlist", description="Storage key holding the wishlist products")


class CheckoutConfig(BaseModel):
    """Checkout and order placement configuration"""
    model_config = ConfigDict(extra='forbid')

    delivery_days: int = Field(default=5, ge=0, le=60, description="Days added to the order date for the delivery estimate")
    pincode_length: int = Field(default=6, ge=1, le=12, description="Required pincode length")
    flat_delivery_fee: float = Field(default=0.0, ge=0.0, description="Fee charged below the free shipping threshold")
    order_id_prefix: str = Field(default="ORD-", description="Prefix for generated order identifiers")


class CatalogConfig(BaseModel):
    """Product catalog configuration"""
    model_config = ConfigDict(extra='forbid')

    product_id_prefix: str = Field(default="PROD-", description="Prefix for admin-created product identifiers")
    default_image: str = Field(
        default="https://images.unsplash.com/photo-1521572267360-ee0c290915e8?w=400",
        description="Image used for admin-created products",
    )
    default_description: str = Field(default="New catalog entry.", description="Description for admin-created products")
    seed_file: Optional[str] = Field(default=None, description="Alternative seed catalog YAML (bundled catalog when unset)")


class SettingsDefaults(BaseModel):
    """Initial values of the global app settings record"""
    model_config = ConfigDict(extra='forbid')

    app_name: str = Field(default="BuyWay")
    app_logo: Optional[str] = Field(default=None, description="Remote logo URL; bundled asset when unset")
    maintenance_mode: bool = Field(default=False)
    free_shipping_threshold: float = Field(default=999, ge=0)
    support_email: str = Field(default="support@buyway.com")
    store_currency: str = Field(default="₹")
    default_logo: str = Field(default="assets/images/logo.png", description="Bundled logo asset path")


class LoggingConfig(BaseModel):
    """Logging configuration"""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="INFO", description="Root log level")
    console_level: str = Field(default="WARNING", description="Console handler log level")
    file: Optional[str] = Field(default=None, description="Rotating log file path; no file handler when unset")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    backup_count: int = Field(default=5, ge=0, le=50)


class SystemConfig(BaseModel):
    """Complete system configuration"""
    model_config = ConfigDict(extra='forbid')

    storage: StorageConfig = Field(default_factory=StorageConfig)
    checkout: CheckoutConfig = Field(default_factory=CheckoutConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    settings: SettingsDefaults = Field(default_factory=SettingsDefaults)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Metadata
    schema_version: int = Field(default=1, description="Configuration schema version")


# Environment variable → (section, key, converter)
ENV_MAP: Dict[str, tuple] = {
    'BUYWAY_STORAGE_BACKEND': ('storage', 'backend', str),
    'BUYWAY_DB_PATH': ('storage', 'db_path', str),
    'BUYWAY_CART_KEY': ('storage', 'cart_key', str),
    'BUYWAY_WISHLIST_KEY': ('storage', 'wishlist_key', str),
    'BUYWAY_DELIVERY_DAYS': ('checkout', 'delivery_days', int),
    'BUYWAY_SEED_FILE': ('catalog', 'seed_file', str),
    'BUYWAY_MAINTENANCE_MODE': ('settings', 'maintenance_mode', bool),
    'LOG_LEVEL': ('logging', 'level', str),
    'BUYWAY_LOG_FILE': ('logging', 'file', str),
}


class ConfigManager:
    """Centralized configuration manager with 3-tier precedence hierarchy"""

    def __init__(self, config_dir: Optional[Path] = None, env_file: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else Path.cwd() / "config"
        self._system_config: Optional[SystemConfig] = None
        self._user_config: Optional[Dict[str, Any]] = None

        # Load environment variables from .env, never overriding the real environment
        load_dotenv(dotenv_path=env_file, override=False)

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

    def _save_yaml_file(self, file_path: Path, data: Dict[str, Any]) -> bool:
        """Save configuration to YAML file"""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, indent=2, allow_unicode=True)
            return True
        except OSError as e:
            logger.error(f"Failed to save {file_path}: {e}")
            return False

    def _load_system_defaults(self) -> SystemConfig:
        """Load system default configuration"""
        if self._system_config is None:
            defaults_dict = self._load_yaml_file(self.config_dir / "defaults.yaml")

            try:
                self._system_config = SystemConfig(**defaults_dict)
            except ValidationError as e:
                logger.warning(f"System defaults validation failed: {e}")
                # Use Pydantic defaults
                self._system_config = SystemConfig()

        return self._system_config

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user-level configuration"""
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")

        return self._user_config

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → user → system"""
        merged = self._load_system_defaults().model_dump()
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key, converter) in ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue

            if converter is bool:
                converted: Any = value.lower() in ('true', '1', 'yes', 'on')
            elif converter is int:
                try:
                    converted = int(value)
                except ValueError:
                    logger.warning(f"Ignoring non-integer {env_key}={value!r}")
                    continue
            else:
                converted = value

            overrides.setdefault(section, {})[config_key] = converted

        return overrides

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}")
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def save_user_config(self, config_updates: Dict[str, Any]) -> bool:
        """Save user-level configuration updates"""
        user_path = self.config_dir / "user.yaml"

        existing_config = self._load_yaml_file(user_path)
        self._deep_merge(existing_config, config_updates)

        success = self._save_yaml_file(user_path, existing_config)
        if success:
            # Clear cached user config to force reload
            self._user_config = None

        return success

    def reload_config(self) -> None:
        """Clear cached configurations and reload from files"""
        self._system_config = None
        self._user_config = None


def load_config(
    config_dir: Optional[Path] = None,
    validation_level: ValidationLevel = ValidationLevel.STRICT,
) -> SystemConfig:
    """Build a configuration from the given directory and the environment."""
    return ConfigManager(config_dir).get_config(validation_level)
