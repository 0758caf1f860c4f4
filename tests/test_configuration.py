import logging

import pytest
import yaml

from buyway.shared.core.configuration import ConfigManager, SystemConfig, ValidationLevel
from buyway.shared.core.logging_config import configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("BUYWAY_STORAGE_BACKEND", "BUYWAY_DB_PATH", "BUYWAY_DELIVERY_DAYS",
                "BUYWAY_MAINTENANCE_MODE", "LOG_LEVEL", "BUYWAY_LOG_FILE", "BUYWAY_CART_KEY",
                "BUYWAY_WISHLIST_KEY", "BUYWAY_SEED_FILE"):
        monkeypatch.delenv(key, raising=False)


def write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


def test_defaults_without_files(tmp_path):
    config = ConfigManager(tmp_path).get_config()

    assert config.storage.backend == "memory"
    assert config.storage.cart_key == "user_cart"
    assert config.storage.wishlist_key == "user_wishlist"
    assert config.checkout.delivery_days == 5
    assert config.checkout.pincode_length == 6
    assert config.settings.free_shipping_threshold == 999


def test_precedence_env_over_user_over_defaults(tmp_path, monkeypatch):
    write_yaml(tmp_path / "defaults.yaml", {"checkout": {"delivery_days": 7, "pincode_length": 5}})
    write_yaml(tmp_path / "user.yaml", {"checkout": {"delivery_days": 3}})
    monkeypatch.setenv("BUYWAY_DELIVERY_DAYS", "2")
    monkeypatch.setenv("BUYWAY_MAINTENANCE_MODE", "yes")

    config = ConfigManager(tmp_path).get_config()

    assert config.checkout.delivery_days == 2
    assert config.checkout.pincode_length == 5
    assert config.settings.maintenance_mode is True


def test_non_integer_env_value_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("BUYWAY_DELIVERY_DAYS", "soon")

    assert ConfigManager(tmp_path).get_config().checkout.delivery_days == 5


def test_strict_validation_raises(tmp_path):
    write_yaml(tmp_path / "user.yaml", {"storage": {"backend": "redis"}})

    with pytest.raises(ValueError, match="Configuration validation failed"):
        ConfigManager(tmp_path).get_config()


def test_lenient_validation_falls_back_to_defaults(tmp_path):
    write_yaml(tmp_path / "user.yaml", {"checkout": {"unknown_option": 1}})

    config = ConfigManager(tmp_path).get_config(ValidationLevel.LENIENT)

    assert config == SystemConfig()


def test_save_user_config_merges_and_reloads(tmp_path):
    manager = ConfigManager(tmp_path / "config")
    assert manager.get_config().storage.backend == "memory"

    assert manager.save_user_config({"storage": {"backend": "duckdb"}})
    assert manager.save_user_config({"storage": {"db_path": "shop.duckdb"}})

    config = manager.get_config()
    assert config.storage.backend == "duckdb"
    assert config.storage.db_path == "shop.duckdb"


def test_configure_logging_installs_file_and_console_handlers(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        settings = SystemConfig().logging.model_copy(
            update={"file": str(tmp_path / "logs" / "buyway.log"), "level": "debug"}
        )
        configure_logging(settings)

        kinds = sorted(type(handler).__name__ for handler in root.handlers)
        assert kinds == ["RotatingFileHandler", "StreamHandler"]
        assert root.level == logging.DEBUG
        assert (tmp_path / "logs" / "buyway.log").exists()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
