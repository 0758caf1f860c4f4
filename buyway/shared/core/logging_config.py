"""Logging setup for applications embedding the storefront state layer."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from .configuration import LoggingConfig

LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _level(name: str, default: int) -> int:
    return LOG_LEVEL_MAP.get(name.upper(), default)


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """Install file and console handlers on the root logger.

    File handler: everything at the configured level, rotated at ``max_bytes``.
    Console handler: only ``console_level`` and above.

    Args:
        config: Logging section of the system configuration

    Returns:
        The configured root logger
    """
    root_logger = logging.getLogger()
    root_level = _level(config.level, logging.INFO)
    root_logger.setLevel(root_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if config.file:
        log_file_path = Path(config.file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(root_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(_level(config.console_level, logging.WARNING))
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    root_logger.addHandler(console_handler)

    # Suppress verbose event loop logs
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    root_logger.info(f"Logging configured: file={config.file}, console={config.console_level.upper()}+")
    return root_logger
