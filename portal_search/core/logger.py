"""
Centralized logging setup for Portal Search.

Handlers are attached to the "portal_search" package logger rather than the
root logger, so an application embedding the index keeps control of its own
logging. Records still propagate to the root logger.

pdfminer (used by pdfplumber) logs every parsed object at DEBUG level; it is
capped at WARNING unless configured otherwise.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


PACKAGE_LOGGER = "portal_search"

LOG_FILENAME = "portal_search.log"

# Third-party loggers too chatty to follow the package level
NOISY_LOGGERS = ("pdfminer", "urllib3")

_logger_initialized = False


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    logs_directory: Optional[Path] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    third_party_level: str = "WARNING"
) -> logging.Logger:
    """
    Attach console and optional rotating file handlers to the package logger.

    Only the first call has an effect.

    Args:
        log_level: Level for portal_search loggers.
        log_format: Format string for log messages.
        logs_directory: Directory for portal_search.log. None disables file output.
        max_file_size_mb: Size at which the log file is rotated.
        backup_count: Rotated files to keep.
        third_party_level: Level applied to NOISY_LOGGERS.

    Returns:
        The package logger.
    """
    global _logger_initialized

    package_logger = logging.getLogger(PACKAGE_LOGGER)

    if _logger_initialized:
        return package_logger

    package_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            logs_directory / LOG_FILENAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(getattr(logging, third_party_level.upper(), logging.WARNING))

    _logger_initialized = True

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the portal_search namespace.

    Configures logging from config.json on first use, or with console-only
    defaults when no config file can be found. Names outside the namespace
    (scripts, "__main__") are nested under it so they share its handlers.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        Configured Logger instance.
    """
    if not _logger_initialized:
        try:
            from .config_loader import get_config
            config = get_config()
            setup_logging(
                log_level=config.logging.level,
                log_format=config.logging.format,
                logs_directory=config.paths.logs_directory,
                max_file_size_mb=config.logging.max_file_size_mb,
                backup_count=config.logging.backup_count
            )
        except Exception:
            setup_logging()

    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"

    return logging.getLogger(name)
