"""
Logging Configuration
Sets up the shared logger for the CoasterForge backend.
"""
import logging
import sys
from typing import Optional

LOGGER_NAMESPACE = "coasterforge"


def setup_logging(level: int | str = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'coasterforge' logger namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, "INFO")
        log_file: Optional path to also write logs to a file.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)

    # Re-init (uvicorn --reload, repeated create_app) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("[Backend] Logging initialized.")
    return logger


def get_logger(area: str) -> logging.Logger:
    """Return a child logger, e.g. get_logger("store") -> 'coasterforge.store'."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{area}")
