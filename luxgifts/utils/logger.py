"""
Logging setup for the Luxury Gifts client.

One "luxgifts" logger writes to stdout; modules take children of it through
get_logger(). LOG_LEVEL picks the starting level.
"""
import logging
import os
import sys

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("luxgifts")
logger.setLevel(LOG_LEVEL)

if not logger.handlers:
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(_handler)

# Keep client logs out of the host application's root handlers
logger.propagate = False


def set_log_level(level: str) -> None:
    """Change the level of the whole luxgifts logger tree at runtime."""
    logger.setLevel(level.upper())


def get_logger(name: str = None) -> logging.Logger:
    """
    Return the package logger, or a named child of it.

    Args:
        name: Module-level suffix, e.g. "api.client" -> "luxgifts.api.client"
    """
    if name:
        return logging.getLogger(f"luxgifts.{name}")
    return logger
