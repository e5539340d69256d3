"""Logging utility for the critical CSS inliner."""

import logging
import os
from typing import Optional
from .config import LOG_DATE_FORMAT, LOG_FILE, LOG_FORMAT, LOGGER_NAME


def setup_logging(log_level: int = logging.INFO, log_file: Optional[str] = LOG_FILE) -> None:
    """Set up logging configuration.

    Args:
        log_level: Level applied to the root logger
        log_file: Optional file that receives a copy of every record
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger on the plugin's diagnostic channel.

    Args:
        name: Module name; names outside the package are nested under
            the plugin channel

    Returns:
        Logger instance
    """
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(LOGGER_NAME + '.'):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


# Exported functions
__all__ = ['setup_logging', 'get_logger']
