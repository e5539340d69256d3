"""Utilities for the critical CSS inliner."""

from .config import VERSION, PLUGIN_NAME, LOGGER_NAME, DEFAULT_OPTIONS
from .error import (
    CriticalCSSError,
    InvalidConfigurationError,
    EngineError,
    EngineInvocationError,
    AssetWriteError,
    CriticalCSSWarning,
    DiscoveryEmptyWarning,
)
from .logging import setup_logging, get_logger

__all__ = [
    'VERSION',
    'PLUGIN_NAME',
    'LOGGER_NAME',
    'DEFAULT_OPTIONS',
    'CriticalCSSError',
    'InvalidConfigurationError',
    'EngineError',
    'EngineInvocationError',
    'AssetWriteError',
    'CriticalCSSWarning',
    'DiscoveryEmptyWarning',
    'setup_logging',
    'get_logger',
]
