"""Configuration constants for the critical CSS inliner."""

import os

# Project version
VERSION = "1.0.0"

# Name used when registering on host hooks
PLUGIN_NAME = 'CriticalCSSPlugin'

# Diagnostic channel, kept apart from the host's own loggers
LOGGER_NAME = 'critical_css'

# Option defaults
DEFAULT_INLINE = True
DEFAULT_EXTRACT = True
DEFAULT_WIDTH = 1300
DEFAULT_HEIGHT = 900
DEFAULT_SRC = 'index.html'
DEFAULT_DEST = 'index.html'

DEFAULT_OPTIONS = {
    'inline': DEFAULT_INLINE,
    'extract': DEFAULT_EXTRACT,
    'width': DEFAULT_WIDTH,
    'height': DEFAULT_HEIGHT,
    'src': DEFAULT_SRC,
    'dest': DEFAULT_DEST,
}

# Assets picked up by discovery
HTML_EXTENSION = '.html'

# Engine
NODE_BINARY = os.environ.get('CRITICAL_CSS_NODE', 'node')
ENGINE_MODULE = 'critical'
DEFAULT_ENCODING = 'utf-8'

# Logging
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_FILE = os.environ.get('CRITICAL_CSS_LOG_FILE')
LOG_LEVEL = 'INFO'

# Exported config
__all__ = [
    'VERSION', 'PLUGIN_NAME', 'LOGGER_NAME',
    'DEFAULT_INLINE', 'DEFAULT_EXTRACT', 'DEFAULT_WIDTH', 'DEFAULT_HEIGHT',
    'DEFAULT_SRC', 'DEFAULT_DEST', 'DEFAULT_OPTIONS',
    'HTML_EXTENSION',
    'NODE_BINARY', 'ENGINE_MODULE', 'DEFAULT_ENCODING',
    'LOG_FORMAT', 'LOG_DATE_FORMAT', 'LOG_FILE', 'LOG_LEVEL',
]
