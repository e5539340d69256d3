"""Inline critical CSS into HTML build output after the build emits it."""

from .utils.config import VERSION
from .utils.error import (
    AssetWriteError,
    CriticalCSSError,
    CriticalCSSWarning,
    DiscoveryEmptyWarning,
    EngineError,
    EngineInvocationError,
    InvalidConfigurationError,
)
from .assets import BaseAssetSet, DirectoryAssetSet, MemoryAssetSet
from .core import (
    Configuration,
    OrchestrationResult,
    Orchestrator,
    OrchestratorState,
    discover_html_files,
    process_file,
    resolve_options,
)
from .engine import CallableEngine, EngineRequest, NodeCriticalEngine, ProcessingResult
from .plugin import CriticalCSSPlugin

__version__ = VERSION

__all__ = [
    'CriticalCSSPlugin',
    'Configuration',
    'resolve_options',
    'discover_html_files',
    'process_file',
    'Orchestrator',
    'OrchestratorState',
    'OrchestrationResult',
    'BaseAssetSet',
    'MemoryAssetSet',
    'DirectoryAssetSet',
    'CallableEngine',
    'EngineRequest',
    'NodeCriticalEngine',
    'ProcessingResult',
    'CriticalCSSError',
    'InvalidConfigurationError',
    'EngineError',
    'EngineInvocationError',
    'AssetWriteError',
    'CriticalCSSWarning',
    'DiscoveryEmptyWarning',
]
