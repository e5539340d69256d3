"""Core functionality: options, discovery, per-file processing and orchestration."""

from .options import (
    Configuration,
    IgnoreRules,
    SingleFileTarget,
    SplitTarget,
    Target,
    Viewport,
    resolve_options,
)
from .validator import validate_options
from .discovery import discover_html_files
from .processor import apply_result, build_request, process_file
from .orchestrator import OrchestrationResult, Orchestrator, OrchestratorState

__all__ = [
    'Configuration',
    'IgnoreRules',
    'SingleFileTarget',
    'SplitTarget',
    'Target',
    'Viewport',
    'resolve_options',
    'validate_options',
    'discover_html_files',
    'apply_result',
    'build_request',
    'process_file',
    'OrchestrationResult',
    'Orchestrator',
    'OrchestratorState',
]
