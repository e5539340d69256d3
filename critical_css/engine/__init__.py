"""Critical CSS engine seam and adapters."""

from .base import (
    CallableEngine,
    CriticalEngine,
    EnginePayload,
    EngineRequest,
    ProcessingResult,
    encode_pattern,
)
from .node import NodeCriticalEngine

__all__ = [
    'CallableEngine',
    'CriticalEngine',
    'EnginePayload',
    'EngineRequest',
    'ProcessingResult',
    'NodeCriticalEngine',
    'encode_pattern',
]
