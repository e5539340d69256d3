"""Types exchanged with the critical CSS engine."""

import inspect
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple, Union

from typing_extensions import Protocol, TypedDict, runtime_checkable

from ..utils.common import thaw

if TYPE_CHECKING:
    from ..core.options import IgnoreRules, Viewport

REGEXP_FLAGS = (
    (re.IGNORECASE, 'i'),
    (re.MULTILINE, 'm'),
    (re.DOTALL, 's'),
)

RESULT_FIELDS = ('html', 'css', 'uncritical')


class EnginePayload(TypedDict, total=False):
    """Record the external engine is called with."""
    base: str
    src: str
    target: Union[str, Dict[str, str]]
    inline: bool
    extract: bool
    width: float
    height: float
    dimensions: List[Dict[str, float]]
    ignore: Dict[str, Any]
    assetPaths: List[str]
    penthouse: Dict[str, Any]


def encode_pattern(value: Any) -> Any:
    """Encode compiled regular expressions so they survive JSON."""
    if isinstance(value, re.Pattern):
        flags = ''.join(letter for flag, letter in REGEXP_FLAGS if value.flags & flag)
        return {'__regexp__': value.pattern, 'flags': flags}
    return value


@dataclass(frozen=True)
class EngineRequest:
    """One engine invocation, built per HTML file."""
    base: str
    src: str
    target: Union[str, Mapping[str, str]]
    inline: bool
    extract: bool
    width: float
    height: float
    dimensions: Optional[Tuple['Viewport', ...]] = None
    ignore: Optional['IgnoreRules'] = None
    asset_paths: Optional[Tuple[str, ...]] = None
    penthouse: Optional[Mapping[str, Any]] = None

    def to_payload(self) -> EnginePayload:
        """Render the request in the engine's own option names."""
        payload: EnginePayload = {
            'base': self.base,
            'src': self.src,
            'target': self.target if isinstance(self.target, str) else dict(self.target),
            'inline': self.inline,
            'extract': self.extract,
            'width': self.width,
            'height': self.height,
        }
        if self.dimensions is not None:
            payload['dimensions'] = [viewport.to_dict() for viewport in self.dimensions]
        if self.ignore is not None:
            ignore = self.ignore.to_dict()
            if 'rule' in ignore:
                ignore['rule'] = [encode_pattern(rule) for rule in ignore['rule']]
            payload['ignore'] = ignore
        if self.asset_paths is not None:
            payload['assetPaths'] = list(self.asset_paths)
        if self.penthouse is not None:
            payload['penthouse'] = thaw(self.penthouse)
        return payload


@dataclass(frozen=True)
class ProcessingResult:
    """What the engine produced for one HTML file. Any field may be absent."""
    html: Optional[str] = None
    css: Optional[str] = None
    uncritical: Optional[str] = None

    @classmethod
    def from_mapping(cls, value: Any) -> 'ProcessingResult':
        """Build a result from an engine's return value.

        Unknown keys are ignored and empty values count as absent.

        Raises:
            TypeError: If the value is not a mapping of text fields
        """
        if isinstance(value, ProcessingResult):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"Engine returned {type(value).__name__}, expected a mapping")

        fields = {}
        for name in RESULT_FIELDS:
            item = value.get(name)
            if isinstance(item, bytes):
                item = item.decode('utf-8')
            if item is not None and not isinstance(item, str):
                raise TypeError(f"Engine result field '{name}' should be a string")
            fields[name] = item or None
        return cls(**fields)


@runtime_checkable
class CriticalEngine(Protocol):
    """Anything that turns an :class:`EngineRequest` into critical CSS."""

    async def generate(self, request: EngineRequest) -> Union[ProcessingResult, Mapping[str, Any]]:
        ...


class CallableEngine:
    """Engine wrapping a plain function or coroutine function.

    The callable receives the :class:`EngineRequest` and returns a
    :class:`ProcessingResult` or a mapping with ``html``/``css``/``uncritical``.
    """

    def __init__(self, func: Callable[[EngineRequest], Union[Awaitable[Any], Any]]):
        self.func = func

    async def generate(self, request: EngineRequest) -> ProcessingResult:
        result = self.func(request)
        if inspect.isawaitable(result):
            result = await result
        return ProcessingResult.from_mapping(result)


__all__ = [
    'EnginePayload',
    'EngineRequest',
    'ProcessingResult',
    'CriticalEngine',
    'CallableEngine',
    'encode_pattern',
]
