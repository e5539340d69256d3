"""Options resolution: user options merged over defaults into a frozen record."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..utils.common import freeze, thaw
from ..utils.config import DEFAULT_OPTIONS
from ..utils.error import InvalidConfigurationError
from ..utils.logging import get_logger
from .validator import normalize_keys, validate_options

logger = get_logger(__name__)


@dataclass(frozen=True)
class Viewport:
    """A ``width x height`` viewport the engine renders at."""
    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return {'width': self.width, 'height': self.height}


@dataclass(frozen=True)
class SingleFileTarget:
    """Target given as a single filename."""
    name: str


@dataclass(frozen=True)
class SplitTarget:
    """Target given as separate ``css``/``html``/``uncritical`` filenames."""
    css: Optional[str] = None
    html: Optional[str] = None
    uncritical: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        return {
            key: value
            for key, value in (('css', self.css), ('html', self.html), ('uncritical', self.uncritical))
            if value is not None
        }


Target = Union[SingleFileTarget, SplitTarget]


@dataclass(frozen=True)
class IgnoreRules:
    """Rules the engine drops from critical CSS. Interpreted by the engine only."""
    atrule: Optional[Tuple[str, ...]] = None
    rule: Optional[Tuple[Any, ...]] = None
    decl: Any = None

    def to_dict(self) -> Dict[str, Any]:
        rendered = {}
        if self.atrule is not None:
            rendered['atrule'] = list(self.atrule)
        if self.rule is not None:
            rendered['rule'] = list(self.rule)
        if self.decl is not None:
            rendered['decl'] = thaw(self.decl)
        return rendered


@dataclass(frozen=True)
class Configuration:
    """Resolved plugin options. Never mutated once built."""
    inline: bool = DEFAULT_OPTIONS['inline']
    extract: bool = DEFAULT_OPTIONS['extract']
    width: float = DEFAULT_OPTIONS['width']
    height: float = DEFAULT_OPTIONS['height']
    src: str = DEFAULT_OPTIONS['src']
    dest: Optional[str] = None
    base: Optional[str] = None
    dimensions: Optional[Tuple[Viewport, ...]] = None
    target: Optional[Target] = None
    ignore: Optional[IgnoreRules] = None
    asset_paths: Optional[Tuple[str, ...]] = None
    penthouse: Optional[Mapping[str, Any]] = None

    def destination_for(self, filename: str) -> str:
        """Asset that receives the inlined HTML for ``filename``.

        When ``dest`` was given, the configured ``src`` is written there.
        Every other HTML file, and ``src`` itself when no ``dest`` was
        given, is rewritten in place.
        """
        if self.dest is not None and filename == self.src:
            return self.dest
        return filename

    def to_dict(self) -> Dict[str, Any]:
        """Render the configuration back into a plain options mapping."""
        options = {
            'inline': self.inline,
            'extract': self.extract,
            'width': self.width,
            'height': self.height,
            'src': self.src,
            'dest': self.dest if self.dest is not None else DEFAULT_OPTIONS['dest'],
        }
        if self.base is not None:
            options['base'] = self.base
        if self.dimensions is not None:
            options['dimensions'] = [viewport.to_dict() for viewport in self.dimensions]
        if isinstance(self.target, SingleFileTarget):
            options['target'] = self.target.name
        elif isinstance(self.target, SplitTarget):
            options['target'] = self.target.to_dict()
        if self.ignore is not None:
            options['ignore'] = self.ignore.to_dict()
        if self.asset_paths is not None:
            options['asset_paths'] = list(self.asset_paths)
        if self.penthouse is not None:
            options['penthouse'] = thaw(self.penthouse)
        return options


def build_target(value: Union[str, Mapping[str, str]]) -> Target:
    if isinstance(value, str):
        return SingleFileTarget(value)
    return SplitTarget(**dict(value))


def build_ignore(value: Mapping[str, Any]) -> IgnoreRules:
    atrule = value.get('atrule')
    rule = value.get('rule')
    return IgnoreRules(
        atrule=tuple(atrule) if atrule is not None else None,
        rule=tuple(rule) if rule is not None else None,
        decl=freeze(value['decl']) if value.get('decl') is not None else None,
    )


def resolve_options(user_options: Optional[Mapping[str, Any]] = None) -> Configuration:
    """Validate user options and merge them over the defaults.

    Every supplied option is checked before anything is merged. Recognized
    options replace their default wholesale; nested ``target`` and
    ``ignore`` records are never merged with anything.

    Args:
        user_options: Options as given by the user, or None for defaults

    Returns:
        Frozen configuration

    Raises:
        InvalidConfigurationError: If any option is unknown or malformed
    """
    if user_options is None:
        user_options = {}

    errors = validate_options(user_options)
    if errors:
        raise InvalidConfigurationError(errors)

    merged: Dict[str, Any] = dict(DEFAULT_OPTIONS)
    supplied = set()
    for canonical, _, value in normalize_keys(user_options):
        merged[canonical] = value
        supplied.add(canonical)

    dimensions = merged.get('dimensions')
    target = merged.get('target')
    ignore = merged.get('ignore')
    asset_paths = merged.get('asset_paths')
    penthouse = merged.get('penthouse')

    configuration = Configuration(
        inline=merged['inline'],
        extract=merged['extract'],
        width=merged['width'],
        height=merged['height'],
        src=merged['src'],
        dest=merged['dest'] if 'dest' in supplied else None,
        base=merged.get('base'),
        dimensions=tuple(
            Viewport(item['width'], item['height']) for item in dimensions
        ) if dimensions is not None else None,
        target=build_target(target) if target is not None else None,
        ignore=build_ignore(ignore) if ignore is not None else None,
        asset_paths=tuple(asset_paths) if asset_paths is not None else None,
        penthouse=freeze(penthouse) if penthouse is not None else None,
    )
    logger.debug(f"Resolved options: {configuration.to_dict()}")
    return configuration


__all__ = [
    'Viewport',
    'SingleFileTarget',
    'SplitTarget',
    'Target',
    'IgnoreRules',
    'Configuration',
    'resolve_options',
]
