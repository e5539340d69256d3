"""Host-facing plugin object."""

from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

from .assets.base import BaseAssetSet
from .core.options import Configuration, resolve_options
from .core.orchestrator import OrchestrationResult, Orchestrator
from .engine.base import CallableEngine, CriticalEngine
from .engine.node import NodeCriticalEngine
from .utils.config import PLUGIN_NAME
from .utils.logging import get_logger

logger = get_logger(__name__)

Callback = Callable[[Optional[Exception]], Any]


class CriticalCSSPlugin:
    """Inline critical CSS into a build's HTML output after it is emitted.

    Options are resolved when the plugin is built, so invalid options fail
    construction before any build runs.

    Example::

        plugin = CriticalCSSPlugin({
            'target': {'css': 'critical.css', 'uncritical': 'uncritical.css'},
        })
        await plugin.process(assets, output_path='dist')
    """

    name = PLUGIN_NAME

    def __init__(self, options: Optional[Mapping[str, Any]] = None,
                 engine: Optional[Union[CriticalEngine, Callable]] = None):
        """Initialize plugin.

        Args:
            options: User options, validated against the closed schema
            engine: Critical CSS engine, or a plain callable taking an
                engine request; defaults to the ``critical`` npm package

        Raises:
            InvalidConfigurationError: If the options are invalid
        """
        self.options: Configuration = resolve_options(options)
        if engine is None:
            engine = NodeCriticalEngine()
        elif not hasattr(engine, 'generate'):
            engine = CallableEngine(engine)
        self.engine = engine

    def apply(self, hooks: Any) -> None:
        """Register on a host hook registry exposing ``after_emit.tap_async``."""
        hooks.after_emit.tap_async(PLUGIN_NAME, self.after_emit)

    async def process(self, asset_set: BaseAssetSet,
                      output_path: Optional[Union[str, Path]] = None) -> OrchestrationResult:
        """Run once over an emitted build.

        Raises:
            EngineInvocationError: First per-file failure, after every file settled
        """
        return await Orchestrator(self.options, self.engine).run(asset_set, output_path)

    async def after_emit(self, asset_set: BaseAssetSet,
                         output_path: Optional[Union[str, Path]],
                         callback: Callback) -> None:
        """Callback-style entry point for hosts.

        ``callback`` is called exactly once: with None on success, with the
        first failure otherwise.
        """
        try:
            await self.process(asset_set, output_path)
        except Exception as e:
            logger.error(f"Critical CSS processing failed: {e}")
            callback(e)
            return
        callback(None)


__all__ = ['CriticalCSSPlugin']
