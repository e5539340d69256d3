"""Tests for the host-facing plugin."""

import logging
from unittest.mock import MagicMock

import pytest

from ..core.orchestrator import OrchestratorState
from ..engine import CallableEngine, NodeCriticalEngine, ProcessingResult
from ..plugin import CriticalCSSPlugin
from ..assets import MemoryAssetSet
from ..utils.error import EngineInvocationError, InvalidConfigurationError


class TestCriticalCSSPlugin:
    """Tests for CriticalCSSPlugin."""

    def test_default_options(self):
        """Test that the plugin resolves defaults at construction."""
        plugin = CriticalCSSPlugin()
        assert plugin.options.to_dict() == {
            'inline': True,
            'extract': True,
            'width': 1300,
            'height': 900,
            'src': 'index.html',
            'dest': 'index.html',
        }
        assert isinstance(plugin.engine, NodeCriticalEngine)

    def test_invalid_options_fail_construction(self):
        with pytest.raises(InvalidConfigurationError):
            CriticalCSSPlugin({'width': 'invalid'})

    def test_plain_callable_engine(self):
        plugin = CriticalCSSPlugin(engine=lambda request: {})
        assert isinstance(plugin.engine, CallableEngine)

    def test_apply_registers_after_emit(self):
        """Test registration on the host's after-emit hook."""
        plugin = CriticalCSSPlugin()
        hooks = MagicMock()
        plugin.apply(hooks)
        hooks.after_emit.tap_async.assert_called_once_with('CriticalCSSPlugin', plugin.after_emit)

    @pytest.mark.asyncio
    async def test_process(self, build_assets, fake_engine):
        engine = fake_engine(default=ProcessingResult(html='<html>inlined</html>'))
        plugin = CriticalCSSPlugin({'target': {'css': 'critical.css'}}, engine=engine)

        result = await plugin.process(build_assets, '/dist')

        assert result.state is OrchestratorState.COMPLETED
        assert result.files == ['index.html', 'about.html']
        assert build_assets.read('about.html') == '<html>inlined</html>'

    @pytest.mark.asyncio
    async def test_process_twice_uses_fresh_orchestrator(self, build_assets, fake_engine):
        plugin = CriticalCSSPlugin(engine=fake_engine())
        await plugin.process(build_assets, '/dist')
        await plugin.process(build_assets, '/dist')

    @pytest.mark.asyncio
    async def test_after_emit_success(self, build_assets, fake_engine):
        callback = MagicMock()
        plugin = CriticalCSSPlugin(engine=fake_engine())

        await plugin.after_emit(build_assets, '/dist', callback)

        callback.assert_called_once_with(None)

    @pytest.mark.asyncio
    async def test_after_emit_no_html(self, fake_engine):
        callback = MagicMock()
        plugin = CriticalCSSPlugin(engine=fake_engine())

        with pytest.warns(UserWarning):
            await plugin.after_emit(MemoryAssetSet({'main.js': ''}), '/dist', callback)

        callback.assert_called_once_with(None)

    @pytest.mark.asyncio
    async def test_after_emit_failure(self, build_assets, fake_engine, caplog):
        caplog.set_level(logging.ERROR, logger='critical_css')
        callback = MagicMock()
        engine = fake_engine(
            default=ProcessingResult(html='<html>inlined</html>'),
            failures={'index.html': RuntimeError('timeout')},
        )
        plugin = CriticalCSSPlugin(engine=engine)

        await plugin.after_emit(build_assets, '/dist', callback)

        callback.assert_called_once()
        error = callback.call_args[0][0]
        assert isinstance(error, EngineInvocationError)
        assert error.filename == 'index.html'
        assert build_assets.read('about.html') == '<html>inlined</html>'
        assert 'Critical CSS processing failed' in caplog.text

    @pytest.mark.asyncio
    async def test_engine_called_with_callable(self, build_assets):
        seen = []

        async def generate(request):
            seen.append(request.src)
            return {'html': f'<html>{request.src}</html>'}

        plugin = CriticalCSSPlugin({'dest': 'home.html'}, engine=generate)
        await plugin.process(build_assets, '/dist')

        assert sorted(seen) == ['about.html', 'index.html']
        assert build_assets.read('home.html') == '<html>index.html</html>'
        assert build_assets.read('about.html') == '<html>about.html</html>'
