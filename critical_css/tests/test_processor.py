"""Tests for per-file processing."""

import logging

import pytest

from ..assets import MemoryAssetSet
from ..core.options import resolve_options
from ..core.processor import apply_result, build_request, process_file
from ..engine import ProcessingResult
from ..utils.error import AssetWriteError, EngineInvocationError

SPLIT_TARGET = {'css': 'critical.css', 'uncritical': 'uncritical.css'}


class TestBuildRequest:
    """Tests for the engine invocation record."""

    def test_overrides(self):
        config = resolve_options({'base': '/configured', 'src': 'index.html', 'dest': 'out.html'})
        request = build_request('about.html', config, '/dist')
        assert request.base == '/dist'
        assert request.src == 'about.html'
        assert request.target == 'about.html'

    def test_src_maps_to_dest(self):
        config = resolve_options({'dest': 'out.html'})
        request = build_request('index.html', config, '/dist')
        assert request.target == 'out.html'

    def test_split_target(self):
        config = resolve_options({'target': SPLIT_TARGET})
        request = build_request('index.html', config, '/dist')
        assert request.target == {
            'css': 'critical.css',
            'uncritical': 'uncritical.css',
            'html': 'index.html',
        }

    def test_split_target_keeps_html(self):
        config = resolve_options({'target': {'html': 'inlined.html'}})
        request = build_request('index.html', config, '/dist')
        assert request.target == {'html': 'inlined.html'}

    def test_payload(self):
        config = resolve_options({
            'width': 800,
            'dimensions': [{'width': 320, 'height': 480}],
            'asset_paths': ['static'],
            'penthouse': {'timeout': 30000},
        })
        payload = build_request('index.html', config, '/dist').to_payload()
        assert 'dest' not in payload
        assert payload == {
            'base': '/dist',
            'src': 'index.html',
            'target': 'index.html',
            'inline': True,
            'extract': True,
            'width': 800,
            'height': 900,
            'dimensions': [{'width': 320, 'height': 480}],
            'assetPaths': ['static'],
            'penthouse': {'timeout': 30000},
        }


class TestApplyResult:
    """Tests for writing engine output into the asset set."""

    @pytest.fixture
    def full_result(self, inlined_html):
        return ProcessingResult(html=inlined_html, css='body{margin:0}', uncritical='p{padding:20px}')

    def test_all_artifacts(self, build_assets, full_result, inlined_html):
        """Test inline and split target with every result field."""
        before = build_assets.to_dict()
        config = resolve_options({'inline': True, 'extract': True, 'target': SPLIT_TARGET})

        written = apply_result('index.html', full_result, config, build_assets)

        assert written == ['index.html', 'critical.css', 'uncritical.css']
        expected = dict(before)
        expected.update({
            'index.html': inlined_html,
            'critical.css': 'body{margin:0}',
            'uncritical.css': 'p{padding:20px}',
        })
        assert build_assets.to_dict() == expected

    def test_inline_disabled(self, build_assets, full_result, sample_html):
        config = resolve_options({'inline': False, 'target': SPLIT_TARGET})
        written = apply_result('index.html', full_result, config, build_assets)
        assert build_assets.read('index.html') == sample_html
        assert written == ['critical.css', 'uncritical.css']

    def test_extract_disabled(self, build_assets, full_result):
        config = resolve_options({'extract': False, 'target': SPLIT_TARGET})
        written = apply_result('index.html', full_result, config, build_assets)
        assert 'critical.css' not in build_assets
        assert written == ['index.html', 'uncritical.css']

    def test_string_target_writes_no_css(self, build_assets, full_result):
        config = resolve_options({'target': 'index.html'})
        assert apply_result('index.html', full_result, config, build_assets) == ['index.html']
        assert 'critical.css' not in build_assets

    def test_missing_result_fields(self, build_assets, sample_html):
        config = resolve_options({'target': SPLIT_TARGET})
        written = apply_result('index.html', ProcessingResult(css='body{}'), config, build_assets)
        assert written == ['critical.css']
        assert build_assets.read('index.html') == sample_html
        assert 'uncritical.css' not in build_assets

    def test_destination(self, build_assets, full_result, sample_html, inlined_html):
        config = resolve_options({'dest': 'index.critical.html'})
        apply_result('index.html', full_result, config, build_assets)
        assert build_assets.read('index.html') == sample_html
        assert build_assets.read('index.critical.html') == inlined_html

    def test_logs_each_write(self, build_assets, full_result, caplog):
        caplog.set_level(logging.INFO, logger='critical_css')
        config = resolve_options({'dest': 'new.html', 'target': SPLIT_TARGET})
        apply_result('index.html', full_result, config, build_assets)
        messages = [record.getMessage() for record in caplog.records if record.levelno == logging.INFO]
        assert 'Created new.html with inlined critical CSS' in messages
        assert 'Generated critical CSS file: critical.css' in messages
        assert 'Generated uncritical CSS file: uncritical.css' in messages


class TestProcessFile:
    """Tests for process_file."""

    @pytest.mark.asyncio
    async def test_success(self, build_assets, fake_engine, inlined_html, caplog):
        caplog.set_level(logging.INFO, logger='critical_css')
        engine = fake_engine(results={'index.html': {'html': inlined_html, 'css': 'body{}'}})
        config = resolve_options({'target': {'css': 'critical.css'}})

        result = await process_file('index.html', config, build_assets, engine, '/dist')

        assert result == ProcessingResult(html=inlined_html, css='body{}')
        assert build_assets.read('index.html') == inlined_html
        assert build_assets.read('critical.css') == 'body{}'
        assert engine.request_for('index.html').base == '/dist'
        assert 'Updated index.html with inlined critical CSS' in caplog.text

    @pytest.mark.asyncio
    async def test_engine_failure_wrapped(self, build_assets, fake_engine, sample_html, caplog):
        cause = RuntimeError('browser crashed')
        engine = fake_engine(failures={'index.html': cause})

        with pytest.raises(EngineInvocationError) as excinfo:
            await process_file('index.html', resolve_options(), build_assets, engine, '/dist')

        assert excinfo.value.filename == 'index.html'
        assert excinfo.value.__cause__ is cause
        assert build_assets.read('index.html') == sample_html
        errors = [record for record in caplog.records if record.levelno == logging.ERROR]
        assert errors and 'Failed to process index.html' in errors[0].getMessage()

    @pytest.mark.asyncio
    async def test_unusable_result(self, build_assets, fake_engine):
        engine = fake_engine(results={'index.html': 'not a mapping'})
        with pytest.raises(EngineInvocationError) as excinfo:
            await process_file('index.html', resolve_options(), build_assets, engine, '/dist')
        assert isinstance(excinfo.value.cause, TypeError)

    @pytest.mark.asyncio
    async def test_strict_collision(self, fake_engine):
        assets = MemoryAssetSet({'index.html': '', 'about.html': ''}, strict=True)
        engine = fake_engine(default={'css': 'body{}'})
        config = resolve_options({'target': {'css': 'critical.css'}})

        await process_file('index.html', config, assets, engine, '/dist')
        with pytest.raises(AssetWriteError):
            await process_file('about.html', config, assets, engine, '/dist')
