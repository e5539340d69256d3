"""Pytest configuration for critical CSS inliner tests."""

import asyncio
import logging
from typing import Dict, Optional

import pytest

from ..assets import MemoryAssetSet
from ..engine import ProcessingResult

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


class FakeEngine:
    """Engine double returning canned results per source file."""

    def __init__(self, results: Optional[Dict[str, object]] = None,
                 failures: Optional[Dict[str, Exception]] = None,
                 delays: Optional[Dict[str, float]] = None,
                 default: object = None):
        self.results = results or {}
        self.failures = failures or {}
        self.delays = delays or {}
        self.default = default if default is not None else ProcessingResult()
        self.requests = []
        self.finished = []

    async def generate(self, request):
        self.requests.append(request)
        await asyncio.sleep(self.delays.get(request.src, 0))
        if request.src in self.failures:
            raise self.failures[request.src]
        self.finished.append(request.src)
        return self.results.get(request.src, self.default)

    def request_for(self, src):
        return next(request for request in self.requests if request.src == src)


@pytest.fixture
def fake_engine():
    """Return the engine double class."""
    return FakeEngine


@pytest.fixture(scope='session')
def sample_html():
    """Return sample HTML content for testing."""
    return """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Test Page</title>
    <link rel="stylesheet" href="main.css">
</head>
<body>
    <header class="hero"><h1>Test Page</h1></header>
    <main><p class="below-fold">Content</p></main>
</body>
</html>
"""


@pytest.fixture(scope='session')
def sample_css():
    """Return sample stylesheet content for testing."""
    return "body{margin:0}.hero{color:#333}.below-fold{padding:20px}"


@pytest.fixture(scope='session')
def inlined_html():
    """Return HTML as the engine would rewrite it."""
    return (
        "<!DOCTYPE html><html><head><style>body{margin:0}.hero{color:#333}</style>"
        "<link rel=\"preload\" href=\"main.css\" as=\"style\"></head><body></body></html>"
    )


@pytest.fixture
def build_assets(sample_html, sample_css):
    """Return a typical build output."""
    return MemoryAssetSet({
        'index.html': sample_html,
        'about.html': sample_html,
        'main.js': 'console.log("loaded");',
        'main.css': sample_css,
    })
