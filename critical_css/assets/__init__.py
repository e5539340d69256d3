"""Asset set accessors for the critical CSS inliner."""

from .base import AssetContent, BaseAssetSet
from .memory import MemoryAssetSet
from .directory import DirectoryAssetSet

# Exported classes
__all__ = [
    'AssetContent',
    'BaseAssetSet',
    'MemoryAssetSet',
    'DirectoryAssetSet',
]
