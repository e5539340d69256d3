"""Asset set backed by an output directory on disk."""

import os
from pathlib import Path
from typing import Dict, List, Union

import aiofiles

from ..utils.config import DEFAULT_ENCODING
from ..utils.path import asset_path, to_asset_name
from .base import AssetContent, BaseAssetSet


class DirectoryAssetSet(BaseAssetSet):
    """Asset set over a build output directory.

    Content is held in memory between :meth:`load` and :meth:`flush`;
    only assets replaced in between are written back.
    """

    def __init__(self, root: Union[str, Path], strict: bool = False):
        """Initialize directory asset set.

        Args:
            root: Output directory
            strict: Raise on write collisions between source files
        """
        super().__init__(strict=strict)
        self.root = Path(root)
        self._assets: Dict[str, AssetContent] = {}
        self._dirty: Dict[str, None] = {}

    @classmethod
    async def from_directory(cls, root: Union[str, Path], strict: bool = False) -> 'DirectoryAssetSet':
        asset_set = cls(root, strict=strict)
        await asset_set.load()
        return asset_set

    async def load(self) -> int:
        """Read every file below the root.

        Returns:
            Number of assets loaded

        Raises:
            FileNotFoundError: If the root is not a directory
        """
        if not self.root.is_dir():
            raise FileNotFoundError(f"Output directory not found: {self.root}")

        self._assets.clear()
        self._dirty.clear()
        for directory, dirnames, files in os.walk(self.root):
            dirnames.sort()
            for filename in sorted(files):
                path = Path(directory) / filename
                async with aiofiles.open(path, 'rb') as f:
                    self._assets[to_asset_name(path, self.root)] = await f.read()

        self.log_debug(f"Loaded {len(self._assets)} assets from {self.root}")
        return len(self._assets)

    async def flush(self) -> List[str]:
        """Write replaced assets back to disk.

        Returns:
            Names of the assets written
        """
        flushed = []
        for name in list(self._dirty):
            content = self._assets[name]
            if isinstance(content, str):
                content = content.encode(DEFAULT_ENCODING)
            path = asset_path(self.root, name)
            path.parent.mkdir(parents=True, exist_ok=True)
            try:
                async with aiofiles.open(path, 'wb') as f:
                    await f.write(content)
            except OSError as e:
                self.log_error(f"Failed to write {path}", e)
                raise
            flushed.append(name)
            del self._dirty[name]

        self.log_debug(f"Flushed {len(flushed)} assets to {self.root}")
        return flushed

    def filenames(self) -> List[str]:
        return list(self._assets)

    def read(self, name: str) -> AssetContent:
        return self._assets[name]

    def _store(self, name: str, content: AssetContent) -> None:
        self._assets[name] = content
        self._dirty[name] = None

    def __contains__(self, name: object) -> bool:
        return name in self._assets

    def __len__(self) -> int:
        return len(self._assets)

    def pending(self) -> List[str]:
        """Names replaced since the last load or flush."""
        return list(self._dirty)


__all__ = ['DirectoryAssetSet']
