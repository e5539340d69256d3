"""In-memory asset set."""

from typing import Dict, List, Mapping, Optional

from .base import AssetContent, BaseAssetSet


class MemoryAssetSet(BaseAssetSet):
    """Asset set held in a dict, for hosts that keep their output in memory."""

    def __init__(self, assets: Optional[Mapping[str, AssetContent]] = None, strict: bool = False):
        """Initialize memory asset set.

        Args:
            assets: Initial assets; their order is kept
            strict: Raise on write collisions between source files
        """
        super().__init__(strict=strict)
        self._assets: Dict[str, AssetContent] = dict(assets or {})

    def filenames(self) -> List[str]:
        return list(self._assets)

    def read(self, name: str) -> AssetContent:
        return self._assets[name]

    def _store(self, name: str, content: AssetContent) -> None:
        self._assets[name] = content

    def __contains__(self, name: object) -> bool:
        return name in self._assets

    def __len__(self) -> int:
        return len(self._assets)

    def to_dict(self) -> Dict[str, AssetContent]:
        """Copy of the current assets."""
        return dict(self._assets)


__all__ = ['MemoryAssetSet']
