"""HTML discovery over the asset set."""

from typing import List

from ..assets.base import BaseAssetSet
from ..utils.path import is_html_asset


def discover_html_files(asset_set: BaseAssetSet) -> List[str]:
    """Find the HTML outputs to process.

    Args:
        asset_set: Build output

    Returns:
        Names ending in ``.html``, in the asset set's enumeration order.
        Empty when there is nothing to process.
    """
    return [name for name in asset_set.filenames() if is_html_asset(name)]


__all__ = ['discover_html_files']
