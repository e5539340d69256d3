"""Path helpers for asset names."""

import os
from pathlib import Path, PurePosixPath
from typing import Union

from .config import HTML_EXTENSION


def is_html_asset(name: str) -> bool:
    """Check if an asset name is an HTML output.

    Args:
        name: Asset name as used by the asset set

    Returns:
        True if the name ends with the HTML extension
    """
    return name.endswith(HTML_EXTENSION)


def to_asset_name(path: Union[str, Path], root: Union[str, Path]) -> str:
    """Turn a file below ``root`` into a relative, forward-slash asset name.

    Args:
        path: File path
        root: Output directory the asset set is rooted at

    Returns:
        Asset name such as ``pages/about.html``
    """
    relative = os.path.relpath(os.fspath(path), os.fspath(root))
    return PurePosixPath(*Path(relative).parts).as_posix()


def asset_path(root: Union[str, Path], name: str) -> Path:
    """Resolve an asset name to its location below ``root``.

    Args:
        root: Output directory
        name: Asset name

    Returns:
        Path of the asset on disk

    Raises:
        ValueError: If the name escapes the output directory
    """
    base = Path(root).resolve()
    resolved = (base / PurePosixPath(name)).resolve()
    if resolved != base and base not in resolved.parents:
        raise ValueError(f"Asset name {name} resolves outside {root}")
    return resolved


# Exported functions
__all__ = ['is_html_asset', 'to_asset_name', 'asset_path']
