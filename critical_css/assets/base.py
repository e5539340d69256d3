"""Base asset set class for the critical CSS inliner."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Tuple, Union

import chardet

from ..utils.config import DEFAULT_ENCODING, LOGGER_NAME
from ..utils.error import AssetWriteError

AssetContent = Union[str, bytes]


class BaseAssetSet(ABC):
    """Mapping of output filenames to content, owned by the host build.

    Subclasses provide storage; this class tracks which source file wrote
    each asset during the current post-build phase. Writes always replace
    the previous content. When two different source files write the same
    asset the last writer wins, unless the set was built with
    ``strict=True``, in which case :class:`AssetWriteError` is raised.
    """

    def __init__(self, strict: bool = False):
        """Initialize base asset set.

        Args:
            strict: Raise on write collisions between source files
        """
        self.logger = logging.getLogger(f"{LOGGER_NAME}.{self.__class__.__name__}")
        self.strict = strict
        self._writers: Dict[str, Optional[str]] = {}

    @abstractmethod
    def filenames(self) -> List[str]:
        """Asset names in enumeration (insertion) order."""
        pass

    @abstractmethod
    def read(self, name: str) -> AssetContent:
        """Get the content of an asset.

        Raises:
            KeyError: If no asset has this name
        """
        pass

    @abstractmethod
    def _store(self, name: str, content: AssetContent) -> None:
        """Put content in storage, replacing any previous content."""
        pass

    def replace(self, name: str, content: AssetContent, owner: Optional[str] = None) -> bool:
        """Write or overwrite an asset.

        Args:
            name: Asset name
            content: New content, replacing the old content entirely
            owner: Source file on whose behalf the write happens

        Returns:
            True if the asset existed before, False if it was created

        Raises:
            AssetWriteError: On a collision when the set is strict
        """
        if name in self._writers:
            previous = self._writers[name]
            if owner is not None and previous is not None and previous != owner:
                if self.strict:
                    self.log_error(f"Refusing to overwrite {name} written by {previous}")
                    raise AssetWriteError(name, owner, previous)
                self.log_info(f"{name} written by {previous} is overwritten by {owner}")

        existed = name in self
        self._store(name, content)
        self._writers[name] = owner
        return existed

    def read_text(self, name: str, encoding: str = DEFAULT_ENCODING) -> str:
        """Get the content of an asset as text.

        Bytes are decoded with ``encoding``, falling back to the encoding
        chardet detects.
        """
        content = self.read(name)
        if isinstance(content, str):
            return content
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            detected = chardet.detect(content).get('encoding') or encoding
            self.log_debug(f"Decoding {name} as {detected}")
            return content.decode(detected, errors='replace')

    def written(self) -> List[str]:
        """Names written since the set was created, in first-write order."""
        return list(self._writers)

    def items(self) -> List[Tuple[str, AssetContent]]:
        return [(name, self.read(name)) for name in self.filenames()]

    def __contains__(self, name: object) -> bool:
        return name in self.filenames()

    def __iter__(self) -> Iterator[str]:
        return iter(self.filenames())

    def __len__(self) -> int:
        return len(self.filenames())

    def log_error(self, message: str, error: Optional[Exception] = None) -> None:
        if error:
            self.logger.error(f"{message}: {error}")
        else:
            self.logger.error(message)

    def log_info(self, message: str) -> None:
        self.logger.info(message)

    def log_debug(self, message: str) -> None:
        self.logger.debug(message)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self._writers.clear()


# Exported class
__all__ = ['BaseAssetSet', 'AssetContent']
