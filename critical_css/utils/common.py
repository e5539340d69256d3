"""Common utilities for the critical CSS inliner."""

import copy
import re
from types import MappingProxyType
from typing import Any, Mapping


def freeze(value: Any) -> Any:
    """Copy nested lists and dicts into tuples and read-only mappings.

    Args:
        value: Option value as supplied by the user

    Returns:
        Value that cannot be mutated through any reference the caller holds
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, re.Pattern):
        return value
    return copy.deepcopy(value)


def thaw(value: Any) -> Any:
    """Turn frozen values back into plain lists and dicts.

    Args:
        value: Value produced by :func:`freeze`

    Returns:
        Fresh, mutable copy
    """
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


# Exported functions
__all__ = ['freeze', 'thaw']
