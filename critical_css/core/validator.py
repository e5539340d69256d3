"""Options schema validation.

The schema is closed: every top-level key must be one of ``OPTION_TYPES``,
and nested ``target`` and ``ignore`` records only accept their own keys.
Each check returns a list of problems so that a single
:class:`InvalidConfigurationError` can report all of them at once.
"""

from typing import Any, List, Mapping

OPTION_TYPES = {
    'base': 'string',
    'src': 'string',
    'dest': 'string',
    'inline': 'boolean',
    'extract': 'boolean',
    'width': 'number',
    'height': 'number',
    'dimensions': 'dimensions',
    'target': 'target',
    'ignore': 'ignore',
    'asset_paths': 'string list',
    'penthouse': 'object',
}

# Spelling used by the engine and by JavaScript-style configuration files
OPTION_ALIASES = {
    'assetPaths': 'asset_paths',
}

TARGET_KEYS = ('css', 'html', 'uncritical')
IGNORE_KEYS = ('atrule', 'rule', 'decl')
VIEWPORT_KEYS = ('width', 'height')


def is_number(value: Any) -> bool:
    """Check for an int or float that is not a bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    """Check for a list or tuple (strings are not sequences here)."""
    return isinstance(value, (list, tuple))


def validate_string(path: str, value: Any) -> List[str]:
    if not isinstance(value, str):
        return [f"{path} should be a string"]
    return []


def validate_boolean(path: str, value: Any) -> List[str]:
    if not isinstance(value, bool):
        return [f"{path} should be a boolean"]
    return []


def validate_number(path: str, value: Any) -> List[str]:
    if not is_number(value):
        return [f"{path} should be a number"]
    return []


def validate_object(path: str, value: Any) -> List[str]:
    if not isinstance(value, Mapping):
        return [f"{path} should be an object"]
    return []


def validate_string_list(path: str, value: Any) -> List[str]:
    """Validate a sequence of strings."""
    if not is_sequence(value):
        return [f"{path} should be an array"]
    errors = []
    for index, item in enumerate(value):
        errors.extend(validate_string(f"{path}[{index}]", item))
    return errors


def validate_dimensions(path: str, value: Any) -> List[str]:
    """Validate a sequence of ``{width, height}`` viewport records."""
    if not is_sequence(value):
        return [f"{path} should be an array"]

    errors = []
    for index, item in enumerate(value):
        item_path = f"{path}[{index}]"
        if not isinstance(item, Mapping):
            errors.append(f"{item_path} should be an object")
            continue
        for key in item:
            if key not in VIEWPORT_KEYS:
                errors.append(f"{item_path} has an unknown property '{key}'")
        for key in VIEWPORT_KEYS:
            if key not in item:
                errors.append(f"{item_path} misses the required property '{key}'")
            else:
                errors.extend(validate_number(f"{item_path}.{key}", item[key]))
    return errors


def validate_target(path: str, value: Any) -> List[str]:
    """Validate a target: a filename or a ``{css, html, uncritical}`` record."""
    if isinstance(value, str):
        return []
    if not isinstance(value, Mapping):
        return [f"{path} should be a string or an object"]

    errors = []
    for key, item in value.items():
        if key not in TARGET_KEYS:
            errors.append(f"{path} has an unknown property '{key}'")
        else:
            errors.extend(validate_string(f"{path}.{key}", item))
    return errors


def validate_ignore(path: str, value: Any) -> List[str]:
    """Validate ignore rules. Only the container shapes are checked."""
    if not isinstance(value, Mapping):
        return [f"{path} should be an object"]

    errors = []
    for key, item in value.items():
        if key not in IGNORE_KEYS:
            errors.append(f"{path} has an unknown property '{key}'")
        elif key in ('atrule', 'rule') and not is_sequence(item):
            errors.append(f"{path}.{key} should be an array")
    return errors


VALIDATORS = {
    'string': validate_string,
    'boolean': validate_boolean,
    'number': validate_number,
    'object': validate_object,
    'string list': validate_string_list,
    'dimensions': validate_dimensions,
    'target': validate_target,
    'ignore': validate_ignore,
}


def normalize_keys(options: Mapping[str, Any]) -> List[tuple]:
    """Map aliased option names onto their canonical names.

    Returns:
        ``(canonical_name, given_name, value)`` triples in the given order
    """
    return [
        (OPTION_ALIASES.get(name, name), name, value)
        for name, value in options.items()
    ]


def validate_options(options: Any) -> List[str]:
    """Validate user options against the closed schema.

    Args:
        options: User supplied options

    Returns:
        List of problems, empty when the options are valid
    """
    if not isinstance(options, Mapping):
        return ["options should be an object"]

    errors = []
    seen = {}
    for canonical, given, value in normalize_keys(options):
        path = f"options.{given}"
        if not isinstance(given, str) or canonical not in OPTION_TYPES:
            errors.append(f"options has an unknown property '{given}'")
            continue
        if canonical in seen:
            errors.append(f"{path} duplicates options.{seen[canonical]}")
            continue
        seen[canonical] = given
        errors.extend(VALIDATORS[OPTION_TYPES[canonical]](path, value))
    return errors


__all__ = [
    'OPTION_TYPES',
    'OPTION_ALIASES',
    'is_number',
    'is_sequence',
    'normalize_keys',
    'validate_options',
    'validate_dimensions',
    'validate_target',
    'validate_ignore',
]
