from typing import Any

UNSET = object()
"""Marker for options that were not given and must not override merged config values."""


def recursive_merge(*dictionaries: dict | None) -> dict:
    """Merge dictionaries left to right; later values win.

    Nested dictionaries are merged key by key instead of being replaced.
    `None` arguments and values that are `UNSET` are skipped.
    """
    result: dict[str, Any] = {}
    for dictionary in dictionaries:
        if dictionary is None:
            continue
        for key, value in dictionary.items():
            if value is UNSET:
                continue
            if isinstance(value, dict) and isinstance(result.get(key), dict):
                result[key] = recursive_merge(result[key], value)
            elif isinstance(value, dict):
                result[key] = recursive_merge(value)
            else:
                result[key] = value
    return result
