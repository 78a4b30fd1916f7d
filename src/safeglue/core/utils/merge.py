"""Canonical deep merge utilities.

Used by the config layers to combine bundled defaults, project overlays and
environment overrides.

Array merging follows override semantics:
  - Default: replace array entirely
  - Prefix with "+": append to existing array
  - Prefix with "=": explicit replace (same as default)
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Example:
        >>> deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                result[key] = merge_arrays(result[key], value)
            else:
                result[key] = value
        else:
            result[key] = _strip_marker(value) if isinstance(value, list) else value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge arrays with override semantics.

    A leading ``"+"`` appends the remaining override items to ``base``; a
    leading ``"="`` (or no marker) replaces ``base``.
    """
    if override and override[0] == "+":
        return list(base) + list(override[1:])
    return _strip_marker(override)


def _strip_marker(items: List[Any]) -> List[Any]:
    if items and items[0] in ("+", "="):
        return list(items[1:])
    return list(items)


__all__ = ["deep_merge", "merge_arrays"]
