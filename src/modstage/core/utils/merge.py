"""Deep merge utilities for layered configuration.

Merge rules:
- Dictionaries merge recursively
- Lists are replaced by the override, unless the override's first element
  is ``"+"`` (append) or ``"="`` (explicit replace)
- Any other value is replaced
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Example:
        >>> deep_merge({"vcs": {"a": 1}}, {"vcs": {"b": 2}})
        {'vcs': {'a': 1, 'b': 2}}
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
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge two lists using the ``+``/``=`` prefix convention.

    Example:
        >>> merge_arrays([1, 2], [3])
        [3]
        >>> merge_arrays([1, 2], ["+", 3])
        [1, 2, 3]
    """
    if not override:
        return base
    first = override[0]
    if isinstance(first, str):
        if first == "+":
            return [*base, *override[1:]]
        if first == "=":
            return list(override[1:])
    return list(override)


__all__ = ["deep_merge", "merge_arrays"]
