"""
Deep merge for token trees.

Lists are merged as mappings keyed by position (``"0"``, ``"1"``, ...), so
merging two lists overwrites positionally rather than concatenating and the
result holds a mapping. Existing theme.json output depends on this.
"""

from __future__ import annotations

import copy
from typing import Any


def _as_mapping(value: Any) -> dict[str, Any] | None:
    if isinstance(value, dict):
        return value
    if isinstance(value, list):
        return {str(index): item for index, item in enumerate(value)}
    return None


def deep_merge(target: Any, source: Any) -> Any:
    """Merge ``source`` into ``target`` and return the result.

    Neither input is mutated. When either side is not a container the
    source wins outright, except that a ``None`` source leaves the target.
    """
    if source is None:
        return copy.deepcopy(target)

    target_map = _as_mapping(target)
    source_map = _as_mapping(source)
    if target_map is None or source_map is None:
        return copy.deepcopy(source)

    result = copy.deepcopy(target_map)
    for key, value in source_map.items():
        if key in result and _as_mapping(result[key]) is not None and _as_mapping(value) is not None:
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def merge_into_theme(base: dict[str, Any], section: str, data: dict[str, Any]) -> None:
    """Merge ``data`` into ``base`` in place.

    With an empty ``section`` each top-level key of ``data`` is merged at
    the root of ``base``; otherwise ``data`` is merged under ``base[section]``.
    """
    if section == "":
        for key, value in data.items():
            if key in base and base[key]:
                base[key] = deep_merge(base[key], value)
            else:
                base[key] = copy.deepcopy(value)
        return

    if section in base and base[section]:
        base[section] = deep_merge(base[section], data)
    else:
        base[section] = copy.deepcopy(data)
