"""
Dot-path helpers shared by the policy checks and the select filter.

Paths are dot-separated strings: `owner.email` addresses `{"owner": {"email": ...}}`.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterable, Mapping
from typing import Any

INCLUDE_PREFIX = "include_"

_SEPARATORS = re.compile(r"[-\s]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def is_allowed(path: str | int, allowed: Collection[str]) -> bool:
    """
    True if `path` or any of its parents is in `allowed`.

    `a.b.c` is checked as `a.b.c`, then `a.b`, then `a`.
    """
    candidate = str(path)
    while True:
        if candidate in allowed:
            return True
        parent, sep, _ = candidate.rpartition(".")
        if not sep:
            return False
        candidate = parent


def child_paths(key: str | int, allowed: Iterable[str]) -> list[str]:
    """
    Narrow `allowed` to the paths below `key`, with the `key.` prefix removed.

    List positions are not path-qualified: they inherit `allowed` unchanged.
    """
    if isinstance(key, int) and not isinstance(key, bool):
        return list(allowed)

    prefix = f"{key}."
    return [path[len(prefix):] for path in allowed if path.startswith(prefix) and len(path) > len(prefix)]


def _is_nested(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def filter_paths(data: Mapping[str, Any] | list | tuple, allowed: Collection[str]) -> dict[str, Any] | list:
    """
    Keep only the parts of `data` reachable through `allowed` paths.

    Nested branches that end up empty are dropped rather than returned as `{}`.
    Lists keep their order; dropped elements are removed, not nulled.
    """
    if isinstance(data, Mapping):
        filtered: dict[str, Any] = {}
        for key, value in data.items():
            kept, value = _filter_entry(key, value, allowed)
            if kept:
                filtered[key] = value
        return filtered

    items: list[Any] = []
    for index, value in enumerate(data):
        kept, value = _filter_entry(index, value, allowed)
        if kept:
            items.append(value)
    return items


def _filter_entry(key: str | int, value: Any, allowed: Collection[str]) -> tuple[bool, Any]:
    if _is_nested(value):
        children = child_paths(key, allowed)
        if children:
            value = filter_paths(value, children)
            return bool(value), value

    return is_allowed(key, allowed), value


def undot(items: Mapping[str, Any]) -> dict[str, Any]:
    """
    Expand dot-path keys into nested dicts.

    `{"owner.email": "a@b.c"}` becomes `{"owner": {"email": "a@b.c"}}`.
    When a short path and a longer one collide, the longer one wins.
    """
    result: dict[str, Any] = {}
    for path, value in items.items():
        _set_path(result, path, value)
    return result


def _set_path(target: dict[str, Any], path: str, value: Any) -> None:
    *parents, leaf = path.split(".")

    node = target
    for segment in parents:
        child = node.get(segment)
        if isinstance(child, Mapping):
            child = dict(child)
        else:
            child = {}
        node[segment] = child
        node = child

    existing = node.get(leaf)
    if isinstance(existing, dict):
        # Deeper paths were already expanded here.
        if isinstance(value, Mapping):
            node[leaf] = {**value, **existing}
        return

    node[leaf] = value


def handler_name(path: str) -> str:
    """
    Method name serving an include path: `owner.recentChunks` -> `include_owner_recent_chunks`.
    """
    segments = []
    for segment in path.split("."):
        segment = _SEPARATORS.sub("_", segment.strip())
        segment = _CAMEL_BOUNDARY.sub(r"_\1", segment).lower()
        segments.append(segment)
    return INCLUDE_PREFIX + "_".join(segments)
