"""
Conditional helpers for building `transform` output.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .context import Context
from .values import MISSING, MergeValue, resolve_value


class ConditionallyMixin:
    def when(self, condition: Any, value: Any, default: Any = MISSING) -> Any:
        """
        Return `value` when `condition` is truthy, else `default`.

        Both `value` and `default` may be zero-argument callables; only the
        chosen branch is evaluated. The default drops the key entirely.
        """
        if condition:
            return resolve_value(value)
        return resolve_value(default)

    def when_not_none(self, value: Any, default: Any = MISSING) -> Any:
        return self.when(value is not None, value, default)

    def when_included(self, context: Context, path: str, value: Any, default: Any = MISSING) -> Any:
        """
        Return `value` when `path` is among the includes this request resolves to.

        Default includes count when the caller asked for none.
        """
        return self.when(path in self.resolve_includes(context.includes), value, default)

    def merge(self, value: Mapping[str, Any] | Any) -> MergeValue:
        return MergeValue(resolve_value(value))

    def merge_when(self, condition: Any, value: Mapping[str, Any] | Any) -> MergeValue | Any:
        if condition:
            return MergeValue(resolve_value(value))
        return MISSING
