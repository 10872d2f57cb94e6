"""
Sentinel values returned from `transform` hooks.

- `MISSING` (a `MissingValue`): drop this key from the output
- `MergeValue(mapping)`: splice the mapping's keys into the parent instead
  of nesting them under the original key

Anything else is a plain value and passes through untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


class MissingValue:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = MissingValue()


@dataclass(frozen=True)
class MergeValue:
    data: Mapping[str, Any]

    def __post_init__(self) -> None:
        data = self.data
        # Pydantic models are accepted as a convenience for response schemas.
        if hasattr(data, "model_dump"):
            data = data.model_dump()
        if not isinstance(data, Mapping):
            raise TypeError(f"MergeValue expects a mapping, got {type(data).__name__}.")
        object.__setattr__(self, "data", dict(data))


def resolve_value(value: Any) -> Any:
    """
    Call lazily-provided values (lambdas, functions); return anything else as-is.
    """
    if callable(value) and not isinstance(value, type):
        return value()
    return value
