"""
Request context for transformers.

A context carries the include and select paths a caller asked for. Paths are
dot-separated (`owner.email`). The HTTP layer builds one per request from
query parameters (see `transformer/dependencies.py`).
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, field_validator


def parse_paths(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """
    Normalize `include`/`select` input into a tuple of non-empty paths.

    Accepts a comma-separated string, an iterable of such strings, or None.
    Order is preserved and duplicates are kept.
    """
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = [raw]

    paths: list[str] = []
    for value in raw:
        for part in str(value).split(","):
            part = part.strip().strip(".")
            if part:
                paths.append(part)
    return tuple(paths)


class Context(BaseModel):
    model_config = ConfigDict(frozen=True)

    includes: tuple[str, ...] = ()
    selects: tuple[str, ...] = ()

    @field_validator("includes", "selects", mode="before")
    @classmethod
    def split_paths(cls, value):
        return parse_paths(value)

    def has_include(self, path: str) -> bool:
        return path in self.includes

    def has_select(self, path: str) -> bool:
        return path in self.selects
