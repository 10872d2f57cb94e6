"""
Response transformers.

Shape stored rows into API responses: optional includes, field selection,
omission/merge sentinels and top-level wrapping. Nothing in here does I/O;
routers load data first and hand it to a transformer.
"""

from .base import Transformer, include_handler
from .context import Context, parse_paths
from .errors import (
    IncludeNotAllowedError,
    MissingIncludeHandlerError,
    MissingTransformHookError,
    NotAllowedError,
    SelectNotAllowedError,
    TransformerConfigError,
    TransformerError,
)
from .values import MISSING, MergeValue, MissingValue

__all__ = [
    "Context",
    "IncludeNotAllowedError",
    "MISSING",
    "MergeValue",
    "MissingIncludeHandlerError",
    "MissingTransformHookError",
    "MissingValue",
    "NotAllowedError",
    "SelectNotAllowedError",
    "Transformer",
    "TransformerConfigError",
    "TransformerError",
    "include_handler",
    "parse_paths",
]
