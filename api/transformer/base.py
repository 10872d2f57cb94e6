"""
Base transformer.

A concrete transformer defines:
- `transform(context, data)`: the base fields for one subject
- `include_<path>(context, data)`: one handler per optional include

and declares which includes/selects callers may ask for. `process` runs the
whole pipeline for one subject:

1) transform + normalize (drop MISSING, splice MergeValue)
2) compute requested includes and nest them by dot-path
3) keep only the selected paths
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from .conditionally import ConditionallyMixin
from .context import Context
from .errors import (
    IncludeNotAllowedError,
    MissingIncludeHandlerError,
    MissingTransformHookError,
    SelectNotAllowedError,
)
from .paths import INCLUDE_PREFIX, filter_paths, handler_name, is_allowed, undot
from .values import MergeValue, MissingValue

logger = logging.getLogger(__name__)

IncludeHandler = Callable[..., Any]


def include_handler(path: str) -> Callable[[IncludeHandler], IncludeHandler]:
    """
    Register a method as the handler for `path`, whatever the method is called.

    Only needed when the derived `include_...` name does not fit.
    """

    def decorator(func: IncludeHandler) -> IncludeHandler:
        func.__include_path__ = path
        return func

    return decorator


class Transformer(ConditionallyMixin):
    wrapper: str | None = None
    available_includes: Sequence[str] = ()
    default_includes: Sequence[str] = ()
    available_selects: Sequence[str] = ()
    default_selects: Sequence[str] = ()

    # handler name -> attribute name, built once per class.
    _include_handlers: dict[str, str] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        handlers: dict[str, str] = {}
        registered_paths: dict[str, str] = {}
        # Walk base classes first so subclasses override by attribute or by handler name.
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                func = attr.__func__ if isinstance(attr, (staticmethod, classmethod)) else attr
                if not callable(func):
                    continue

                path = getattr(attr, "__include_path__", None) or getattr(func, "__include_path__", None)
                if path is None:
                    # An undecorated override keeps the path its parent registered.
                    path = registered_paths.get(name)

                if path is not None:
                    registered_paths[name] = path
                    key = handler_name(path)
                elif name.startswith(INCLUDE_PREFIX):
                    key = name
                else:
                    continue

                for stale in [k for k, v in handlers.items() if v == name and k != key]:
                    del handlers[stale]
                handlers[key] = name

        cls._include_handlers = handlers

    def __init__(self, *, wrapper: str | None = None) -> None:
        self.wrapper = wrapper if wrapper is not None else type(self).wrapper
        self.available_includes = list(type(self).available_includes)
        self.default_includes = list(type(self).default_includes)
        self.available_selects = list(type(self).available_selects)
        self.default_selects = list(type(self).default_selects)

    def set_available_includes(self, includes: Iterable[str]) -> Transformer:
        self.available_includes = list(includes)
        return self

    def set_default_includes(self, includes: Iterable[str]) -> Transformer:
        self.default_includes = list(includes)
        return self

    def set_available_selects(self, selects: Iterable[str]) -> Transformer:
        self.available_selects = list(selects)
        return self

    def set_default_selects(self, selects: Iterable[str]) -> Transformer:
        self.default_selects = list(selects)
        return self

    def set_wrapper(self, wrapper: str | None) -> Transformer:
        self.wrapper = wrapper
        return self

    def get_wrapper(self) -> str | None:
        return self.wrapper

    @property
    def name(self) -> str:
        return type(self).__qualname__

    def process(self, context: Context, data: Any) -> Any:
        result = self.process_transform(context, data)
        if not isinstance(result, Mapping):
            return result

        included = self.process_includes(context, self.resolve_includes(context.includes), data)
        transformed = {**result, **included}

        selects = self.resolve_selects(context.selects)
        if not selects:
            return transformed

        return filter_paths(transformed, selects)

    def process_collection(self, context: Context, items: Iterable[Any]) -> list[Any]:
        return [self.process(context, item) for item in items]

    def wrap(self, data: Any) -> Any:
        if self.wrapper is None:
            return data
        return {self.wrapper: data}

    def transform_response(self, context: Context, data: Any) -> Any:
        """
        Process one subject (or a list/tuple of subjects) and wrap the result.
        """
        if isinstance(data, (list, tuple)):
            return self.wrap(self.process_collection(context, data))
        return self.wrap(self.process(context, data))

    def resolve_selects(self, selects: Sequence[str]) -> list[str]:
        if not selects:
            return list(self.default_selects)

        if not self.available_selects:
            return list(selects)

        for select in selects:
            if not is_allowed(select, self.available_selects):
                raise SelectNotAllowedError(select)

        logger.debug("selects_resolved transformer=%s selects=%s", self.name, selects)
        return list(selects)

    def resolve_includes(self, includes: Sequence[str]) -> list[str]:
        if not includes:
            return list(self.default_includes)

        if not self.available_includes:
            return list(includes)

        # Includes run code, so they need an exact match (no parent relaxation).
        for include in includes:
            if include not in self.available_includes:
                raise IncludeNotAllowedError(include)

        logger.debug("includes_resolved transformer=%s includes=%s", self.name, includes)
        return list(includes)

    def process_includes(self, context: Context, includes: Sequence[str], data: Any) -> dict[str, Any]:
        included: dict[str, Any] = {}
        for include in includes:
            handler = self.handler_for(include)
            included[include] = handler(context, data)
        return undot(included)

    def handler_for(self, path: str) -> IncludeHandler:
        method = handler_name(path)
        attribute = self._include_handlers.get(method)
        if attribute is None:
            raise MissingIncludeHandlerError(path, handler=method, transformer=self.name)
        return getattr(self, attribute)

    def process_transform(self, context: Context, data: Any) -> Any:
        hook = getattr(self, "transform", None)
        if not callable(hook):
            raise MissingTransformHookError(self.name)

        transformed = hook(context, data)
        if hasattr(transformed, "model_dump"):
            transformed = transformed.model_dump()
        if not isinstance(transformed, Mapping):
            return transformed

        normalized = self.normalize(transformed)
        if self.available_selects:
            normalized = filter_paths(normalized, self.available_selects)
        return normalized

    def normalize(self, transformed: Mapping[str, Any]) -> dict[str, Any]:
        normalized: dict[str, Any] = {}
        for key, value in transformed.items():
            if isinstance(value, MissingValue):
                continue
            if isinstance(value, MergeValue):
                normalized.update(self.normalize(value.data))
                continue
            normalized[key] = value
        return normalized
