"""
FastAPI glue for transformers.

- `get_context`: builds a `Context` from `?include=` / `?select=`
- `register_exception_handlers`: maps transformer errors to HTTP responses
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from .context import Context
from .errors import NotAllowedError, TransformerConfigError

logger = logging.getLogger(__name__)


async def get_context(
    include: list[str] = Query(default=[], description="Comma-separated include paths."),
    select: list[str] = Query(default=[], description="Comma-separated select paths."),
) -> Context:
    return Context(includes=include, selects=select)


async def _not_allowed_handler(request: Request, exc: NotAllowedError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "kind": exc.kind, "path": exc.path},
    )


async def _config_error_handler(request: Request, exc: TransformerConfigError) -> JSONResponse:
    # Broken transformer class: log the details, keep them out of the response.
    logger.error("transformer_misconfigured path=%s error=%s", request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotAllowedError, _not_allowed_handler)
    app.add_exception_handler(TransformerConfigError, _config_error_handler)
