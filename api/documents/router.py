"""
Documents API endpoints.

Both endpoints accept `include` and `select` query parameters, e.g.
`/documents?include=chunks,stats&select=id,filename,chunks.text`.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from core import settings
from transformer import Context
from transformer.dependencies import get_context

from . import service
from .transformers import DocumentTransformer

router = APIRouter()


def _transformer() -> DocumentTransformer:
    return DocumentTransformer(wrapper=settings.response_wrapper())


@router.get("/documents")
async def list_documents(
    limit: int = Query(100, ge=1),
    offset: int = Query(0, ge=0),
    context: Context = Depends(get_context),
) -> Any:
    transformer = _transformer()
    documents = await service.list_documents(
        limit=min(limit, settings.documents_max_limit()),
        offset=offset,
        includes=transformer.resolve_includes(context.includes),
    )
    return transformer.transform_response(context, documents)


@router.get("/documents/{document_id}")
async def get_document(
    document_id: int,
    context: Context = Depends(get_context),
) -> Any:
    transformer = _transformer()
    document = await service.get_document(
        document_id,
        includes=transformer.resolve_includes(context.includes),
    )
    return transformer.transform_response(context, document)
