"""
Documents service.

Loads document rows plus whatever relations the resolved includes need, so the
(synchronous) transformers never touch the database.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any

from fastapi import HTTPException

from . import repository

logger = logging.getLogger(__name__)


def _wants(includes: list[str], relation: str) -> bool:
    prefix = f"{relation}."
    return any(include == relation or include.startswith(prefix) for include in includes)


async def _attach_relations(rows: list[dict[str, Any]], includes: list[str]) -> list[dict[str, Any]]:
    if not rows:
        return rows

    if _wants(includes, "chunks"):
        chunks_by_document: dict[int, list[dict[str, Any]]] = defaultdict(list)
        for chunk in await repository.list_chunks([int(row["id"]) for row in rows]):
            chunks_by_document[int(chunk["document_id"])].append(chunk)
        for row in rows:
            row["chunks"] = chunks_by_document.get(int(row["id"]), [])

    if _wants(includes, "owner"):
        user_ids = sorted({int(row["user_id"]) for row in rows if row.get("user_id") is not None})
        users = {int(user["id"]): user for user in await repository.list_users(user_ids)}
        for row in rows:
            user_id = row.get("user_id")
            row["owner"] = users.get(int(user_id)) if user_id is not None else None

    return rows


async def list_documents(*, limit: int, offset: int, includes: list[str]) -> list[dict[str, Any]]:
    rows = await repository.list_documents(limit=limit, offset=offset)
    logger.debug("documents_loaded count=%s includes=%s", len(rows), includes)
    return await _attach_relations(rows, includes)


async def get_document(document_id: int, *, includes: list[str]) -> dict[str, Any]:
    row = await repository.get_document(document_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Document not found.")
    rows = await _attach_relations([row], includes)
    return rows[0]
