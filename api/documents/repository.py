"""
Document persistence (raw SQL).

Read-only queries backing the documents endpoints. Relations (chunks, owners)
are fetched in bulk for a page of documents, never one query per row.
"""

from __future__ import annotations

from typing import Any

from core import db

CHUNK_PREVIEW_CHARS = 200


async def list_documents(*, limit: int = 100, offset: int = 0) -> list[dict[str, Any]]:
    """
    List active (not soft-deleted) documents, newest first, with chunk stats.
    """
    return await db.fetch_all(
        """
        SELECT
          d.id,
          d.user_id,
          d.filename,
          d.content_type,
          d.size_bytes,
          d.created_at,
          COALESCE(stats.chunk_count, 0) AS chunk_count,
          COALESCE(stats.embedded_chunk_count, 0) AS embedded_chunk_count
        FROM documents d
        LEFT JOIN LATERAL (
          SELECT
            count(*) AS chunk_count,
            count(*) FILTER (WHERE c.embedding IS NOT NULL) AS embedded_chunk_count
          FROM chunks c
          WHERE c.document_id = d.id
        ) stats ON true
        WHERE d.deleted_at IS NULL
        ORDER BY d.created_at DESC, d.id DESC
        LIMIT $1
        OFFSET $2
        """,
        limit,
        offset,
    )


async def get_document(document_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT
          d.id,
          d.user_id,
          d.filename,
          d.content_type,
          d.size_bytes,
          d.created_at,
          COALESCE(stats.chunk_count, 0) AS chunk_count,
          COALESCE(stats.embedded_chunk_count, 0) AS embedded_chunk_count
        FROM documents d
        LEFT JOIN LATERAL (
          SELECT
            count(*) AS chunk_count,
            count(*) FILTER (WHERE c.embedding IS NOT NULL) AS embedded_chunk_count
          FROM chunks c
          WHERE c.document_id = d.id
        ) stats ON true
        WHERE d.id = $1
          AND d.deleted_at IS NULL
        """,
        document_id,
    )


async def list_chunks(document_ids: list[int], *, text_chars: int = CHUNK_PREVIEW_CHARS) -> list[dict[str, Any]]:
    """
    Chunks for the given documents, ordered by document then position.
    """
    if not document_ids:
        return []
    return await db.fetch_all(
        """
        SELECT
          c.id,
          c.document_id,
          c.chunk_index,
          regexp_replace(left(c.text, $2), E'\\s+', ' ', 'g') AS text,
          c.embedding_model,
          (c.embedding IS NOT NULL) AS has_embedding
        FROM chunks c
        WHERE c.document_id = ANY($1::bigint[])
        ORDER BY c.document_id, c.chunk_index
        """,
        document_ids,
        text_chars,
    )


async def list_users(user_ids: list[int]) -> list[dict[str, Any]]:
    if not user_ids:
        return []
    return await db.fetch_all(
        """
        SELECT id, email, is_active, created_at
        FROM users
        WHERE id = ANY($1::bigint[])
        """,
        user_ids,
    )
