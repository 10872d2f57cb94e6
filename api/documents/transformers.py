"""
Response transformers for documents and their chunks.
"""

from __future__ import annotations

from typing import Any

from transformer import Context, Transformer


class ChunkTransformer(Transformer):
    # Chunk rows pass straight through; only these columns may leave the API.
    available_selects = ("id", "chunk_index", "text", "has_embedding", "embedding_model")

    def transform(self, context: Context, chunk: dict[str, Any]) -> dict[str, Any]:
        return {
            "columns": self.merge(chunk),
            "has_embedding": bool(chunk.get("has_embedding")),
        }


class DocumentTransformer(Transformer):
    available_includes = ("chunks", "stats", "owner")

    def transform(self, context: Context, document: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": int(document["id"]),
            "filename": str(document["filename"]),
            "content_type": self.when_not_none(document.get("content_type")),
            "size_bytes": int(document.get("size_bytes") or 0),
            "created_at": document.get("created_at"),
        }

    def include_chunks(self, context: Context, document: dict[str, Any]) -> list[dict[str, Any]]:
        return ChunkTransformer().process_collection(Context(), document.get("chunks") or [])

    def include_stats(self, context: Context, document: dict[str, Any]) -> dict[str, Any]:
        chunk_count = int(document.get("chunk_count") or 0)
        embedded = int(document.get("embedded_chunk_count") or 0)
        return {
            "chunk_count": chunk_count,
            "embedded_chunk_count": embedded,
            "embedding_progress": round(embedded / chunk_count, 4) if chunk_count else 0.0,
        }

    def include_owner(self, context: Context, document: dict[str, Any]) -> dict[str, Any] | None:
        owner = document.get("owner")
        if owner is None:
            return None
        return {"id": int(owner["id"]), "email": str(owner["email"])}
