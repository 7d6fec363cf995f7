"""Chroma implementation of the vector-store abstraction.

Chroma has no serverless placement and creates collections synchronously,
so a collection counts as a ready index as soon as it exists.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from repo_indexer.config import settings
from repo_indexer.models import IndexEntry, IndexStatus, ServerlessPlacement
from repo_indexer.stores.base import VectorStoreBase

logger = logging.getLogger(__name__)

# Pinecone metric names → Chroma ``hnsw:space`` values.
_SPACE_MAP = {
    "cosine": "cosine",
    "euclidean": "l2",
    "dotproduct": "ip",
}


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    client:
        Pre-built Chroma client; when omitted an ``HttpClient`` is created.
    """

    def __init__(
        self,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        client: Any = None,
    ) -> None:
        if client is None:
            import chromadb

            client = chromadb.HttpClient(host=host, port=port)
        self._client = client
        self._collections: dict[str, Any] = {}

    # -- VectorStoreBase overrides --------------------------------------------

    def list_index_names(self) -> set[str]:
        # chromadb>=0.6 returns names, older releases return Collection objects
        return {getattr(c, "name", c) for c in self._client.list_collections()}

    def create_index(
        self,
        name: str,
        *,
        dimension: int,
        metric: str = "cosine",
        placement: ServerlessPlacement | None = None,
    ) -> None:
        space = _SPACE_MAP.get(metric)
        if space is None:
            raise ValueError(f"Unsupported metric for Chroma: {metric!r}")
        logger.info("Creating Chroma collection '%s' (dim=%d, space=%s)", name, dimension, space)
        self._collections[name] = self._client.get_or_create_collection(
            name=name,
            metadata={"hnsw:space": space, "dimension": dimension},
        )

    def describe_index_status(self, name: str) -> IndexStatus:
        return IndexStatus(name=name, ready=name in self.list_index_names())

    def upsert(self, index_name: str, entries: Sequence[IndexEntry]) -> int:
        if not entries:
            return 0
        collection = self._collection(index_name)
        collection.upsert(
            ids=[e.id for e in entries],
            embeddings=[e.values for e in entries],
            documents=[e.metadata.text for e in entries],
            metadatas=[e.metadata.model_dump() for e in entries],
        )
        return len(entries)

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False

    # -- internal -------------------------------------------------------------

    def _collection(self, name: str) -> Any:
        if name not in self._collections:
            self._collections[name] = self._client.get_collection(name=name)
        return self._collections[name]
