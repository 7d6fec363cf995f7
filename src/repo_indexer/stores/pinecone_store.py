"""Pinecone implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pinecone import Pinecone, ServerlessSpec

from repo_indexer.config import settings
from repo_indexer.models import IndexEntry, IndexStatus, ServerlessPlacement
from repo_indexer.stores.base import VectorStoreBase

logger = logging.getLogger(__name__)


def _is_ready(status: Any) -> bool:
    """Read ``ready`` from a describe-index status (dict or model object)."""
    if status is None:
        return False
    if isinstance(status, dict):
        return bool(status.get("ready", False))
    return bool(getattr(status, "ready", False))


class PineconeVectorStore(VectorStoreBase):
    """Pinecone-backed vector store.

    Parameters
    ----------
    api_key:
        Pinecone API key. Defaults to ``settings.pinecone_api_key``.
    client:
        Pre-built ``Pinecone`` client; mostly useful in tests.
    """

    def __init__(
        self,
        *,
        api_key: str = settings.pinecone_api_key,
        client: Any = None,
    ) -> None:
        self._client = client if client is not None else Pinecone(api_key=api_key)
        self._indexes: dict[str, Any] = {}

    # -- VectorStoreBase overrides --------------------------------------------

    def list_index_names(self) -> set[str]:
        indexes = self._client.list_indexes()
        names = getattr(indexes, "names", None)
        if callable(names):
            return set(names())
        return {idx.name for idx in indexes}

    def create_index(
        self,
        name: str,
        *,
        dimension: int,
        metric: str = "cosine",
        placement: ServerlessPlacement | None = None,
    ) -> None:
        placement = placement or ServerlessPlacement()
        logger.info(
            "Creating Pinecone index '%s' (dim=%d, metric=%s, %s/%s)",
            name, dimension, metric, placement.cloud, placement.region,
        )
        self._client.create_index(
            name=name,
            dimension=dimension,
            metric=metric,
            spec=ServerlessSpec(cloud=placement.cloud, region=placement.region),
        )

    def describe_index_status(self, name: str) -> IndexStatus:
        description = self._client.describe_index(name)
        return IndexStatus(name=name, ready=_is_ready(getattr(description, "status", None)))

    def upsert(self, index_name: str, entries: Sequence[IndexEntry]) -> int:
        if not entries:
            return 0
        index = self._index(index_name)
        resp = index.upsert(vectors=[e.to_record() for e in entries])
        count = getattr(resp, "upserted_count", None)
        return count if isinstance(count, int) else len(entries)

    # -- internal -------------------------------------------------------------

    def _index(self, name: str) -> Any:
        if name not in self._indexes:
            self._indexes[name] = self._client.Index(name)
        return self._indexes[name]
