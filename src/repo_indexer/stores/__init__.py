"""
Vector stores — index lifecycle and upsert behind one interface.

Public surface
--------------
- :class:`VectorStoreBase` — abstract backend.
- :class:`PineconeVectorStore` — default Pinecone serverless backend.
- :class:`ChromaVectorStore` — Chroma backend for local runs.
- :func:`get_vector_store` — build the backend named by ``settings.vector_db_type``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from repo_indexer.stores.base import VectorStoreBase

if TYPE_CHECKING:
    from repo_indexer.config import Settings

__all__ = [
    "ChromaVectorStore",
    "PineconeVectorStore",
    "VectorStoreBase",
    "get_vector_store",
]


def get_vector_store(settings: Settings) -> VectorStoreBase:
    """Return the backend selected by *settings*."""
    if settings.vector_db_type == "pinecone":
        from repo_indexer.stores.pinecone_store import PineconeVectorStore

        return PineconeVectorStore(api_key=settings.pinecone_api_key)
    if settings.vector_db_type == "chroma":
        from repo_indexer.stores.chroma_store import ChromaVectorStore

        return ChromaVectorStore(host=settings.chroma_host, port=settings.chroma_port)
    raise ValueError(
        f"Unsupported vector_db_type={settings.vector_db_type!r}. "
        "Expected 'pinecone' or 'chroma'."
    )


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import backends to avoid pulling in their SDKs at import time."""
    if name == "PineconeVectorStore":
        from repo_indexer.stores.pinecone_store import PineconeVectorStore

        return PineconeVectorStore
    if name == "ChromaVectorStore":
        from repo_indexer.stores.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
