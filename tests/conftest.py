"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Sequence

import pytest
from langchain_core.embeddings import Embeddings

from repo_indexer.models import IndexEntry, IndexStatus, ServerlessPlacement
from repo_indexer.stores.base import VectorStoreBase

DIM = 1536


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── In-memory fakes ─────────────────────────────────────────────────────


class FakeVectorStore(VectorStoreBase):
    """In-memory fake with upsert-by-id semantics and call recording."""

    def __init__(
        self,
        existing: dict[str, bool] | None = None,
        *,
        ready_after: int = 0,
    ) -> None:
        # index name → ready flag
        self.indexes: dict[str, bool] = dict(existing or {})
        self.records: dict[str, dict[str, IndexEntry]] = {}
        self.created: list[tuple[str, int, str, ServerlessPlacement | None]] = []
        self.describe_calls = 0
        self.upsert_calls: list[tuple[str, list[IndexEntry]]] = []
        self.fail_upsert_for: set[str] = set()
        self._ready_after = ready_after

    def list_index_names(self) -> set[str]:
        return set(self.indexes)

    def create_index(
        self,
        name: str,
        *,
        dimension: int,
        metric: str = "cosine",
        placement: ServerlessPlacement | None = None,
    ) -> None:
        self.created.append((name, dimension, metric, placement))
        self.indexes[name] = False

    def describe_index_status(self, name: str) -> IndexStatus:
        self.describe_calls += 1
        if self.describe_calls > self._ready_after:
            self.indexes[name] = True
        return IndexStatus(name=name, ready=self.indexes[name])

    def upsert(self, index_name: str, entries: Sequence[IndexEntry]) -> int:
        self.upsert_calls.append((index_name, list(entries)))
        for entry in entries:
            if entry.id in self.fail_upsert_for:
                raise RuntimeError("vector store unavailable")
        bucket = self.records.setdefault(index_name, {})
        for entry in entries:
            bucket[entry.id] = entry
        return len(entries)


class FakeEmbeddings(Embeddings):
    """Deterministic embedder: vector derived from the text length."""

    def __init__(self, dim: int = DIM) -> None:
        self.dim = dim
        self.calls: list[list[str]] = []
        self.fail_on: set[str] = set()

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        out = []
        for text in texts:
            if any(marker in text for marker in self.fail_on):
                raise RuntimeError("rate limited")
            out.append([float(len(text) % 97)] * self.dim)
        return out

    def embed_query(self, text: str) -> list[float]:
        return self.embed_documents([text])[0]


@pytest.fixture()
def fake_store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture()
def fake_embedder() -> FakeEmbeddings:
    return FakeEmbeddings()
