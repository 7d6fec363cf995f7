"""Unit tests for the vector-store backends — SDK clients are mocked."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from repo_indexer.config import Settings
from repo_indexer.models import EntryMetadata, IndexEntry, ServerlessPlacement
from repo_indexer.stores import get_vector_store
from repo_indexer.stores.chroma_store import ChromaVectorStore
from repo_indexer.stores.pinecone_store import PineconeVectorStore


def _entry(path: str = "/repo/a.ts") -> IndexEntry:
    return IndexEntry(
        id=path,
        values=[0.1, 0.2, 0.3],
        metadata=EntryMetadata(path=path, text=f"File path: {path}\n\nx"),
    )


# ──────────────────────────────────────────────────────────────────────
# Pinecone
# ──────────────────────────────────────────────────────────────────────


class TestPineconeVectorStore:
    @pytest.fixture()
    def client(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture()
    def store(self, client: MagicMock) -> PineconeVectorStore:
        return PineconeVectorStore(client=client)

    def test_list_index_names_uses_names(self, store, client) -> None:
        client.list_indexes.return_value.names.return_value = ["a", "b"]
        assert store.list_index_names() == {"a", "b"}

    def test_list_index_names_from_models(self, store, client) -> None:
        client.list_indexes.return_value = [SimpleNamespace(name="a"), SimpleNamespace(name="b")]
        assert store.list_index_names() == {"a", "b"}

    def test_create_index_uses_serverless_spec(self, store, client) -> None:
        with patch("repo_indexer.stores.pinecone_store.ServerlessSpec") as spec_cls:
            store.create_index(
                "idx",
                dimension=1536,
                metric="cosine",
                placement=ServerlessPlacement(cloud="gcp", region="europe-west4"),
            )

        spec_cls.assert_called_once_with(cloud="gcp", region="europe-west4")
        client.create_index.assert_called_once_with(
            name="idx",
            dimension=1536,
            metric="cosine",
            spec=spec_cls.return_value,
        )

    def test_create_index_default_placement(self, store, client) -> None:
        with patch("repo_indexer.stores.pinecone_store.ServerlessSpec") as spec_cls:
            store.create_index("idx", dimension=1536)

        spec_cls.assert_called_once_with(cloud="aws", region="us-east-1")

    @pytest.mark.parametrize(
        ("status", "ready"),
        [
            ({"ready": True, "state": "Ready"}, True),
            ({"ready": False, "state": "Initializing"}, False),
            (SimpleNamespace(ready=True), True),
            (None, False),
        ],
    )
    def test_describe_index_status(self, store, client, status, ready) -> None:
        client.describe_index.return_value = SimpleNamespace(status=status)

        result = store.describe_index_status("idx")

        assert result.name == "idx"
        assert result.ready is ready
        client.describe_index.assert_called_once_with("idx")

    def test_upsert_sends_records(self, store, client) -> None:
        index = client.Index.return_value
        index.upsert.return_value = SimpleNamespace(upserted_count=1)
        entry = _entry()

        count = store.upsert("idx", [entry])

        assert count == 1
        client.Index.assert_called_once_with("idx")
        index.upsert.assert_called_once_with(
            vectors=[
                {
                    "id": "/repo/a.ts",
                    "values": [0.1, 0.2, 0.3],
                    "metadata": {"path": "/repo/a.ts", "text": "File path: /repo/a.ts\n\nx"},
                }
            ]
        )

    def test_index_handle_is_cached(self, store, client) -> None:
        store.upsert("idx", [_entry("/a")])
        store.upsert("idx", [_entry("/b")])
        assert client.Index.call_count == 1

    def test_upsert_empty_is_noop(self, store, client) -> None:
        assert store.upsert("idx", []) == 0
        client.Index.assert_not_called()

    def test_default_client_uses_api_key(self) -> None:
        with patch("repo_indexer.stores.pinecone_store.Pinecone") as pinecone_cls:
            PineconeVectorStore(api_key="pc-key")
        pinecone_cls.assert_called_once_with(api_key="pc-key")

    def test_health_check(self, store, client) -> None:
        client.list_indexes.return_value.names.return_value = []
        assert store.health_check() is True
        client.list_indexes.side_effect = ConnectionError("down")
        assert store.health_check() is False


# ──────────────────────────────────────────────────────────────────────
# Chroma
# ──────────────────────────────────────────────────────────────────────


class TestChromaVectorStore:
    @pytest.fixture()
    def client(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture()
    def store(self, client: MagicMock) -> ChromaVectorStore:
        return ChromaVectorStore(client=client)

    def test_list_index_names_accepts_names_or_collections(self, store, client) -> None:
        client.list_collections.return_value = ["a", SimpleNamespace(name="b")]
        assert store.list_index_names() == {"a", "b"}

    def test_create_index_maps_metric(self, store, client) -> None:
        store.create_index("idx", dimension=1536, metric="euclidean")

        client.get_or_create_collection.assert_called_once_with(
            name="idx",
            metadata={"hnsw:space": "l2", "dimension": 1536},
        )

    def test_create_index_rejects_unknown_metric(self, store) -> None:
        with pytest.raises(ValueError, match="Unsupported metric"):
            store.create_index("idx", dimension=3, metric="hamming")

    def test_collection_is_ready_once_it_exists(self, store, client) -> None:
        client.list_collections.return_value = ["idx"]
        assert store.describe_index_status("idx").ready is True
        assert store.describe_index_status("other").ready is False

    def test_upsert(self, store, client) -> None:
        collection = client.get_collection.return_value
        entry = _entry()

        assert store.upsert("idx", [entry]) == 1

        client.get_collection.assert_called_once_with(name="idx")
        collection.upsert.assert_called_once_with(
            ids=["/repo/a.ts"],
            embeddings=[[0.1, 0.2, 0.3]],
            documents=["File path: /repo/a.ts\n\nx"],
            metadatas=[{"path": "/repo/a.ts", "text": "File path: /repo/a.ts\n\nx"}],
        )

    def test_upsert_reuses_created_collection(self, store, client) -> None:
        store.create_index("idx", dimension=3)
        store.upsert("idx", [_entry()])

        client.get_collection.assert_not_called()
        client.get_or_create_collection.return_value.upsert.assert_called_once()

    def test_health_check(self, store, client) -> None:
        assert store.health_check() is True
        client.heartbeat.side_effect = ConnectionError("down")
        assert store.health_check() is False


# ──────────────────────────────────────────────────────────────────────
# Factory
# ──────────────────────────────────────────────────────────────────────


class TestGetVectorStore:
    def test_pinecone(self) -> None:
        with patch("repo_indexer.stores.pinecone_store.Pinecone") as pinecone_cls:
            store = get_vector_store(Settings(vector_db_type="pinecone", pinecone_api_key="k"))
        assert isinstance(store, PineconeVectorStore)
        pinecone_cls.assert_called_once_with(api_key="k")

    def test_chroma(self) -> None:
        mock_chromadb = MagicMock()
        with patch.dict("sys.modules", {"chromadb": mock_chromadb}):
            store = get_vector_store(
                Settings(vector_db_type="chroma", chroma_host="db", chroma_port=9000)
            )
        assert isinstance(store, ChromaVectorStore)
        mock_chromadb.HttpClient.assert_called_once_with(host="db", port=9000)

    def test_unsupported(self) -> None:
        with pytest.raises(ValueError, match="Unsupported vector_db_type"):
            get_vector_store(Settings(vector_db_type="weaviate"))
