"""Embed each selected file and upsert it into the index, one at a time."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from typing import TYPE_CHECKING

from repo_indexer.errors import EmbeddingError, IngestionError, ReadError, UpsertError
from repo_indexer.models import Document, FileFailure, IndexEntry, IngestionRun

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from repo_indexer.stores.base import VectorStoreBase

logger = logging.getLogger(__name__)


class IngestionDriver:
    """Sequentially index files into a provisioned vector index.

    Files are processed one by one. A read, embedding or upsert failure is
    logged and counted against the run; it never aborts the remaining files.

    Parameters
    ----------
    store:
        Vector-store backend. May be ``None`` for dry runs.
    embedder:
        langchain-core ``Embeddings`` implementation. May be ``None`` for
        dry runs.
    dimension:
        Expected embedding width; vectors of any other length are rejected.
    """

    def __init__(
        self,
        store: VectorStoreBase | None = None,
        embedder: Embeddings | None = None,
        *,
        dimension: int = 1536,
    ) -> None:
        self.store = store
        self.embedder = embedder
        self.dimension = dimension

    def run(
        self,
        files: Iterable[str | os.PathLike[str]],
        index_name: str,
        *,
        dry_run: bool = False,
    ) -> IngestionRun:
        """Index every path in *files* under *index_name*.

        In dry-run mode files are still read, but neither the embedder nor
        the store is called.
        """
        if not dry_run and (self.store is None or self.embedder is None):
            raise ValueError("A store and an embedder are required unless dry_run is set")

        run = IngestionRun(index_name=index_name, dry_run=dry_run)
        for file in files:
            path = os.fspath(file)
            run.total += 1
            try:
                self._index_file(path, index_name, dry_run=dry_run)
            except IngestionError as exc:
                logger.error("Error indexing file %s: %s", path, exc.__cause__ or exc)
                run.failures.append(
                    FileFailure(path=path, stage=exc.stage, error=str(exc.__cause__ or exc))
                )
                continue
            run.successful += 1

        logger.info("%s", run.summary())
        return run

    # -- per-file steps ---------------------------------------------------------

    def _index_file(self, path: str, index_name: str, *, dry_run: bool) -> None:
        document = Document.from_content(path, self._read(path))

        if dry_run:
            logger.info("[Dry Run] Indexed file: %s", path)
            return

        entry = IndexEntry.from_document(document, self._embed(document))
        self._upsert(index_name, entry)
        logger.info("Indexed file: %s", path)

    def _read(self, path: str) -> str:
        try:
            with open(path, encoding="utf-8", errors="replace") as fh:
                return fh.read()
        except OSError as exc:
            raise ReadError(path, "could not read file") from exc

    def _embed(self, document: Document) -> list[float]:
        try:
            vectors = self.embedder.embed_documents([document.text])
        except Exception as exc:
            raise EmbeddingError(document.path, "embedding request failed") from exc

        try:
            if len(vectors) != 1 or len(vectors[0]) != self.dimension:
                got = len(vectors[0]) if vectors else 0
                raise EmbeddingError(
                    document.path,
                    f"expected one vector of dimension {self.dimension}, "
                    f"got {len(vectors)} (dim={got})",
                )
            return [float(v) for v in vectors[0]]
        except (TypeError, ValueError) as exc:
            raise EmbeddingError(document.path, "malformed embedding") from exc

    def _upsert(self, index_name: str, entry: IndexEntry) -> None:
        try:
            self.store.upsert(index_name, [entry])
        except Exception as exc:
            raise UpsertError(entry.id, "upsert failed") from exc
