"""End-to-end indexing of a source tree.

Composes the three ingestion steps in order::

    FileSelector.select  →  IndexProvisioner.ensure_ready  →  IngestionDriver.run

Provisioning happens once, before any file is embedded. A dry run skips
provisioning and never builds remote clients.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from repo_indexer.config import settings as default_settings
from repo_indexer.ingestion.driver import IngestionDriver
from repo_indexer.ingestion.provisioner import IndexProvisioner
from repo_indexer.ingestion.selector import FileSelector
from repo_indexer.models import IngestionRun, ServerlessPlacement

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from repo_indexer.config import Settings
    from repo_indexer.stores.base import VectorStoreBase

logger = logging.getLogger(__name__)


def build_provisioner(store: VectorStoreBase, settings: Settings) -> IndexProvisioner:
    """Return an :class:`IndexProvisioner` configured from *settings*."""
    return IndexProvisioner(
        store,
        dimension=settings.embedding_dimension,
        metric=settings.index_metric,
        placement=ServerlessPlacement(
            cloud=settings.pinecone_cloud,
            region=settings.pinecone_region,
        ),
        poll_interval=settings.provision_poll_interval,
        max_attempts=settings.provision_max_attempts,
    )


def index_repository(
    root_dir: str | Path,
    index_name: str | None = None,
    *,
    dry_run: bool = False,
    settings: Settings | None = None,
    selector: FileSelector | None = None,
    store: VectorStoreBase | None = None,
    embedder: Embeddings | None = None,
) -> IngestionRun:
    """Select files under *root_dir* and sync them into *index_name*.

    Parameters
    ----------
    root_dir:
        Root of the source tree to index.
    index_name:
        Target index. Defaults to ``settings.index_name``.
    dry_run:
        Read and select files but make no remote calls.
    settings:
        Configuration; defaults to the module-level singleton.
    selector, store, embedder:
        Optional pre-built collaborators. Missing ones are built from
        *settings* (store and embedder only when not a dry run).

    Returns
    -------
    IngestionRun
        Counts of successful vs. total files. Per-file failures do not
        raise; selection and provisioning failures do.
    """
    settings = settings or default_settings
    index_name = index_name or settings.index_name
    selector = selector or FileSelector()

    files = selector.select(root_dir)

    if not dry_run:
        if store is None:
            from repo_indexer.stores import get_vector_store

            store = get_vector_store(settings)
        if embedder is None:
            from repo_indexer.ingestion.embedder import get_embedding_function

            embedder = get_embedding_function(settings)

        build_provisioner(store, settings).ensure_ready(index_name)
    else:
        logger.info("Dry run: skipping provisioning of index '%s'", index_name)

    driver = IngestionDriver(store, embedder, dimension=settings.embedding_dimension)
    return driver.run(files, index_name, dry_run=dry_run)
