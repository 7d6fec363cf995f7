"""Exception hierarchy.

Selector and provisioner errors abort the whole operation. The
``IngestionError`` family is raised per file and absorbed by the
ingestion driver, which records it in the run summary.
"""

from __future__ import annotations


class IndexerError(RuntimeError):
    """Base class for every error raised by this package."""


class FileSystemError(IndexerError):
    """Listing a directory failed while selecting files."""


class ProvisioningError(IndexerError):
    """The vector index could not be listed, created or described."""


class ProvisioningTimeoutError(ProvisioningError, TimeoutError):
    """The index did not report ready within the allowed number of polls."""


class IngestionError(IndexerError):
    """A single file could not be indexed."""

    stage = "ingest"

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class ReadError(IngestionError):
    stage = "read"


class EmbeddingError(IngestionError):
    stage = "embed"


class UpsertError(IngestionError):
    stage = "upsert"
