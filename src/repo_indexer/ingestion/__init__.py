"""
Ingestion — file selection, index provisioning, and per-file embedding.

This module is responsible for the pipeline that turns a source tree into
one vector per file in a remote index, keyed by the file's absolute path.
"""

from repo_indexer.ingestion.driver import IngestionDriver
from repo_indexer.ingestion.provisioner import IndexProvisioner
from repo_indexer.ingestion.selector import FileSelector, SelectionConfig

__all__ = [
    "FileSelector",
    "IndexProvisioner",
    "IngestionDriver",
    "SelectionConfig",
]
