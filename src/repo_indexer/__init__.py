"""Sync a source tree into a vector-search index, one embedding per file."""

from repo_indexer.pipeline import index_repository

__all__ = ["index_repository"]
__version__ = "0.1.0"
