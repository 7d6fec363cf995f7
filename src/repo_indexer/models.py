"""Domain models for documents, index entries and ingestion runs."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

FILE_PATH_PREFIX = "File path: {path}\n\n"


class Document(BaseModel):
    """A source file's content, annotated with its path, ready for embedding.

    Attributes
    ----------
    path:
        Absolute path of the source file. Doubles as the index entry id.
    text:
        The raw file content prefixed with ``"File path: <path>\\n\\n"`` so
        the embedding captures path context.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    text: str

    @classmethod
    def from_content(cls, path: str, content: str) -> Document:
        return cls(path=path, text=FILE_PATH_PREFIX.format(path=path) + content)


class EntryMetadata(BaseModel):
    """Metadata stored alongside each vector.

    The full document text is kept so the store can serve snippets, not
    only similarity scores.
    """

    path: str
    text: str


class IndexEntry(BaseModel):
    """One persisted record in the vector index, keyed by file path."""

    id: str
    values: list[float]
    metadata: EntryMetadata

    @classmethod
    def from_document(cls, document: Document, embedding: list[float]) -> IndexEntry:
        return cls(
            id=document.path,
            values=embedding,
            metadata=EntryMetadata(path=document.path, text=document.text),
        )

    def to_record(self) -> dict[str, Any]:
        """Return the ``{id, values, metadata}`` dict understood by vector stores."""
        return self.model_dump()


class ServerlessPlacement(BaseModel):
    """Cloud / region placement for a serverless index."""

    model_config = ConfigDict(frozen=True)

    cloud: str = "aws"
    region: str = "us-east-1"


class IndexStatus(BaseModel):
    """Readiness of a remote index as reported by describe-index."""

    name: str
    ready: bool = False


class FileFailure(BaseModel):
    """A file that could not be indexed, and why."""

    path: str
    stage: Literal["read", "embed", "upsert"]
    error: str


class IngestionRun(BaseModel):
    """Outcome of a single ingestion invocation.

    The run never raises for per-file failures, so callers that need strict
    guarantees must compare :attr:`successful` against :attr:`total`.
    """

    index_name: str
    dry_run: bool = False
    total: int = 0
    successful: int = 0
    failures: list[FileFailure] = Field(default_factory=list)

    @property
    def failed(self) -> int:
        return self.total - self.successful

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def summary(self) -> str:
        verb = "simulated indexing" if self.dry_run else "indexed"
        suffix = " (dry run)" if self.dry_run else ""
        return (
            f"Successfully {verb} {self.successful} out of {self.total} files "
            f"under index '{self.index_name}'{suffix}"
        )
