"""Abstract base class for vector-store backends.

Adding a new backend (Weaviate, Qdrant …) only requires subclassing
:class:`VectorStoreBase` and implementing the four abstract methods.
Provisioning and ingestion are backend-agnostic.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from repo_indexer.models import IndexEntry, IndexStatus, ServerlessPlacement

logger = logging.getLogger(__name__)


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface."""

    # -- index lifecycle ------------------------------------------------------

    @abstractmethod
    def list_index_names(self) -> set[str]:
        """Return the names of every index known to the backend."""
        ...

    @abstractmethod
    def create_index(
        self,
        name: str,
        *,
        dimension: int,
        metric: str = "cosine",
        placement: ServerlessPlacement | None = None,
    ) -> None:
        """Create index *name* holding vectors of width *dimension*.

        Parameters
        ----------
        name:
            Logical name of the index / collection.
        dimension:
            Vector width; must match the embedding provider's output.
        metric:
            Distance function (``cosine`` | ``euclidean`` | ``dotproduct``).
        placement:
            Serverless cloud / region. Backends without a notion of
            placement ignore it.
        """
        ...

    @abstractmethod
    def describe_index_status(self, name: str) -> IndexStatus:
        """Return the readiness of index *name*."""
        ...

    # -- data -----------------------------------------------------------------

    @abstractmethod
    def upsert(self, index_name: str, entries: Sequence[IndexEntry]) -> int:
        """Insert-or-replace *entries* keyed by ``entry.id``.

        Returns the number of records written.
        """
        ...

    # -- optional overrides ---------------------------------------------------

    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable."""
        try:
            self.list_index_names()
        except Exception:
            logger.warning("%s health-check failed", type(self).__name__, exc_info=True)
            return False
        return True
