"""Make sure the target vector index exists and is ready for writes."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from repo_indexer.errors import ProvisioningError, ProvisioningTimeoutError
from repo_indexer.models import IndexStatus, ServerlessPlacement
from repo_indexer.stores.base import VectorStoreBase

logger = logging.getLogger(__name__)


class IndexProvisioner:
    """Create a vector index when missing, then wait until it is ready.

    Parameters
    ----------
    store:
        Vector-store backend that owns the index.
    dimension:
        Vector width of a newly created index; must match the embedder.
    metric:
        Distance function of a newly created index.
    placement:
        Serverless cloud / region of a newly created index.
    poll_interval:
        Seconds to sleep between two readiness checks.
    max_attempts:
        Maximum number of readiness checks before giving up.
    sleep:
        Sleep function, injectable for tests.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        *,
        dimension: int = 1536,
        metric: str = "cosine",
        placement: ServerlessPlacement | None = None,
        poll_interval: float = 2.0,
        max_attempts: int = 150,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1 (got {max_attempts})")
        self.store = store
        self.dimension = dimension
        self.metric = metric
        self.placement = placement or ServerlessPlacement()
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self._sleep = sleep

    def ensure_ready(self, index_name: str) -> IndexStatus:
        """Create *index_name* if needed and block until it reports ready.

        Raises
        ------
        ProvisioningError
            Listing, creating or describing the index failed.
        ProvisioningTimeoutError
            The index was not ready after ``max_attempts`` checks.
        """
        try:
            existing = self.store.list_index_names()
        except Exception as exc:
            raise ProvisioningError(f"Could not list indexes: {exc}") from exc

        if index_name not in existing:
            try:
                self.store.create_index(
                    index_name,
                    dimension=self.dimension,
                    metric=self.metric,
                    placement=self.placement,
                )
            except Exception as exc:
                raise ProvisioningError(f"Could not create index '{index_name}': {exc}") from exc
        else:
            logger.info("Index '%s' already exists", index_name)

        for attempt in range(1, self.max_attempts + 1):
            try:
                status = self.store.describe_index_status(index_name)
            except Exception as exc:
                raise ProvisioningError(f"Could not describe index '{index_name}': {exc}") from exc

            if status.ready:
                logger.info("Index '%s' is ready", index_name)
                return status

            if attempt < self.max_attempts:
                logger.warning(
                    "Waiting for index '%s' to be ready... (attempt %d/%d)",
                    index_name, attempt, self.max_attempts,
                )
                self._sleep(self.poll_interval)

        raise ProvisioningTimeoutError(
            f"Index '{index_name}' not ready after {self.max_attempts} checks "
            f"({self.poll_interval}s interval)"
        )
