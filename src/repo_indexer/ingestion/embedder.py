"""Embedding provider initialisation — single place to swap providers.

Supports two modes:

1. **OpenAI cloud** (default) — set ``OPENAI_API_KEY``.
2. **OpenAI-compatible endpoint** — set ``OPENAI_BASE_URL`` to a proxy or
   self-hosted server exposing ``/v1/embeddings``.

The returned object implements the langchain-core ``Embeddings`` interface,
which is all the ingestion driver relies on.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langchain_openai import OpenAIEmbeddings

from repo_indexer.config import settings as default_settings

if TYPE_CHECKING:
    from repo_indexer.config import Settings

logger = logging.getLogger(__name__)


def get_embedding_function(settings: Settings | None = None) -> OpenAIEmbeddings:
    """Return the configured OpenAI embedding function."""
    settings = settings or default_settings
    kwargs: dict = {
        "model": settings.embedding_model,
        "api_key": settings.openai_api_key,
        "dimensions": settings.embedding_dimension,
    }

    if settings.openai_base_url:
        logger.info("Using embeddings endpoint: %s", settings.openai_base_url)
        kwargs["base_url"] = settings.openai_base_url

    return OpenAIEmbeddings(**kwargs)
