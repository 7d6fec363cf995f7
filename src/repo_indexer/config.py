"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Embedding
    openai_api_key: str = Field(default="", description="OpenAI API key used for embeddings")
    openai_base_url: str = Field(
        default="",
        description=(
            "Base URL for an OpenAI-compatible embeddings endpoint. "
            "Leave empty to use OpenAI cloud."
        ),
    )
    embedding_model: str = "text-embedding-3-small"
    embedding_dimension: int = Field(default=1536, gt=0)

    # Vector store
    vector_db_type: str = Field(default="pinecone", description="'pinecone' or 'chroma'")
    index_name: str = "repo-index"
    index_metric: str = "cosine"

    pinecone_api_key: str = ""
    pinecone_cloud: str = "aws"
    pinecone_region: str = "us-east-1"

    chroma_host: str = "localhost"
    chroma_port: int = 8000

    # Provisioning
    provision_poll_interval: float = Field(default=2.0, ge=0)
    provision_max_attempts: int = Field(default=150, ge=1)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import `settings` wherever needed.
settings = Settings()
