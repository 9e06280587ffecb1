"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from hr_rag.errors import ConfigurationError


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file.

    Credentials default to empty strings so that importing the package never
    fails.  Code paths that need one call :meth:`require`, which raises
    :class:`~hr_rag.errors.ConfigurationError` at first use.
    """

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key (chat + embeddings)")
    llm_model_name: str = Field(default="gpt-4o-mini", description="Chat model identifier")
    llm_base_url: str = Field(
        default="",
        description="Base URL of an OpenAI-compatible endpoint. Empty means OpenAI cloud.",
    )
    llm_temperature: float = 0.2
    generation_timeout: float = Field(
        default=4.5,
        description="Wall-clock budget (seconds) for one answer generation call.",
    )

    # Embedding
    embedding_provider: Literal["openai", "huggingface"] = "openai"
    embedding_model: str = "text-embedding-3-large"
    embedding_dim: int = 3072

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_auth_token: str = ""
    chroma_collection: str = "documents"
    chroma_memory_collection: str = "qa_memory"

    # Endpoint credentials
    admin_password: str = ""
    kakao_skill_secret: str = ""

    # Ingestion
    chunk_size: int = 1200
    chunk_overlap: int = 200
    max_upload_bytes: int = 50 * 1024 * 1024
    max_extracted_chars: int = 2_000_000

    # Retrieval / answer shaping
    law_results_per_source: int = 2
    context_chars_per_item: int = 500
    reply_max_chars: int = 2500

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    def require(self, *fields: str) -> None:
        """Raise :class:`ConfigurationError` unless every named field is set."""
        missing = [name.upper() for name in fields if not getattr(self, name)]
        if missing:
            raise ConfigurationError(f"Missing {' or '.join(missing)}")


# Singleton — import `settings` wherever needed.
settings = Settings()
