"""Embedding adapter — batched texts to vectors, tagged with the model id."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hr_rag.errors import EmbeddingMismatchError

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from hr_rag.config import Settings

logger = logging.getLogger(__name__)


def get_embedding_function(settings: Settings) -> Embeddings:
    """Return the configured LangChain embedding client.

    ``openai`` (default) calls the hosted embedding API and needs
    ``OPENAI_API_KEY``; ``huggingface`` runs a local sentence-transformer.
    """
    if settings.embedding_provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(model_name=settings.embedding_model)

    from langchain_openai import OpenAIEmbeddings

    settings.require("openai_api_key")
    kwargs: dict = {"model": settings.embedding_model, "api_key": settings.openai_api_key}
    if settings.llm_base_url:
        kwargs["base_url"] = settings.llm_base_url
    return OpenAIEmbeddings(**kwargs)


class Embedder:
    """Wraps a LangChain :class:`Embeddings` and checks every vector.

    Parameters
    ----------
    embeddings:
        Any LangChain embedding client.
    model_name:
        Identifier recorded on stored chunks and memory records.
    dimension:
        Expected vector length; a response of any other length raises
        :class:`EmbeddingMismatchError`.
    """

    def __init__(self, embeddings: Embeddings, model_name: str, dimension: int) -> None:
        self._embeddings = embeddings
        self.model_name = model_name
        self.dimension = dimension

    @classmethod
    def from_settings(cls, settings: Settings) -> Embedder:
        return cls(
            get_embedding_function(settings),
            model_name=settings.embedding_model,
            dimension=settings.embedding_dim,
        )

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed *texts* in one batched call."""
        if not texts:
            return []
        vectors = self._embeddings.embed_documents(texts)
        if len(vectors) != len(texts):
            raise EmbeddingMismatchError(
                f"Embedding service returned {len(vectors)} vectors for {len(texts)} texts"
            )
        for vector in vectors:
            self._check(vector)
        logger.debug("Embedded %d texts with %s", len(texts), self.model_name)
        return vectors

    def embed_query(self, text: str) -> list[float]:
        vector = self._embeddings.embed_query(text)
        self._check(vector)
        return vector

    def _check(self, vector: list[float]) -> None:
        if len(vector) != self.dimension:
            raise EmbeddingMismatchError(
                f"{self.model_name} returned a {len(vector)}-dim vector, "
                f"expected {self.dimension}"
            )
