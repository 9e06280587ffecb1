"""Abstract base class for document-store backends.

Adding a new backend (pgvector, Qdrant …) only requires subclassing
:class:`DocumentStoreBase` and implementing the abstract methods.  The
retrieval and ingestion layers never see the concrete client.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from hr_rag.errors import EmbeddingMismatchError
from hr_rag.retrieval.models import DocumentChunk, QAMemory, SearchResult


class DocumentStoreBase(ABC):
    """Backend-agnostic document-store interface.

    Parameters
    ----------
    embedding_model:
        Identifier of the model every stored vector must come from.
    embedding_dim:
        Expected vector length for that model.
    """

    def __init__(self, embedding_model: str, embedding_dim: int) -> None:
        self.embedding_model = embedding_model
        self.embedding_dim = embedding_dim

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def match_documents(
        self,
        query_embedding: list[float],
        match_count: int = 5,
        filter_source: str | None = None,
    ) -> list[SearchResult]:
        """Return up to *match_count* chunks ranked by similarity.

        Parameters
        ----------
        query_embedding:
            Dense vector for the query, produced by ``embedding_model``.
        match_count:
            Number of results to return.
        filter_source:
            When set, only chunks whose ``source`` equals this value match.
        """
        ...

    @abstractmethod
    def insert_documents(self, chunks: list[DocumentChunk]) -> None:
        """Store every chunk in a single bulk operation."""
        ...

    @abstractmethod
    def insert_memory(self, memory: QAMemory) -> None:
        """Append one Q&A record."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- shared guards --------------------------------------------------------

    def check_vector(self, vector: list[float], model: str | None = None) -> None:
        """Reject vectors from another model or with the wrong dimension."""
        if model is not None and model != self.embedding_model:
            raise EmbeddingMismatchError(
                f"Vector from model {model!r} cannot be mixed with {self.embedding_model!r}"
            )
        if len(vector) != self.embedding_dim:
            raise EmbeddingMismatchError(
                f"Expected {self.embedding_dim}-dim vector, got {len(vector)}"
            )
