"""
Retrieval — document store, source-aware search, and context bundling.

This module wraps the vector store behind a clean interface so that
the agent layer never needs to know which DB is backing retrieval.

Public surface
--------------
- :class:`SourceRetriever` — per-mode search strategy producing bundles.
- :class:`DocumentStoreBase` — abstract backend.
- :class:`ChromaDocumentStore` — default Chroma backend.
- :class:`QAMemoryWriter` — best-effort Q&A persistence.
- :class:`AgentMode`, :class:`Bundle`, :class:`DocumentChunk`,
  :class:`QAMemory`, :class:`SearchResult` — data models.
"""

from hr_rag.retrieval.base import DocumentStoreBase
from hr_rag.retrieval.memory import QAMemoryWriter
from hr_rag.retrieval.models import (
    AgentMode,
    Bundle,
    DocumentChunk,
    MetadataFilter,
    QAMemory,
    SearchResult,
)
from hr_rag.retrieval.retriever import SourceRetriever

__all__ = [
    "AgentMode",
    "Bundle",
    "ChromaDocumentStore",
    "DocumentChunk",
    "DocumentStoreBase",
    "MetadataFilter",
    "QAMemory",
    "QAMemoryWriter",
    "SearchResult",
    "SourceRetriever",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaDocumentStore to avoid pulling in chromadb at import time."""
    if name == "ChromaDocumentStore":
        from hr_rag.retrieval.chroma_store import ChromaDocumentStore

        return ChromaDocumentStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
