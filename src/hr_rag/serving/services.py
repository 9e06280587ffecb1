"""Lazily-built service container shared by the HTTP routes.

Nothing here talks to the network at import time.  Each adapter is
constructed on first access from :class:`~hr_rag.config.Settings`; a
missing credential raises :class:`~hr_rag.errors.ConfigurationError` for
that request only.  Tests pass fakes through the constructor and install
the container with FastAPI's ``dependency_overrides``.
"""

from __future__ import annotations

import logging
from functools import cached_property, lru_cache
from typing import TYPE_CHECKING, Any

from hr_rag.agent.generator import AnswerGenerator
from hr_rag.agent.graph import build_graph
from hr_rag.agent.nodes import ChatNodes
from hr_rag.config import Settings, settings
from hr_rag.ingestion.embedder import Embedder
from hr_rag.ingestion.indexer import DocumentIndexer
from hr_rag.retrieval.memory import QAMemoryWriter
from hr_rag.retrieval.retriever import SourceRetriever

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

    from hr_rag.retrieval.base import DocumentStoreBase

logger = logging.getLogger(__name__)


class ChatbotServices:
    """Owns the store, embedder and chat model, and everything built on them.

    Parameters
    ----------
    settings:
        Configuration used to build any adapter not supplied explicitly.
    store, embedder, llm:
        Optional pre-built adapters; when omitted they are created from
        *settings* the first time they are needed.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        store: DocumentStoreBase | None = None,
        embedder: Embedder | None = None,
        llm: BaseChatModel | None = None,
    ) -> None:
        self.settings = settings
        self._store = store
        self._embedder = embedder
        self._llm = llm

    # -- external adapters ----------------------------------------------------

    @property
    def store(self) -> DocumentStoreBase:
        if self._store is None:
            from hr_rag.retrieval.chroma_store import ChromaDocumentStore

            self._store = ChromaDocumentStore.from_settings(self.settings)
        return self._store

    @property
    def embedder(self) -> Embedder:
        if self._embedder is None:
            self._embedder = Embedder.from_settings(self.settings)
        return self._embedder

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            from hr_rag.agent.llm import get_llm

            self._llm = get_llm(self.settings)
        return self._llm

    # -- composed services ----------------------------------------------------

    @cached_property
    def retriever(self) -> SourceRetriever:
        return SourceRetriever(
            self.store,
            self.embedder,
            law_k=self.settings.law_results_per_source,
        )

    @cached_property
    def generator(self) -> AnswerGenerator:
        return AnswerGenerator(
            self.llm,
            timeout=self.settings.generation_timeout,
            max_chars_per_item=self.settings.context_chars_per_item,
        )

    @cached_property
    def graph(self) -> Any:
        return build_graph(ChatNodes(self.retriever, self.generator))

    @cached_property
    def memory(self) -> QAMemoryWriter:
        return QAMemoryWriter(self.store, self.embedder)

    @cached_property
    def indexer(self) -> DocumentIndexer:
        return DocumentIndexer(
            self.store,
            self.embedder,
            chunk_size=self.settings.chunk_size,
            chunk_overlap=self.settings.chunk_overlap,
            max_chars=self.settings.max_extracted_chars,
        )


@lru_cache(maxsize=1)
def get_services() -> ChatbotServices:
    """FastAPI dependency returning the process-wide container."""
    return ChatbotServices(settings)
