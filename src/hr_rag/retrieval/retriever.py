"""Source-aware retriever — builds the context bundles for one question.

Each routing mode maps to a fixed search strategy over named document
pools (``source`` values assigned at upload time):

* ``company`` — company rules first, widened to the collective and wage
  agreements while fewer than ``min_company_hits`` results were found.
* ``law`` — statutes and guides in priority order, a few hits each,
  stopping once more than ``max_law_hits`` results accumulated.
* ``mix`` — both of the above as two separate bundles.

Every individual search is fault-tolerant: a failing source contributes
no results instead of aborting the bundle.

Usage::

    retriever = SourceRetriever(store, embedder)
    bundles = retriever.retrieve("연차는 며칠인가요?", AgentMode.COMPANY)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hr_rag.retrieval.models import AgentMode, Bundle, SearchResult

if TYPE_CHECKING:
    from hr_rag.ingestion.embedder import Embedder
    from hr_rag.retrieval.base import DocumentStoreBase

logger = logging.getLogger(__name__)

COMPANY_BUNDLE = "회사 내규"
LAW_BUNDLE = "법령 기준"

COMPANY_SOURCES: tuple[str, ...] = ("회사취업규칙", "단체협약", "임금협약서")
LAW_SOURCES: tuple[str, ...] = (
    "근로기준법",
    "고용보험법",
    "산재보험법",
    "유연근무매뉴얼",
    "노무관리가이드북",
    "질의회시집",
    "양성평등기본법",
)


class SourceRetriever:
    """Runs the per-mode search strategy against a :class:`DocumentStoreBase`.

    Parameters
    ----------
    store:
        Document store backend.
    embedder:
        Embeds the question once per :meth:`retrieve` call.
    company_sources:
        Company pools in fallback order; the first is the primary source.
    law_sources:
        Legal pools in priority order.
    company_k:
        Results requested from each company pool.
    min_company_hits:
        Fallback pools are queried while fewer results than this exist.
    law_k:
        Results requested from each legal pool.
    max_law_hits:
        Cap on the law bundle size.
    """

    def __init__(
        self,
        store: DocumentStoreBase,
        embedder: Embedder,
        *,
        company_sources: tuple[str, ...] = COMPANY_SOURCES,
        law_sources: tuple[str, ...] = LAW_SOURCES,
        company_k: int = 5,
        min_company_hits: int = 3,
        law_k: int = 2,
        max_law_hits: int = 6,
    ) -> None:
        self._store = store
        self._embedder = embedder
        self.company_sources = company_sources
        self.law_sources = law_sources
        self.company_k = company_k
        self.min_company_hits = min_company_hits
        self.law_k = law_k
        self.max_law_hits = max_law_hits

    # -- public API -----------------------------------------------------------

    def retrieve(self, query: str, mode: AgentMode) -> list[Bundle]:
        """Return the bundles for *mode*: one for company/law, two for mix."""
        try:
            embedding: list[float] | None = self._embedder.embed_query(query)
        except Exception:
            logger.warning("Query embedding failed, answering without context", exc_info=True)
            embedding = None

        if mode is AgentMode.COMPANY:
            return [self.company_bundle(embedding)]
        if mode is AgentMode.LAW:
            return [self.law_bundle(embedding)]
        return [self.company_bundle(embedding), self.law_bundle(embedding)]

    def company_bundle(self, embedding: list[float] | None) -> Bundle:
        contexts: list[SearchResult] = []
        for i, source in enumerate(self.company_sources):
            if i > 0 and len(contexts) >= self.min_company_hits:
                break
            contexts.extend(self.search(embedding, source, self.company_k))
        return Bundle(name=COMPANY_BUNDLE, contexts=contexts)

    def law_bundle(self, embedding: list[float] | None) -> Bundle:
        contexts: list[SearchResult] = []
        for source in self.law_sources:
            contexts.extend(self.search(embedding, source, self.law_k))
            if len(contexts) > self.max_law_hits:
                break
        return Bundle(name=LAW_BUNDLE, contexts=contexts[: self.max_law_hits])

    def search(self, embedding: list[float] | None, source: str | None, k: int) -> list[SearchResult]:
        """One store query; any failure yields an empty list."""
        if embedding is None:
            return []
        try:
            return self._store.match_documents(embedding, match_count=k, filter_source=source)
        except Exception:
            logger.warning("Search failed for source=%r, continuing without it", source, exc_info=True)
            return []
