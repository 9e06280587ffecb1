"""Best-effort Q&A memory persistence."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hr_rag.errors import PersistenceError
from hr_rag.retrieval.models import QAMemory

if TYPE_CHECKING:
    from hr_rag.ingestion.embedder import Embedder
    from hr_rag.retrieval.base import DocumentStoreBase

logger = logging.getLogger(__name__)


class QAMemoryWriter:
    """Stores each answered question with its embedding.

    :meth:`remember` never raises: the reply has already been sent by the
    time it runs, so failures are only logged.
    """

    def __init__(self, store: DocumentStoreBase, embedder: Embedder) -> None:
        self._store = store
        self._embedder = embedder

    def remember(self, user_id: str, question: str, answer: str) -> bool:
        """Persist one Q&A pair; return whether the write succeeded."""
        try:
            self._write(user_id, question, answer)
        except PersistenceError as exc:
            logger.warning("qa_memory save warn: %s", exc, exc_info=exc.__cause__)
            return False
        return True

    def _write(self, user_id: str, question: str, answer: str) -> None:
        try:
            embedding = self._embedder.embed_query(question)
            self._store.insert_memory(
                QAMemory(
                    user_id=user_id,
                    question=question,
                    answer=answer,
                    embedding=embedding,
                    embedding_model=self._embedder.model_name,
                )
            )
        except Exception as exc:
            raise PersistenceError(str(exc)) from exc
