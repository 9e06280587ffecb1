"""Upload pipeline: extract → chunk → embed → bulk insert."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hr_rag.errors import ValidationError
from hr_rag.ingestion import loader
from hr_rag.ingestion.chunker import chunk_text
from hr_rag.retrieval.models import DocumentChunk

if TYPE_CHECKING:
    from hr_rag.ingestion.embedder import Embedder
    from hr_rag.retrieval.base import DocumentStoreBase

logger = logging.getLogger(__name__)


class DocumentIndexer:
    """Turns an uploaded PDF into stored, embedded chunks.

    All chunks are embedded in one batched call and written with one bulk
    insert, so a failure at any step leaves nothing behind in the store.
    """

    def __init__(
        self,
        store: DocumentStoreBase,
        embedder: Embedder,
        *,
        chunk_size: int = 1200,
        chunk_overlap: int = 200,
        max_chars: int = 2_000_000,
    ) -> None:
        self._store = store
        self._embedder = embedder
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.max_chars = max_chars

    def index_pdf(self, data: bytes, *, source: str, title: str) -> int:
        """Index one PDF and return the number of chunks stored."""
        text = loader.pdf_bytes_to_text(data, max_chars=self.max_chars)
        return self.index_text(text, source=source, title=title)

    def index_text(self, text: str, *, source: str, title: str) -> int:
        if not text.strip():
            raise ValidationError("PDF에서 텍스트를 추출하지 못했습니다.")

        chunks = chunk_text(text, self.chunk_size, self.chunk_overlap)
        embeddings = self._embedder.embed_documents(chunks)
        records = [
            DocumentChunk(
                source=source,
                title=title,
                page=None,
                content=content,
                metadata={"chunk_index": i, "chunk_count": len(chunks)},
                embedding=embedding,
                embedding_model=self._embedder.model_name,
            )
            for i, (content, embedding) in enumerate(zip(chunks, embeddings))
        ]
        self._store.insert_documents(records)
        logger.info("Indexed %d chunks from %r (source=%s)", len(records), title, source)
        return len(records)
