"""In-memory stand-ins for the embedding service, the store and the chat model.

Nothing here contacts OpenAI or Chroma: each fake implements just enough of
the external interface for the unit tests.
"""

from __future__ import annotations

import asyncio
from typing import Any

from langchain_core.embeddings import Embeddings
from langchain_core.messages import AIMessage

from hr_rag.retrieval.base import DocumentStoreBase
from hr_rag.retrieval.models import DocumentChunk, QAMemory, SearchResult

FAKE_MODEL = "fake-embed"
FAKE_DIM = 4


class FakeEmbeddings(Embeddings):
    """Deterministic embeddings: first component is the text length."""

    def __init__(self, dim: int = FAKE_DIM, fail: bool = False) -> None:
        self.dim = dim
        self.fail = fail
        self.document_calls: list[list[str]] = []
        self.query_calls: list[str] = []

    def _vector(self, text: str) -> list[float]:
        return [float(len(text))] + [0.5] * (self.dim - 1)

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls.append(list(texts))
        if self.fail:
            raise RuntimeError("embedding service unavailable")
        return [self._vector(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        self.query_calls.append(text)
        if self.fail:
            raise RuntimeError("embedding service unavailable")
        return self._vector(text)


class FakeStore(DocumentStoreBase):
    """In-memory store returning canned hits per source."""

    def __init__(
        self,
        hits: dict[str | None, list[SearchResult]] | None = None,
        *,
        failing_sources: set[str | None] | None = None,
        fail_insert: bool = False,
        fail_memory: bool = False,
        healthy: bool = True,
    ) -> None:
        super().__init__(FAKE_MODEL, FAKE_DIM)
        self.hits = hits or {}
        self.failing_sources = failing_sources or set()
        self.fail_insert = fail_insert
        self.fail_memory = fail_memory
        self.healthy = healthy
        self.searches: list[tuple[str | None, int]] = []
        self.insert_calls: list[list[DocumentChunk]] = []
        self.memories: list[QAMemory] = []

    def match_documents(
        self,
        query_embedding: list[float],
        match_count: int = 5,
        filter_source: str | None = None,
    ) -> list[SearchResult]:
        self.check_vector(query_embedding)
        self.searches.append((filter_source, match_count))
        if filter_source in self.failing_sources:
            raise RuntimeError(f"rpc error for {filter_source}")
        return self.hits.get(filter_source, [])[:match_count]

    def insert_documents(self, chunks: list[DocumentChunk]) -> None:
        if self.fail_insert:
            raise RuntimeError("insert rejected")
        for chunk in chunks:
            self.check_vector(chunk.embedding, chunk.embedding_model)
        self.insert_calls.append(list(chunks))

    def insert_memory(self, memory: QAMemory) -> None:
        if self.fail_memory:
            raise RuntimeError("qa_memory table missing")
        self.memories.append(memory)

    def health_check(self) -> bool:
        return self.healthy


class FakeChatModel:
    """Async chat model stub with configurable latency and failure."""

    def __init__(self, content: str = "• 연차는 15일입니다.", delay: float = 0.0, error: Exception | None = None) -> None:
        self.content = content
        self.delay = delay
        self.error = error
        self.calls: list[list[Any]] = []
        self.completed = 0

    async def ainvoke(self, messages: list[Any]) -> AIMessage:
        self.calls.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        self.completed += 1
        return AIMessage(content=self.content)


def make_hits(source: str, n: int, title: str = "문서") -> list[SearchResult]:
    return [
        SearchResult(
            id=f"{source}-{i}",
            source=source,
            title=title,
            content=f"{source} 조항 {i} 내용",
            score=0.9 - i * 0.05,
        )
        for i in range(n)
    ]


def minimal_pdf(lines: list[str]) -> bytes:
    """Build a one-page PDF whose content stream draws *lines* in Helvetica.

    Only ASCII text survives the standard Type1 font encoding.
    """
    ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
    for line in lines:
        escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        ops.append(f"({escaped}) Tj T*")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    out += b"".join(b"%010d 00000 n \n" % offset for offset in offsets)
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at)
    return bytes(out)
