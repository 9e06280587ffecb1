"""Chroma implementation of the document-store abstraction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import chromadb

from hr_rag.errors import EmbeddingMismatchError
from hr_rag.retrieval.base import DocumentStoreBase
from hr_rag.retrieval.models import DocumentChunk, MetadataFilter, QAMemory, SearchResult

if TYPE_CHECKING:
    from hr_rag.config import Settings

logger = logging.getLogger(__name__)

# Keys lifted out of the flat Chroma metadata into SearchResult fields.
_RESERVED_KEYS = ("source", "title", "page", "embedding_model")


def _build_chroma_where(filters: list[MetadataFilter]) -> dict[str, Any] | None:
    """Convert a list of :class:`MetadataFilter` to Chroma ``where`` syntax."""
    if not filters:
        return None

    _OP_MAP = {"eq": "$eq", "ne": "$ne"}

    clauses: list[dict[str, Any]] = []
    for f in filters:
        chroma_op = _OP_MAP.get(f.operator)
        if chroma_op is None:
            raise ValueError(f"Unsupported filter operator: {f.operator!r}")
        clauses.append({f.field: {chroma_op: f.value}})

    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def _flat_metadata(values: dict[str, Any]) -> dict[str, Any]:
    # Chroma metadata values must be flat str/int/float/bool
    return {k: v for k, v in values.items() if isinstance(v, (str, int, float, bool))}


class ChromaDocumentStore(DocumentStoreBase):
    """Chroma-backed document store.

    Documents and Q&A memory live in two collections.  Both are tagged with
    the embedding model they were created for; connecting with a different
    model raises :class:`EmbeddingMismatchError` instead of silently mixing
    vector spaces.

    Parameters
    ----------
    collection_name:
        Collection holding uploaded document chunks.
    memory_collection_name:
        Collection holding answered questions.
    embedding_model, embedding_dim:
        Model identity enforced on every vector.
    host, port:
        Chroma server address.
    auth_token:
        Bearer token sent to the server when non-empty.
    client:
        Pre-built Chroma client (tests, embedded deployments).
    """

    def __init__(
        self,
        collection_name: str,
        memory_collection_name: str,
        *,
        embedding_model: str,
        embedding_dim: int,
        host: str = "localhost",
        port: int = 8000,
        auth_token: str = "",
        client: Any = None,
    ) -> None:
        super().__init__(embedding_model, embedding_dim)
        if client is None:
            headers = {"Authorization": f"Bearer {auth_token}"} if auth_token else None
            client = chromadb.HttpClient(host=host, port=port, headers=headers)
        self._client = client
        self._collection = self._open_collection(collection_name)
        self._memory = self._open_collection(memory_collection_name)

    @classmethod
    def from_settings(cls, settings: Settings) -> ChromaDocumentStore:
        settings.require("chroma_host")
        return cls(
            settings.chroma_collection,
            settings.chroma_memory_collection,
            embedding_model=settings.embedding_model,
            embedding_dim=settings.embedding_dim,
            host=settings.chroma_host,
            port=settings.chroma_port,
            auth_token=settings.chroma_auth_token,
        )

    # -- DocumentStoreBase overrides ------------------------------------------

    def match_documents(
        self,
        query_embedding: list[float],
        match_count: int = 5,
        filter_source: str | None = None,
    ) -> list[SearchResult]:
        self.check_vector(query_embedding)

        filters = [MetadataFilter.equals("embedding_model", self.embedding_model)]
        if filter_source:
            filters.append(MetadataFilter.equals("source", filter_source))

        results = self._collection.query(
            query_embeddings=[query_embedding],
            n_results=match_count,
            where=_build_chroma_where(filters),
            include=["documents", "metadatas", "distances"],
        )

        hits: list[SearchResult] = []
        ids = results.get("ids", [[]])[0]
        docs = results.get("documents", [[]])[0]
        metas = results.get("metadatas", [[]])[0]
        distances = results.get("distances", [[]])[0]

        for doc_id, content, meta, dist in zip(ids, docs, metas, distances):
            meta = dict(meta or {})
            hits.append(
                SearchResult(
                    id=doc_id,
                    source=meta.get("source", "unknown"),
                    title=meta.get("title", ""),
                    page=meta.get("page"),
                    content=content or "",
                    metadata={k: v for k, v in meta.items() if k not in _RESERVED_KEYS},
                    # cosine space: distance 0 means identical direction
                    score=1.0 - dist,
                )
            )
        return hits

    def insert_documents(self, chunks: list[DocumentChunk]) -> None:
        if not chunks:
            return

        ids: list[str] = []
        embeddings: list[list[float]] = []
        documents: list[str] = []
        metadatas: list[dict[str, Any]] = []

        for chunk in chunks:
            self.check_vector(chunk.embedding, chunk.embedding_model)
            meta = _flat_metadata(chunk.metadata)
            meta.update(
                source=chunk.source,
                title=chunk.title,
                embedding_model=chunk.embedding_model,
            )
            if chunk.page is not None:
                meta["page"] = chunk.page
            ids.append(uuid4().hex)
            embeddings.append(chunk.embedding)
            documents.append(chunk.content)
            metadatas.append(meta)

        self._collection.add(
            ids=ids,
            embeddings=embeddings,
            documents=documents,
            metadatas=metadatas,
        )
        logger.info("Inserted %d chunks into %r", len(ids), self._collection.name)

    def insert_memory(self, memory: QAMemory) -> None:
        self.check_vector(memory.embedding, memory.embedding_model)
        self._memory.add(
            ids=[uuid4().hex],
            embeddings=[memory.embedding],
            documents=[memory.question],
            metadatas=[
                {
                    "user_id": memory.user_id,
                    "answer": memory.answer,
                    "embedding_model": memory.embedding_model,
                }
            ],
        )

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False

    # -- internals ------------------------------------------------------------

    def _open_collection(self, name: str) -> Any:
        collection = self._client.get_or_create_collection(
            name=name,
            metadata={
                "hnsw:space": "cosine",
                "embedding_model": self.embedding_model,
                "embedding_dim": self.embedding_dim,
            },
        )
        existing = (collection.metadata or {}).get("embedding_model")
        if existing is not None and existing != self.embedding_model:
            raise EmbeddingMismatchError(
                f"Collection {name!r} holds {existing!r} vectors, "
                f"configured model is {self.embedding_model!r}"
            )
        return collection
