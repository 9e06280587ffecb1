"""Domain models for stored chunks, search hits, bundles and Q&A memory."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AgentMode(str, Enum):
    """Routing decision that selects which document pools are queried."""

    COMPANY = "company"
    LAW = "law"
    MIX = "mix"


class MetadataFilter(BaseModel):
    """Declarative metadata filter for vector-store queries.

    Attributes
    ----------
    field:
        The metadata key to filter on (e.g. ``"source"``).
    operator:
        Comparison operator, ``eq`` or ``ne``.
    value:
        The value to compare against.
    """

    field: str
    operator: str = "eq"
    value: Any = None

    @classmethod
    def equals(cls, field: str, value: Any) -> MetadataFilter:
        return cls(field=field, operator="eq", value=value)


class DocumentChunk(BaseModel):
    """One stored window of an uploaded document.

    Attributes
    ----------
    source:
        Logical document pool the chunk belongs to (``"근로기준법"``,
        ``"회사취업규칙"`` …).  Retrieval filters on this value.
    title:
        Human-readable document title, usually the file name.
    page:
        Page number when known.  Uploads chunk the whole text, so this is
        normally ``None``.
    content:
        The chunk text.
    metadata:
        Extra flat key/value pairs stored alongside the chunk.
    embedding:
        Dense vector for ``content``.
    embedding_model:
        Identifier of the model that produced ``embedding``.  Similarity
        search only ever compares vectors of the same model.
    """

    model_config = ConfigDict(frozen=True)

    source: str
    title: str
    page: int | None = None
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    embedding: list[float]
    embedding_model: str


class SearchResult(BaseModel):
    """A chunk returned by similarity search, scoped to one query."""

    id: str | None = None
    source: str = "unknown"
    title: str = ""
    page: int | None = None
    content: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    score: float | None = None

    def label(self) -> str:
        """Return the ``source/title`` tag used when quoting the chunk."""
        return f"{self.source}/{self.title}"


class Bundle(BaseModel):
    """Search results grouped by retrieval category for prompt construction."""

    name: str
    contexts: list[SearchResult] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.contexts)


class QAMemory(BaseModel):
    """An answered question, appended after each webhook reply."""

    user_id: str
    question: str
    answer: str
    embedding: list[float]
    embedding_model: str
