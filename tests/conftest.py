"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from typing import Callable

import pytest

from hr_rag.config import Settings
from hr_rag.ingestion.embedder import Embedder
from hr_rag.retrieval.models import SearchResult
from hr_rag.serving.services import ChatbotServices

from fakes import FAKE_DIM, FAKE_MODEL, FakeChatModel, FakeEmbeddings, FakeStore, make_hits


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def hits_factory() -> Callable[..., list[SearchResult]]:
    return make_hits


@pytest.fixture()
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture()
def embedder(fake_embeddings: FakeEmbeddings) -> Embedder:
    return Embedder(fake_embeddings, model_name=FAKE_MODEL, dimension=FAKE_DIM)


@pytest.fixture()
def fake_store() -> FakeStore:
    return FakeStore(
        hits={
            "회사취업규칙": make_hits("회사취업규칙", 5),
            "근로기준법": make_hits("근로기준법", 2),
            "고용보험법": make_hits("고용보험법", 2),
        }
    )


@pytest.fixture()
def fake_llm() -> FakeChatModel:
    return FakeChatModel()


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        admin_password="admin-pw",
        kakao_skill_secret="",
        embedding_model=FAKE_MODEL,
        embedding_dim=FAKE_DIM,
        generation_timeout=1.0,
        chunk_size=100,
        chunk_overlap=20,
    )


@pytest.fixture()
def services(
    test_settings: Settings,
    fake_store: FakeStore,
    embedder: Embedder,
    fake_llm: FakeChatModel,
) -> ChatbotServices:
    return ChatbotServices(test_settings, store=fake_store, embedder=embedder, llm=fake_llm)
