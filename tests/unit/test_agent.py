"""Unit tests for the chat workflow.

All tests run **without** Chroma or OpenAI by injecting the in-memory
fakes from ``fakes``.  The suite validates:

- Initial state construction
- Individual nodes (classify, retrieve, generate)
- Graph compilation and end-to-end invocation per routing mode
- Capability substitution (custom classifier)
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from hr_rag.agent.generator import BUSY_FALLBACK, AnswerGenerator
from hr_rag.agent.graph import build_graph, create_initial_state
from hr_rag.agent.nodes import ChatNodes
from hr_rag.errors import UpstreamError
from hr_rag.ingestion.embedder import Embedder
from hr_rag.retrieval.models import AgentMode
from hr_rag.retrieval.retriever import COMPANY_BUNDLE, LAW_BUNDLE, SourceRetriever

from fakes import FakeChatModel, FakeStore


def _nodes(store: FakeStore, embedder: Embedder, llm: FakeChatModel, **kwargs: Any) -> ChatNodes:
    return ChatNodes(SourceRetriever(store, embedder), AnswerGenerator(llm, timeout=1.0), **kwargs)


def _run(graph: Any, query: str, user_id: str = "user-1") -> dict[str, Any]:
    return asyncio.run(graph.ainvoke(create_initial_state(query, user_id)))


# ═══════════════════════════════════════════════════════════════════════
# State
# ═══════════════════════════════════════════════════════════════════════


class TestInitialState:
    def test_has_all_keys(self) -> None:
        state = create_initial_state("hello")
        assert set(state) == {"query", "user_id", "mode", "bundles", "answer"}

    def test_defaults(self) -> None:
        state = create_initial_state("q")
        assert state["user_id"] == "anon"
        assert state["mode"] is None
        assert state["bundles"] == []
        assert state["answer"] == ""


# ═══════════════════════════════════════════════════════════════════════
# Nodes
# ═══════════════════════════════════════════════════════════════════════


class TestNodes:
    def test_classify(self, fake_store: FakeStore, embedder: Embedder, fake_llm: FakeChatModel) -> None:
        nodes = _nodes(fake_store, embedder, fake_llm)
        result = asyncio.run(nodes.classify(create_initial_state("근로기준법상 해고 절차")))
        assert result == {"mode": AgentMode.LAW}

    def test_retrieve_uses_mode(self, fake_store: FakeStore, embedder: Embedder, fake_llm: FakeChatModel) -> None:
        nodes = _nodes(fake_store, embedder, fake_llm)
        state = {**create_initial_state("q"), "mode": AgentMode.COMPANY}
        result = asyncio.run(nodes.retrieve(state))
        assert [b.name for b in result["bundles"]] == [COMPANY_BUNDLE]

    def test_generate(self, fake_store: FakeStore, embedder: Embedder, fake_llm: FakeChatModel) -> None:
        nodes = _nodes(fake_store, embedder, fake_llm)
        result = asyncio.run(nodes.generate(create_initial_state("q")))
        assert result == {"answer": fake_llm.content}


# ═══════════════════════════════════════════════════════════════════════
# Graph end-to-end
# ═══════════════════════════════════════════════════════════════════════


class TestGraph:
    def test_company_question(self, fake_store: FakeStore, embedder: Embedder, fake_llm: FakeChatModel) -> None:
        result = _run(build_graph(_nodes(fake_store, embedder, fake_llm)), "연차 휴가 관련 문의")

        assert result["mode"] is AgentMode.COMPANY
        assert [b.name for b in result["bundles"]] == [COMPANY_BUNDLE]
        assert result["answer"] == fake_llm.content
        assert "【회사취업규칙/문서】" in fake_llm.calls[0][-1].content

    def test_law_question(self, fake_store: FakeStore, embedder: Embedder, fake_llm: FakeChatModel) -> None:
        result = _run(build_graph(_nodes(fake_store, embedder, fake_llm)), "근로기준법상 해고 절차")
        assert result["mode"] is AgentMode.LAW
        assert [b.name for b in result["bundles"]] == [LAW_BUNDLE]
        assert "회사취업규칙" not in {s for s, _ in fake_store.searches}

    def test_mix_question(self, fake_store: FakeStore, embedder: Embedder, fake_llm: FakeChatModel) -> None:
        result = _run(build_graph(_nodes(fake_store, embedder, fake_llm)), "오늘 날씨 어때")
        assert result["mode"] is AgentMode.MIX
        assert [b.name for b in result["bundles"]] == [COMPANY_BUNDLE, LAW_BUNDLE]

    def test_user_id_flows_through(self, fake_store: FakeStore, embedder: Embedder, fake_llm: FakeChatModel) -> None:
        result = _run(build_graph(_nodes(fake_store, embedder, fake_llm)), "q", user_id="kakao-42")
        assert result["user_id"] == "kakao-42"

    def test_custom_classifier(self, fake_store: FakeStore, embedder: Embedder, fake_llm: FakeChatModel) -> None:
        nodes = _nodes(fake_store, embedder, fake_llm, classifier=lambda _: AgentMode.LAW)
        result = _run(build_graph(nodes), "연차 휴가")
        assert result["mode"] is AgentMode.LAW

    def test_search_failures_still_answer(self, embedder: Embedder, fake_llm: FakeChatModel) -> None:
        store = FakeStore(failing_sources={None, "회사취업규칙", "단체협약", "임금협약서"})
        result = _run(build_graph(_nodes(store, embedder, fake_llm)), "수당 문의")
        assert result["bundles"][0].contexts == []
        assert result["answer"] == fake_llm.content

    def test_slow_model_yields_fallback(self, fake_store: FakeStore, embedder: Embedder) -> None:
        nodes = ChatNodes(
            SourceRetriever(fake_store, embedder),
            AnswerGenerator(FakeChatModel(delay=5.0), timeout=0.1),
        )
        assert _run(build_graph(nodes), "q")["answer"] == BUSY_FALLBACK

    def test_model_failure_propagates(self, fake_store: FakeStore, embedder: Embedder) -> None:
        nodes = _nodes(fake_store, embedder, FakeChatModel(error=RuntimeError("boom")))
        with pytest.raises(UpstreamError):
            _run(build_graph(nodes), "q")
