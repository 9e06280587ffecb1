"""
Agent — routing, answer generation and the LangGraph chat workflow.

This module contains **zero** infrastructure dependencies.  Capabilities
(retriever, generator, classifier) are injected, so the workflow can be
tested locally with fakes.

Public API
----------
- :func:`classify` — keyword router returning an :class:`AgentMode`.
- :class:`AnswerGenerator` — deadline-bound answer generation.
- :class:`ChatNodes` / :func:`build_graph` — compile the chat workflow.
- :func:`create_initial_state` — bootstrap the state dict for ``graph.ainvoke()``.
"""

from hr_rag.agent.generator import BUSY_FALLBACK, AnswerGenerator
from hr_rag.agent.graph import build_graph, create_initial_state
from hr_rag.agent.nodes import ChatNodes
from hr_rag.agent.router import classify
from hr_rag.agent.state import ChatState

__all__ = [
    "BUSY_FALLBACK",
    "AnswerGenerator",
    "ChatNodes",
    "ChatState",
    "build_graph",
    "classify",
    "create_initial_state",
]
