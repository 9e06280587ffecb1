"""LangGraph graph definition — the chat answering workflow.

This module wires the nodes of :class:`~hr_rag.agent.nodes.ChatNodes`
into a compiled :class:`StateGraph`:

1. **Classify** the utterance (company / law / mix).
2. **Retrieve** the context bundles for that mode.
3. **Generate** the answer under the generation deadline.

Secret verification and response formatting happen in the HTTP layer;
persisting the Q&A pair runs as a background task after the reply.
"""

from __future__ import annotations

from typing import Any

from langgraph.graph import END, StateGraph

from hr_rag.agent.nodes import ChatNodes
from hr_rag.agent.state import ChatState


def build_graph(nodes: ChatNodes) -> Any:
    """Construct and return the compiled workflow.

    Graph topology::

        [ START ] → classify → retrieve → generate → [ END ]

    Returns
    -------
    CompiledGraph
        A compiled LangGraph workflow ready for ``.ainvoke()``.
    """
    workflow = StateGraph(ChatState)

    workflow.add_node("classify", nodes.classify)
    workflow.add_node("retrieve", nodes.retrieve)
    workflow.add_node("generate", nodes.generate)

    workflow.set_entry_point("classify")
    workflow.add_edge("classify", "retrieve")
    workflow.add_edge("retrieve", "generate")
    workflow.add_edge("generate", END)

    return workflow.compile()


def create_initial_state(query: str, user_id: str = "anon") -> dict[str, Any]:
    """Build the initial state dict for ``graph.ainvoke()``.

    Usage::

        graph = build_graph(nodes)
        result = await graph.ainvoke(create_initial_state("연차는 며칠인가요?"))
        print(result["answer"])
    """
    return {
        "query": query,
        "user_id": user_id,
        "mode": None,
        "bundles": [],
        "answer": "",
    }
