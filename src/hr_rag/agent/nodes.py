"""Graph nodes — each method is one step of the chat workflow.

Node contract
-------------
* Accepts the full :class:`ChatState` dict.
* Returns a *partial* dict with **only the keys that changed**.
* Uses only the capabilities injected into :class:`ChatNodes`; no hidden
  global state, so every node is testable with fakes.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable

from hr_rag.agent.router import classify
from hr_rag.agent.state import ChatState

if TYPE_CHECKING:
    from hr_rag.agent.generator import AnswerGenerator
    from hr_rag.retrieval.models import AgentMode
    from hr_rag.retrieval.retriever import SourceRetriever

logger = logging.getLogger(__name__)


class ChatNodes:
    """Binds the classifier, retriever and generator used by the graph.

    Parameters
    ----------
    retriever:
        Produces context bundles for a query and mode.
    generator:
        Produces the final answer from the query and bundles.
    classifier:
        Maps a query to an :class:`AgentMode`; defaults to the keyword
        router.
    """

    def __init__(
        self,
        retriever: SourceRetriever,
        generator: AnswerGenerator,
        classifier: Callable[[str], AgentMode] = classify,
    ) -> None:
        self.retriever = retriever
        self.generator = generator
        self.classifier = classifier

    # ── 1. CLASSIFY ───────────────────────────────────────────────────

    async def classify(self, state: ChatState) -> dict[str, Any]:
        mode = self.classifier(state["query"])
        logger.info("Routed query to %s", mode.value)
        return {"mode": mode}

    # ── 2. RETRIEVE ───────────────────────────────────────────────────

    async def retrieve(self, state: ChatState) -> dict[str, Any]:
        """Run the blocking store searches in a worker thread."""
        bundles = await asyncio.to_thread(self.retriever.retrieve, state["query"], state["mode"])
        logger.info(
            "Retrieved %s",
            ", ".join(f"{b.name}={len(b)}" for b in bundles),
        )
        return {"bundles": bundles}

    # ── 3. GENERATE ───────────────────────────────────────────────────

    async def generate(self, state: ChatState) -> dict[str, Any]:
        answer = await self.generator.generate(state["query"], state.get("bundles", []))
        return {"answer": answer}
