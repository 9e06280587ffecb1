"""Chat state definition — shared across all graph nodes."""

from __future__ import annotations

from typing import TypedDict

from hr_rag.retrieval.models import AgentMode, Bundle


class ChatState(TypedDict):
    """Typed state that flows through the chat workflow.

    Attributes
    ----------
    query:
        The user's utterance.
    user_id:
        Chat-platform user identifier (``"anon"`` when absent).
    mode:
        Routing decision made by the ``classify`` node.
    bundles:
        Context bundles gathered by the ``retrieve`` node.
    answer:
        Final reply text produced by the ``generate`` node.
    """

    query: str
    user_id: str
    mode: AgentMode | None
    bundles: list[Bundle]
    answer: str
