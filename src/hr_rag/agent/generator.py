"""Answer generation under a hard wall-clock budget.

The chat platform drops webhook calls that take longer than a few
seconds, so a slow model must never hold the reply.  The model call runs
as its own task and races the deadline:

* call finishes first → its answer is used;
* deadline fires first → the task is cancelled and abandoned, a canned
  "busy" message is returned, and whatever the task produces later is
  discarded by :func:`_discard_late_result`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from hr_rag.agent.prompts import build_answer_prompt
from hr_rag.errors import UpstreamError

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

    from hr_rag.retrieval.models import Bundle

logger = logging.getLogger(__name__)

BUSY_FALLBACK = "지금은 답변 생성이 지연되고 있어요. 잠시 후 다시 질문해 주세요."
EMPTY_ANSWER = "답변 생성 실패"


def _discard_late_result(task: asyncio.Task[Any]) -> None:
    """Done-callback for abandoned calls: consume the outcome, apply nothing."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Abandoned generation call failed late: %r", exc)
    else:
        logger.debug("Abandoned generation call finished late; result discarded")


class AnswerGenerator:
    """Builds the prompt and calls the chat model within ``timeout`` seconds.

    Parameters
    ----------
    llm:
        Any LangChain chat model exposing ``ainvoke``.
    timeout:
        Deadline in seconds for one call.
    max_chars_per_item:
        Per-context truncation used when rendering the prompt.
    """

    def __init__(self, llm: BaseChatModel, *, timeout: float = 4.5, max_chars_per_item: int = 500) -> None:
        self._llm = llm
        self.timeout = timeout
        self.max_chars_per_item = max_chars_per_item

    async def generate(self, user_text: str, bundles: list[Bundle]) -> str:
        """Return the model's answer, or :data:`BUSY_FALLBACK` on timeout.

        Raises
        ------
        UpstreamError
            When the model call itself fails before the deadline.
        """
        messages = build_answer_prompt(user_text, bundles, self.max_chars_per_item)
        task = asyncio.ensure_future(self._llm.ainvoke(messages))
        try:
            done, _ = await asyncio.wait({task}, timeout=self.timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if not done:
            task.cancel()
            task.add_done_callback(_discard_late_result)
            logger.warning("Generation exceeded %.1fs budget, returning fallback", self.timeout)
            return BUSY_FALLBACK

        try:
            response = task.result()
        except Exception as exc:
            raise UpstreamError(f"Answer generation failed: {exc}") from exc

        content = response.content if isinstance(response.content, str) else ""
        return content.strip() or EMPTY_ANSWER
